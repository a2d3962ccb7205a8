from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status, permissions
from rest_framework.authtoken.models import Token
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from django.contrib.auth import get_user_model
from .rules import check_manage_profile
from .serializers import (
    RegisterSerializer, LoginSerializer, UserSerializer, FreelancerSerializer, ProfileSerializer
)
from core.constants import Role
from core.exceptions import NotFound
from core.predicates import Actor
from core.utils import IsAdmin, error_response
import logging

User = get_user_model()
logger = logging.getLogger(__name__)

AUTH_RESPONSE = openapi.Response(
    description='Token and account',
    schema=openapi.Schema(
        type=openapi.TYPE_OBJECT,
        properties={
            'token': openapi.Schema(type=openapi.TYPE_STRING),
            'user': openapi.Schema(type=openapi.TYPE_OBJECT),
        }
    )
)


def _get_account(pk):
    user = User.objects.filter(pk=pk).first()
    if user is None:
        raise NotFound('User not found.')
    return user


class AuthRegisterView(APIView):
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(
        request_body=RegisterSerializer,
        responses={201: AUTH_RESPONSE, 400: error_response('Invalid input or email already in use')}
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        token, created = Token.objects.get_or_create(user=user)
        return Response(
            {"token": token.key, "user": UserSerializer(user).data},
            status=status.HTTP_201_CREATED
        )


class AuthLoginView(APIView):
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(
        request_body=LoginSerializer,
        responses={200: AUTH_RESPONSE, 400: error_response('Invalid input'), 401: error_response('Invalid credentials')}
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']
        token, created = Token.objects.get_or_create(user=user)
        logger.info(f"User {user.id} logged in")
        return Response({"token": token.key, "user": UserSerializer(user).data}, status=status.HTTP_200_OK)


class AuthLogoutView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(responses={204: 'No Content', 401: 'Unauthorized'})
    def post(self, request):
        Token.objects.filter(user=request.user).delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class AuthMeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(responses={200: UserSerializer, 401: 'Unauthorized'})
    def get(self, request):
        return Response(UserSerializer(request.user).data)


class UserListView(APIView):
    permission_classes = [IsAdmin]

    @swagger_auto_schema(
        operation_description="List every account (admins only).",
        responses={200: UserSerializer(many=True), 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def get(self, request):
        users = User.objects.order_by('id')
        return Response(UserSerializer(users, many=True).data)


class FreelancerListView(APIView):
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(
        operation_description="List freelancers with their rating statistics and completed jobs.",
        responses={200: FreelancerSerializer(many=True)}
    )
    def get(self, request):
        freelancers = User.objects.filter(role=Role.FREELANCER).order_by('id')
        return Response(FreelancerSerializer(freelancers, many=True).data)


class UserProfileView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        responses={200: ProfileSerializer, 401: 'Unauthorized', 404: error_response('Not Found')}
    )
    def get(self, request, pk):
        user = _get_account(pk)
        return Response(ProfileSerializer(user).data)

    @swagger_auto_schema(
        operation_description="Update a profile (the account itself or an admin). Role and balance are read-only.",
        request_body=UserSerializer,
        responses={
            200: UserSerializer,
            400: error_response('Invalid input'),
            401: 'Unauthorized',
            403: error_response('Forbidden'),
            404: error_response('Not Found')
        }
    )
    def put(self, request, pk):
        user = _get_account(pk)
        check_manage_profile(user.pk, Actor.from_user(request.user))
        serializer = UserSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info(f"Profile {user.pk} updated by user {request.user.pk}")
        return Response(serializer.data)

    @swagger_auto_schema(
        operation_description="Delete an account and everything it owns (the account itself or an admin).",
        responses={204: 'No Content', 401: 'Unauthorized', 403: error_response('Forbidden'), 404: error_response('Not Found')}
    )
    def delete(self, request, pk):
        user = _get_account(pk)
        check_manage_profile(user.pk, Actor.from_user(request.user))
        user.delete()
        logger.info(f"Account {pk} deleted by user {request.user.pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)
