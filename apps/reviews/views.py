from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from django.contrib.auth import get_user_model
from .models import Review
from .serializers import ReviewSerializer, ReviewWriteSerializer
from .services import ReviewService
from core.constants import Role
from core.exceptions import NotFound
from core.predicates import Actor
from core.store import DjangoStore
from core.utils import error_response

User = get_user_model()


class ReviewServiceMixin:
    def get_service(self):
        return ReviewService(store=DjangoStore())


class FreelancerReviewsView(APIView):
    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_description="Reviews received by a freelancer, newest first.",
        responses={200: ReviewSerializer(many=True), 404: error_response('Freelancer not found')}
    )
    def get(self, request, freelancer_id):
        if not User.objects.filter(pk=freelancer_id, role=Role.FREELANCER).exists():
            raise NotFound('Freelancer not found.')
        reviews = (
            Review.objects.select_related('job__client', 'freelancer')
            .filter(freelancer_id=freelancer_id)
            .order_by('-created_at')
        )
        return Response(ReviewSerializer(reviews, many=True).data)


class JobReviewCreateView(ReviewServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Review the freelancer of a completed job (the job's client only).",
        request_body=ReviewWriteSerializer,
        responses={
            201: ReviewSerializer,
            400: error_response('Invalid rating, job not completed or already reviewed'),
            401: 'Unauthorized',
            403: error_response('Forbidden'),
            404: error_response('Not Found')
        }
    )
    def post(self, request, job_id):
        serializer = ReviewWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = self.get_service().create_review(
            job_id, Actor.from_user(request.user), **serializer.validated_data
        )
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


class ReviewDetailView(ReviewServiceMixin, APIView):

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated()]

    @swagger_auto_schema(responses={200: ReviewSerializer, 404: error_response('Not Found')})
    def get(self, request, pk):
        review = self.get_service().get_review(pk)
        return Response(ReviewSerializer(review).data)

    @swagger_auto_schema(
        operation_description="Update the rating or comment (the job's client or an admin).",
        request_body=ReviewWriteSerializer,
        responses={
            200: ReviewSerializer,
            400: error_response('Invalid rating'),
            401: 'Unauthorized',
            403: error_response('Forbidden'),
            404: error_response('Not Found')
        }
    )
    def put(self, request, pk):
        serializer = ReviewWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        review = self.get_service().update_review(pk, Actor.from_user(request.user), **serializer.validated_data)
        return Response(ReviewSerializer(review).data)

    @swagger_auto_schema(
        operation_description="Delete a review (the job's client or an admin).",
        responses={204: 'No Content', 401: 'Unauthorized', 403: error_response('Forbidden'), 404: error_response('Not Found')}
    )
    def delete(self, request, pk):
        self.get_service().delete_review(pk, Actor.from_user(request.user))
        return Response(status=status.HTTP_204_NO_CONTENT)
