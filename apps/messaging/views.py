from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from .serializers import MessageSerializer, MessageCreateSerializer
from .services import MessageService
from core.predicates import Actor
from core.store import DjangoStore
from core.utils import error_response


class MessageServiceMixin:
    def get_service(self):
        return MessageService(store=DjangoStore())


class JobMessagesView(MessageServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Messages of a job, oldest first (participants and admins).",
        responses={
            200: MessageSerializer(many=True),
            401: 'Unauthorized',
            403: error_response('Forbidden'),
            404: error_response('Not Found')
        }
    )
    def get(self, request, job_id):
        messages = self.get_service().list_messages(job_id, Actor.from_user(request.user))
        return Response(MessageSerializer(messages, many=True).data)

    @swagger_auto_schema(
        operation_description="Post a message on a job (participants and admins).",
        request_body=MessageCreateSerializer,
        responses={
            201: MessageSerializer,
            400: error_response('Empty message'),
            401: 'Unauthorized',
            403: error_response('Forbidden'),
            404: error_response('Not Found')
        }
    )
    def post(self, request, job_id):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message = self.get_service().post_message(
            job_id, Actor.from_user(request.user), serializer.validated_data['content']
        )
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


class MessageDeleteView(MessageServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Delete a message (its sender or an admin).",
        responses={204: 'No Content', 401: 'Unauthorized', 403: error_response('Forbidden'), 404: error_response('Not Found')}
    )
    def delete(self, request, pk):
        self.get_service().delete_message(pk, Actor.from_user(request.user))
        return Response(status=status.HTTP_204_NO_CONTENT)
