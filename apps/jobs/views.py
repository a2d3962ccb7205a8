from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from django.conf import settings
from django.db.models import Q
from .models import Job
from .serializers import JobSerializer, JobWriteSerializer, JobDetailSerializer
from .services import JobService
from core.constants import JobStatus
from core.predicates import Actor
from core.store import DjangoStore
from core.utils import error_response


class JobServiceMixin:
    def get_service(self):
        return JobService(store=DjangoStore(), payment_method=settings.PAYMENT_METHOD)


def _job_queryset():
    return Job.objects.select_related('client', 'freelancer')


class JobListCreateView(JobServiceMixin, APIView):

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated()]

    @swagger_auto_schema(
        operation_description="List jobs, newest first.",
        manual_parameters=[
            openapi.Parameter('status', openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=JobStatus.values),
            openapi.Parameter('category', openapi.IN_QUERY, type=openapi.TYPE_STRING),
        ],
        responses={200: JobSerializer(many=True)}
    )
    def get(self, request):
        jobs = _job_queryset()
        job_status = request.query_params.get('status')
        category = request.query_params.get('category')
        if job_status:
            jobs = jobs.filter(status=job_status)
        if category:
            jobs = jobs.filter(category=category)
        serializer = JobSerializer(jobs, many=True)
        return Response(serializer.data)

    @swagger_auto_schema(
        operation_description="Create a new job (clients and admins).",
        request_body=JobWriteSerializer,
        responses={
            201: JobSerializer,
            400: error_response('Invalid input'),
            401: 'Unauthorized',
            403: error_response('Forbidden')
        }
    )
    def post(self, request):
        serializer = JobWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job = self.get_service().create_job(Actor.from_user(request.user), **serializer.validated_data)
        return Response(JobSerializer(job).data, status=status.HTTP_201_CREATED)


class JobDetailView(JobServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Retrieve a job with its review and payment. Participants and admins also get the message thread.",
        responses={200: JobDetailSerializer, 401: 'Unauthorized', 404: error_response('Not Found')}
    )
    def get(self, request, pk):
        job = self.get_service().get_job(pk)
        serializer = JobDetailSerializer(job, context={'actor': Actor.from_user(request.user)})
        return Response(serializer.data)

    @swagger_auto_schema(
        operation_description="Update a job (owner or admin).",
        request_body=JobWriteSerializer,
        responses={
            200: JobSerializer,
            400: error_response('Invalid input'),
            401: 'Unauthorized',
            403: error_response('Forbidden'),
            404: error_response('Not Found')
        }
    )
    def put(self, request, pk):
        serializer = JobWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        job = self.get_service().update_job(pk, Actor.from_user(request.user), **serializer.validated_data)
        return Response(JobSerializer(job).data)

    @swagger_auto_schema(
        operation_description="Delete a job and everything attached to it (owner or admin).",
        responses={204: 'No Content', 401: 'Unauthorized', 403: error_response('Forbidden'), 404: error_response('Not Found')}
    )
    def delete(self, request, pk):
        self.get_service().delete_job(pk, Actor.from_user(request.user))
        return Response(status=status.HTTP_204_NO_CONTENT)


class JobTransitionView(JobServiceMixin, APIView):
    """Drives one lifecycle transition: ``accept``, ``complete`` or ``cancel``."""
    permission_classes = [IsAuthenticated]
    transition = None

    @swagger_auto_schema(
        operation_description="Accept (freelancer), complete (client/admin) or cancel (participant/admin) a job.",
        responses={
            200: JobSerializer,
            400: error_response('Job is not in the required status'),
            401: 'Unauthorized',
            403: error_response('Forbidden'),
            404: error_response('Not Found')
        }
    )
    def put(self, request, pk):
        service = self.get_service()
        handler = getattr(service, f'{self.transition}_job')
        job = handler(pk, Actor.from_user(request.user))
        return Response(JobSerializer(job).data)


class UserJobsView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="List jobs where the given user is the client or the freelancer.",
        responses={200: JobSerializer(many=True), 401: 'Unauthorized'}
    )
    def get(self, request, user_id):
        jobs = _job_queryset().filter(Q(client_id=user_id) | Q(freelancer_id=user_id))
        return Response(JobSerializer(jobs, many=True).data)


class MyCreatedJobsView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="List jobs created by the authenticated user.",
        responses={200: JobSerializer(many=True), 401: 'Unauthorized'}
    )
    def get(self, request):
        jobs = _job_queryset().filter(client=request.user)
        return Response(JobSerializer(jobs, many=True).data)


class MyAcceptedJobsView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="List jobs accepted by the authenticated freelancer.",
        responses={200: JobSerializer(many=True), 401: 'Unauthorized'}
    )
    def get(self, request):
        jobs = _job_queryset().filter(freelancer=request.user)
        return Response(JobSerializer(jobs, many=True).data)
