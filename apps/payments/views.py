from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from django.conf import settings
from django.db.models import Q
from .models import Payment
from .serializers import PaymentSerializer, WithdrawSerializer
from .services import PaymentService
from core.predicates import Actor
from core.store import DjangoStore
from core.utils import IsAdmin, error_response


class PaymentServiceMixin:
    def get_service(self):
        return PaymentService(store=DjangoStore(), payment_method=settings.PAYMENT_METHOD)


def _payment_queryset():
    return Payment.objects.select_related('job__client', 'job__freelancer').order_by('-created_at')


class PaymentListView(APIView):
    permission_classes = [IsAdmin]

    @swagger_auto_schema(
        operation_description="List every payment (admins only).",
        responses={200: PaymentSerializer(many=True), 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def get(self, request):
        return Response(PaymentSerializer(_payment_queryset(), many=True).data)


class UserPaymentsView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Payments the caller made as client or received as freelancer; admins see all.",
        responses={200: PaymentSerializer(many=True), 401: 'Unauthorized'}
    )
    def get(self, request):
        actor = Actor.from_user(request.user)
        payments = _payment_queryset()
        if actor.is_client:
            payments = payments.filter(job__client_id=actor.id)
        elif actor.is_freelancer:
            payments = payments.filter(job__freelancer_id=actor.id)
        elif not actor.is_admin:
            payments = payments.filter(Q(job__client_id=actor.id) | Q(job__freelancer_id=actor.id))
        return Response(PaymentSerializer(payments, many=True).data)


class PaymentDetailView(PaymentServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        responses={200: PaymentSerializer, 401: 'Unauthorized', 403: error_response('Forbidden'), 404: error_response('Not Found')}
    )
    def get(self, request, pk):
        payment = self.get_service().get_payment(pk, Actor.from_user(request.user))
        return Response(PaymentSerializer(payment).data)


class ProcessPaymentView(PaymentServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Pay the budget of a completed job to its freelancer (the client or an admin).",
        responses={
            201: PaymentSerializer,
            400: error_response('Job not completed or already paid'),
            401: 'Unauthorized',
            403: error_response('Forbidden'),
            404: error_response('Not Found')
        }
    )
    def post(self, request, job_id):
        payment = self.get_service().process_payment(job_id, Actor.from_user(request.user))
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


class WithdrawBalanceView(PaymentServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Withdraw from the freelancer balance.",
        request_body=WithdrawSerializer,
        responses={
            200: openapi.Response(
                description='Withdrawal successful',
                schema=openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        'message': openapi.Schema(type=openapi.TYPE_STRING),
                        'balance': openapi.Schema(type=openapi.TYPE_STRING),
                        'amount': openapi.Schema(type=openapi.TYPE_STRING),
                    }
                )
            ),
            400: error_response('Invalid amount or insufficient balance'),
            401: 'Unauthorized',
            403: error_response('Forbidden')
        }
    )
    def post(self, request):
        serializer = WithdrawSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        amount = serializer.validated_data['amount']
        balance = self.get_service().withdraw(Actor.from_user(request.user), amount)
        return Response({
            "message": "Withdrawal successful",
            "balance": str(balance),
            "amount": str(amount),
        }, status=status.HTTP_200_OK)
