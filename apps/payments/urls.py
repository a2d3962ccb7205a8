from django.urls import path
from .views import (
    PaymentListView, UserPaymentsView, PaymentDetailView, ProcessPaymentView, WithdrawBalanceView
)

urlpatterns = [
    path('', PaymentListView.as_view(), name='payment_list'),
    path('user/', UserPaymentsView.as_view(), name='user_payments'),
    path('withdraw/', WithdrawBalanceView.as_view(), name='withdraw_balance'),
    path('job/<int:job_id>/', ProcessPaymentView.as_view(), name='process_payment'),
    path('<int:pk>/', PaymentDetailView.as_view(), name='payment_detail'),
]
