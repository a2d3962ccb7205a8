from rest_framework import serializers
from .models import Payment
from apps.users.serializers import UserSummarySerializer
from core.constants import MONEY_MAX_DIGITS, MONEY_DECIMAL_PLACES


class PaymentJobSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    title = serializers.CharField()
    client = UserSummarySerializer()
    freelancer = UserSummarySerializer(allow_null=True)


class PaymentSerializer(serializers.ModelSerializer):
    job = PaymentJobSerializer(read_only=True)

    class Meta:
        model = Payment
        fields = ['id', 'job', 'amount', 'status', 'method', 'created_at']
        read_only_fields = fields


class WithdrawSerializer(serializers.Serializer):
    """Parses the amount; the positive check belongs to the ledger rule."""
    amount = serializers.DecimalField(max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES)
