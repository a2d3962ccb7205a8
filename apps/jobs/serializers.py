from rest_framework import serializers
from .models import Job
from apps.messaging.serializers import MessageSerializer
from apps.payments.models import Payment
from apps.reviews.models import Review
from apps.users.serializers import UserSummarySerializer
from core.constants import MONEY_MAX_DIGITS, MONEY_DECIMAL_PLACES
from core.predicates import is_admin_or_participant


class JobSerializer(serializers.ModelSerializer):
    client = UserSummarySerializer(read_only=True)
    freelancer = UserSummarySerializer(read_only=True)

    class Meta:
        model = Job
        fields = [
            'id', 'title', 'description', 'category', 'location', 'budget', 'deadline',
            'status', 'client', 'freelancer', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class JobWriteSerializer(serializers.Serializer):
    """Parses job input; budget bounds are enforced by the lifecycle rules."""
    title = serializers.CharField(max_length=200)
    description = serializers.CharField()
    category = serializers.CharField(max_length=100, required=False, allow_blank=True)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True)
    budget = serializers.DecimalField(max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES)
    deadline = serializers.DateField(required=False, allow_null=True)


class JobReviewSerializer(serializers.ModelSerializer):
    class Meta:
        model = Review
        fields = ['id', 'rating', 'comment', 'created_at']


class JobPaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = ['id', 'amount', 'status', 'method', 'created_at']


class JobDetailSerializer(JobSerializer):
    """
    Job with its review and payment. The message thread is included only when
    the ``actor`` in the serializer context is a participant or an admin.
    """
    messages = serializers.SerializerMethodField()
    review = serializers.SerializerMethodField()
    payment = serializers.SerializerMethodField()

    class Meta(JobSerializer.Meta):
        fields = JobSerializer.Meta.fields + ['messages', 'review', 'payment']
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if data['messages'] is None:
            data.pop('messages')
        return data

    def get_messages(self, obj):
        actor = self.context.get('actor')
        if actor is None or not is_admin_or_participant(actor, obj):
            return None
        return MessageSerializer(obj.messages.all(), many=True).data

    def get_review(self, obj):
        review = Review.objects.filter(job=obj).first()
        return JobReviewSerializer(review).data if review else None

    def get_payment(self, obj):
        payment = Payment.objects.filter(job=obj).first()
        return JobPaymentSerializer(payment).data if payment else None
