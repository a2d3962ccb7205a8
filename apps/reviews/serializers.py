from rest_framework import serializers
from .models import Review
from apps.users.serializers import UserSummarySerializer


class ReviewJobSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    title = serializers.CharField()
    client = UserSummarySerializer()


class ReviewSerializer(serializers.ModelSerializer):
    job = ReviewJobSerializer(read_only=True)
    freelancer = UserSummarySerializer(read_only=True)

    class Meta:
        model = Review
        fields = ['id', 'job', 'freelancer', 'rating', 'comment', 'created_at', 'updated_at']
        read_only_fields = fields


class ReviewWriteSerializer(serializers.Serializer):
    """Parses review input; the 1-5 range is enforced by the eligibility rule."""
    rating = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, allow_null=True)
