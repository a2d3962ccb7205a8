from rest_framework import exceptions, serializers
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from apps.jobs.models import Job
from apps.reviews.models import Review
from core.constants import Role

import logging

User = get_user_model()
logger = logging.getLogger(__name__)


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'avatar_url']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            'id', 'name', 'email', 'role', 'location', 'bio', 'phone_number',
            'services', 'avatar_url', 'balance', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'email', 'role', 'balance', 'created_at', 'updated_at']


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    # stored as the username as well
    email = serializers.EmailField(max_length=150)
    password = serializers.CharField(max_length=128, write_only=True, min_length=8)
    role = serializers.ChoiceField(choices=[Role.CLIENT, Role.FREELANCER], default=Role.CLIENT)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    bio = serializers.CharField(required=False, allow_blank=True, default='')
    phone_number = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    services = serializers.ListField(child=serializers.CharField(max_length=100), required=False, default=list)

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("This email is already in use.")
        return value

    def validate_password(self, value):
        validate_password(value)
        return value

    def create(self, validated_data):
        password = validated_data.pop('password')
        user = User(username=validated_data['email'], **validated_data)
        user.set_password(password)
        user.save()
        logger.info(f"Registered user {user.id} as {user.role}")
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, data):
        user = authenticate(username=data['email'].strip().lower(), password=data['password'])
        if user is None:
            raise exceptions.AuthenticationFailed("Invalid email or password.")
        data['user'] = user
        return data


class FreelancerSerializer(serializers.ModelSerializer):
    rating_stats = serializers.SerializerMethodField()
    completed_jobs = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'name', 'location', 'bio', 'services', 'avatar_url', 'rating_stats', 'completed_jobs']

    def get_rating_stats(self, obj):
        return obj.get_rating_stats()

    def get_completed_jobs(self, obj):
        return obj.completed_jobs_count


class JobSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Job
        fields = ['id', 'title', 'status']


class ReviewSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Review
        fields = ['id', 'rating', 'comment']


class ProfileSerializer(serializers.ModelSerializer):
    jobs_created = JobSummarySerializer(many=True, read_only=True)
    jobs_taken = JobSummarySerializer(many=True, read_only=True)
    reviews = ReviewSummarySerializer(many=True, read_only=True, source='reviews_received')

    class Meta:
        model = User
        fields = [
            'id', 'name', 'email', 'role', 'location', 'bio', 'services', 'avatar_url',
            'created_at', 'updated_at', 'jobs_created', 'jobs_taken', 'reviews'
        ]
