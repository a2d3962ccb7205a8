from decimal import Decimal

from django.db import models
from django.contrib.auth.models import AbstractUser
from core.constants import Role, JobStatus, MONEY_MAX_DIGITS, MONEY_DECIMAL_PLACES


class User(AbstractUser):
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.CLIENT)
    balance = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES, default=Decimal('0.00')
    )
    location = models.CharField(max_length=200, blank=True)
    bio = models.TextField(blank=True)
    phone_number = models.CharField(max_length=20, blank=True)
    services = models.JSONField(default=list, blank=True)
    avatar_url = models.URLField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=models.Q(balance__gte=0), name='user_balance_non_negative'
            ),
        ]

    def __str__(self):
        return f"{self.name or self.username} ({self.role})"

    @property
    def is_client(self):
        return self.role == Role.CLIENT

    @property
    def is_freelancer(self):
        return self.role == Role.FREELANCER

    @property
    def completed_jobs_count(self):
        return self.jobs_taken.filter(status=JobStatus.COMPLETED).count()

    def get_rating_stats(self):
        """Rating statistics computed from the reviews received as freelancer."""
        stats = {
            'average_rating': 0.0,
            'total_ratings': 0,
            'rating_breakdown': {
                '5_star': 0,
                '4_star': 0,
                '3_star': 0,
                '2_star': 0,
                '1_star': 0
            }
        }

        all_ratings = list(self.reviews_received.values_list('rating', flat=True))
        if all_ratings:
            stats['total_ratings'] = len(all_ratings)
            stats['average_rating'] = round(sum(all_ratings) / len(all_ratings), 1)

            for rating in all_ratings:
                stats['rating_breakdown'][f'{rating}_star'] += 1

            # Convert to percentages
            for key in stats['rating_breakdown']:
                stats['rating_breakdown'][key] = round(
                    (stats['rating_breakdown'][key] / stats['total_ratings']) * 100, 1
                )

        return stats
