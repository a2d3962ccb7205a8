from django.db import models
from django.conf import settings
from apps.jobs.models import Job
from core.constants import MIN_RATING, MAX_RATING


class Review(models.Model):
    job = models.OneToOneField(Job, on_delete=models.CASCADE, related_name='review')
    freelancer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews_received')
    rating = models.PositiveSmallIntegerField(choices=[(i, i) for i in range(MIN_RATING, MAX_RATING + 1)])  # 1 to 5 stars
    comment = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=MIN_RATING, rating__lte=MAX_RATING), name='review_rating_range'
            ),
        ]

    def __str__(self):
        return f"Review for {self.freelancer.username} on {self.job.title} ({self.rating}/5)"
