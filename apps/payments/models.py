from django.db import models
from apps.jobs.models import Job
from core.constants import PaymentStatus, MONEY_MAX_DIGITS, MONEY_DECIMAL_PLACES


class Payment(models.Model):
    # One payment per job; the unique index is what rejects a second payment
    job = models.OneToOneField(Job, on_delete=models.CASCADE, related_name='payment')
    amount = models.DecimalField(max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES)
    status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.COMPLETED)
    method = models.CharField(max_length=50, default='simulated')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"Payment of {self.amount} for Job {self.job.title}"
