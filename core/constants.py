# core/constants.py
from django.db import models


class Role(models.TextChoices):
    CLIENT = 'CLIENT', 'Client'              # Posts jobs and pays for them
    FREELANCER = 'FREELANCER', 'Freelancer'  # Accepts jobs and withdraws earnings
    ADMIN = 'ADMIN', 'Admin'                 # Acts on behalf of any participant


class JobStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'        # Initial state, open for freelancers
    ACCEPTED = 'ACCEPTED', 'Accepted'     # A freelancer has taken the job
    COMPLETED = 'COMPLETED', 'Completed'  # Client confirmed delivery, payment issued
    CANCELLED = 'CANCELLED', 'Cancelled'  # Job was called off


class PaymentStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    COMPLETED = 'COMPLETED', 'Completed'
    FAILED = 'FAILED', 'Failed'


# Statuses from which a job may still be cancelled. Cancelling an already
# cancelled job leaves it untouched.
CANCELLABLE_STATUSES = (JobStatus.PENDING, JobStatus.ACCEPTED, JobStatus.CANCELLED)

MIN_RATING = 1
MAX_RATING = 5

MONEY_MAX_DIGITS = 12
MONEY_DECIMAL_PLACES = 2
