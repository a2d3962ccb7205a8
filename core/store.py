"""
Persistence port used by the rule services.

Services never touch the ORM directly. They receive a ``MarketplaceStore`` at
construction and ask it for entities and for the few writes that must be
atomic: status compare-and-set on a job, one-payment-per-job with the matching
balance credit, one-review-per-job, and a balance debit that cannot overdraw.
"""
from abc import ABC, abstractmethod

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from apps.jobs.models import Job
from apps.messaging.models import Message
from apps.payments.models import Payment
from apps.reviews.models import Review
from apps.users.models import User
from core.constants import PaymentStatus


class MarketplaceStore(ABC):

    @abstractmethod
    def atomic(self):
        """Context manager grouping several writes into one transaction."""

    # Accounts

    @abstractmethod
    def get_account(self, account_id): ...

    @abstractmethod
    def debit_account(self, account_id, amount):
        """Subtract ``amount`` if the balance covers it.

        Returns the new balance, or ``None`` when funds are insufficient.
        """

    # Jobs

    @abstractmethod
    def get_job(self, job_id): ...

    @abstractmethod
    def create_job(self, client_id, **fields): ...

    @abstractmethod
    def update_job(self, job, **fields): ...

    @abstractmethod
    def delete_job(self, job): ...

    @abstractmethod
    def transition_job(self, job_id, from_statuses, to_status, **changes):
        """Move the job to ``to_status`` only if it is still in ``from_statuses``.

        Returns the refreshed job, or ``None`` if the job was no longer in one
        of the expected statuses.
        """

    # Payments

    @abstractmethod
    def get_payment(self, payment_id): ...

    @abstractmethod
    def has_payment(self, job_id): ...

    @abstractmethod
    def create_payment(self, job, amount, method):
        """Record the job's payment and credit its freelancer with ``amount``.

        Returns ``None`` if the job already has a payment.
        """

    # Reviews

    @abstractmethod
    def get_review(self, review_id): ...

    @abstractmethod
    def has_review(self, job_id): ...

    @abstractmethod
    def create_review(self, job, rating, comment):
        """Returns ``None`` if the job already has a review."""

    @abstractmethod
    def update_review(self, review, **fields): ...

    @abstractmethod
    def delete_review(self, review): ...

    # Messages

    @abstractmethod
    def list_messages(self, job_id): ...

    @abstractmethod
    def get_message(self, message_id): ...

    @abstractmethod
    def create_message(self, job, sender_id, content): ...

    @abstractmethod
    def delete_message(self, message): ...


class DjangoStore(MarketplaceStore):
    """``MarketplaceStore`` backed by the Django ORM."""

    def atomic(self):
        return transaction.atomic()

    def get_account(self, account_id):
        return User.objects.filter(pk=account_id).first()

    def debit_account(self, account_id, amount):
        with transaction.atomic():
            updated = User.objects.filter(pk=account_id, balance__gte=amount).update(
                balance=F('balance') - amount
            )
            if not updated:
                return None
            return User.objects.values_list('balance', flat=True).get(pk=account_id)

    def get_job(self, job_id):
        return Job.objects.select_related('client', 'freelancer').filter(pk=job_id).first()

    def create_job(self, client_id, **fields):
        return Job.objects.create(client_id=client_id, **fields)

    def update_job(self, job, **fields):
        for attr, value in fields.items():
            setattr(job, attr, value)
        job.save()
        return job

    def delete_job(self, job):
        job.delete()

    def transition_job(self, job_id, from_statuses, to_status, **changes):
        updated = Job.objects.filter(pk=job_id, status__in=from_statuses).update(
            status=to_status, updated_at=timezone.now(), **changes
        )
        if not updated:
            return None
        return self.get_job(job_id)

    def get_payment(self, payment_id):
        return Payment.objects.select_related('job').filter(pk=payment_id).first()

    def has_payment(self, job_id):
        return Payment.objects.filter(job_id=job_id).exists()

    def create_payment(self, job, amount, method):
        try:
            with transaction.atomic():
                payment = Payment.objects.create(
                    job=job, amount=amount, status=PaymentStatus.COMPLETED, method=method
                )
                User.objects.filter(pk=job.freelancer_id).update(balance=F('balance') + amount)
        except IntegrityError:
            return None
        return payment

    def get_review(self, review_id):
        return Review.objects.select_related('job', 'freelancer').filter(pk=review_id).first()

    def has_review(self, job_id):
        return Review.objects.filter(job_id=job_id).exists()

    def create_review(self, job, rating, comment):
        try:
            with transaction.atomic():
                return Review.objects.create(
                    job=job, freelancer_id=job.freelancer_id, rating=rating, comment=comment
                )
        except IntegrityError:
            return None

    def update_review(self, review, **fields):
        for attr, value in fields.items():
            setattr(review, attr, value)
        review.save()
        return review

    def delete_review(self, review):
        review.delete()

    def list_messages(self, job_id):
        return Message.objects.select_related('sender').filter(job_id=job_id)

    def get_message(self, message_id):
        return Message.objects.filter(pk=message_id).first()

    def create_message(self, job, sender_id, content):
        return Message.objects.create(job=job, sender_id=sender_id, content=content)

    def delete_message(self, message):
        message.delete()
