"""In-memory ``MarketplaceStore`` for exercising services without a database."""
from contextlib import contextmanager
from copy import copy
from dataclasses import dataclass, field
from decimal import Decimal
from itertools import count
from typing import Optional

from core.constants import JobStatus, PaymentStatus, Role
from core.store import MarketplaceStore


@dataclass
class FakeAccount:
    pk: int
    role: Role
    balance: Decimal = Decimal('0.00')


@dataclass
class FakeJob:
    pk: int
    client_id: int
    budget: Decimal
    status: JobStatus = JobStatus.PENDING
    freelancer_id: Optional[int] = None
    title: str = ''
    description: str = ''
    category: str = ''
    location: str = ''
    deadline: object = None


@dataclass
class FakePayment:
    pk: int
    job: FakeJob
    amount: Decimal
    method: str
    status: PaymentStatus = PaymentStatus.COMPLETED


@dataclass
class FakeReview:
    pk: int
    job: FakeJob
    freelancer_id: int
    rating: int
    comment: Optional[str] = None


@dataclass
class FakeMessage:
    pk: int
    job_id: int
    sender_id: int
    content: str


@dataclass
class InMemoryStore(MarketplaceStore):
    accounts: dict = field(default_factory=dict)
    jobs: dict = field(default_factory=dict)
    payments: dict = field(default_factory=dict)
    reviews: dict = field(default_factory=dict)
    messages: dict = field(default_factory=dict)

    def __post_init__(self):
        self._ids = count(1)

    def add_account(self, role, balance='0.00'):
        account = FakeAccount(pk=next(self._ids), role=role, balance=Decimal(balance))
        self.accounts[account.pk] = account
        return account

    def add_job(self, client, budget='100.00', status=JobStatus.PENDING, freelancer=None):
        job = FakeJob(
            pk=next(self._ids), client_id=client.pk, budget=Decimal(budget), status=status,
            freelancer_id=freelancer.pk if freelancer else None,
        )
        self.jobs[job.pk] = job
        return job

    @contextmanager
    def atomic(self):
        snapshot = {
            name: {pk: copy(obj) for pk, obj in getattr(self, name).items()}
            for name in ('accounts', 'jobs', 'payments', 'reviews', 'messages')
        }
        try:
            yield
        except Exception:
            for name, rows in snapshot.items():
                setattr(self, name, rows)
            raise

    def get_account(self, account_id):
        return self.accounts.get(account_id)

    def debit_account(self, account_id, amount):
        account = self.accounts[account_id]
        if account.balance < amount:
            return None
        account.balance -= amount
        return account.balance

    def get_job(self, job_id):
        job = self.jobs.get(job_id)
        return copy(job) if job else None

    def create_job(self, client_id, **fields):
        job = FakeJob(pk=next(self._ids), client_id=client_id, **fields)
        self.jobs[job.pk] = job
        return copy(job)

    def update_job(self, job, **fields):
        stored = self.jobs[job.pk]
        for attr, value in fields.items():
            setattr(stored, attr, value)
        return copy(stored)

    def delete_job(self, job):
        self.jobs.pop(job.pk)
        self.messages = {pk: m for pk, m in self.messages.items() if m.job_id != job.pk}
        self.reviews = {pk: r for pk, r in self.reviews.items() if r.job.pk != job.pk}
        self.payments = {pk: p for pk, p in self.payments.items() if p.job.pk != job.pk}

    def transition_job(self, job_id, from_statuses, to_status, **changes):
        stored = self.jobs.get(job_id)
        if stored is None or stored.status not in from_statuses:
            return None
        stored.status = to_status
        for attr, value in changes.items():
            setattr(stored, attr, value)
        return copy(stored)

    def get_payment(self, payment_id):
        return self.payments.get(payment_id)

    def has_payment(self, job_id):
        return any(p.job.pk == job_id for p in self.payments.values())

    def create_payment(self, job, amount, method):
        # Unique job index: checked against the rows, not through has_payment
        if any(p.job.pk == job.pk for p in self.payments.values()):
            return None
        payment = FakePayment(pk=next(self._ids), job=job, amount=amount, method=method)
        self.payments[payment.pk] = payment
        self.accounts[job.freelancer_id].balance += amount
        return payment

    def get_review(self, review_id):
        return self.reviews.get(review_id)

    def has_review(self, job_id):
        return any(r.job.pk == job_id for r in self.reviews.values())

    def create_review(self, job, rating, comment):
        if any(r.job.pk == job.pk for r in self.reviews.values()):
            return None
        review = FakeReview(
            pk=next(self._ids), job=job, freelancer_id=job.freelancer_id, rating=rating, comment=comment
        )
        self.reviews[review.pk] = review
        return review

    def update_review(self, review, **fields):
        for attr, value in fields.items():
            setattr(review, attr, value)
        return review

    def delete_review(self, review):
        self.reviews.pop(review.pk)

    def list_messages(self, job_id):
        return [m for m in self.messages.values() if m.job_id == job_id]

    def get_message(self, message_id):
        return self.messages.get(message_id)

    def create_message(self, job, sender_id, content):
        message = FakeMessage(pk=next(self._ids), job_id=job.pk, sender_id=sender_id, content=content)
        self.messages[message.pk] = message
        return message

    def delete_message(self, message):
        self.messages.pop(message.pk)
