"""Conditional writes of ``DjangoStore`` under interleaved, stale and concurrent requests."""
import threading
from decimal import Decimal

import pytest
from django.db import connections

from apps.jobs.services import JobService
from apps.payments.models import Payment
from apps.payments.services import PaymentService
from apps.reviews.services import ReviewService
from core.constants import JobStatus, Role
from core.exceptions import Conflict, InsufficientFunds, InvalidState
from core.predicates import Actor
from core.store import DjangoStore

pytestmark = pytest.mark.django_db


class StaleStore(DjangoStore):
    """Answers the advisory existence checks as if no other request had written yet."""

    def has_payment(self, job_id):
        return False

    def has_review(self, job_id):
        return False


def test_double_payment_credits_once(client_user, freelancer, make_job):
    job = make_job(client_user, budget='1000.00', status=JobStatus.COMPLETED, freelancer=freelancer)
    service = PaymentService(StaleStore())
    actor = Actor.from_user(client_user)

    outcomes = []
    for _ in range(5):
        try:
            service.process_payment(job.id, actor)
            outcomes.append('paid')
        except Conflict:
            outcomes.append('conflict')

    assert outcomes == ['paid'] + ['conflict'] * 4
    assert Payment.objects.filter(job=job).count() == 1
    freelancer.refresh_from_db()
    assert freelancer.balance == Decimal('1000.00')


def test_duplicate_review_is_rejected_by_the_store(client_user, freelancer, make_job):
    job = make_job(client_user, status=JobStatus.COMPLETED, freelancer=freelancer)
    service = ReviewService(StaleStore())
    actor = Actor.from_user(client_user)
    service.create_review(job.id, actor, 5)
    with pytest.raises(Conflict):
        service.create_review(job.id, actor, 1)


def test_withdrawals_stop_at_zero(make_user):
    account = make_user(Role.FREELANCER, balance='100.00')
    service = PaymentService(DjangoStore())
    actor = Actor.from_user(account)

    succeeded = []
    for amount in ('30', '30', '30', '30'):
        try:
            service.withdraw(actor, Decimal(amount))
            succeeded.append(amount)
        except InsufficientFunds:
            pass

    assert succeeded == ['30', '30', '30']
    account.refresh_from_db()
    assert account.balance == Decimal('10.00')


def test_debit_is_conditional_on_current_balance(make_user):
    account = make_user(Role.FREELANCER, balance='50.00')
    store = DjangoStore()
    # A request that read the balance as 50 must not overdraw after another debit landed
    assert store.debit_account(account.id, Decimal('40')) == Decimal('10.00')
    assert store.debit_account(account.id, Decimal('40')) is None
    account.refresh_from_db()
    assert account.balance == Decimal('10.00')


def test_stale_complete_does_not_pay_twice(client_user, freelancer, make_job):
    job = make_job(client_user, budget='250.00', status=JobStatus.ACCEPTED, freelancer=freelancer)
    store = DjangoStore()
    stale = store.get_job(job.id)
    service = JobService(store)
    service.complete_job(job.id, Actor.from_user(client_user))

    store.get_job = lambda job_id: stale
    with pytest.raises(InvalidState):
        service.complete_job(job.id, Actor.from_user(client_user))

    freelancer.refresh_from_db()
    assert freelancer.balance == Decimal('250.00')
    assert Payment.objects.filter(job=job).count() == 1


def test_stale_cancel_cannot_undo_completion(client_user, freelancer, make_job):
    job = make_job(client_user, status=JobStatus.ACCEPTED, freelancer=freelancer)
    store = DjangoStore()
    stale = store.get_job(job.id)
    JobService(store).complete_job(job.id, Actor.from_user(client_user))

    store.get_job = lambda job_id: stale
    with pytest.raises(InvalidState):
        JobService(store).cancel_job(job.id, Actor.from_user(freelancer))
    job.refresh_from_db()
    assert job.status == JobStatus.COMPLETED


def run_concurrently(calls):
    """Start every call on its own thread at the same moment; returns each result or raised error."""
    barrier = threading.Barrier(len(calls))
    outcomes = [None] * len(calls)

    def worker(index, call):
        try:
            barrier.wait()
            outcomes[index] = call()
        except Exception as exc:
            outcomes[index] = exc
        finally:
            connections.close_all()

    threads = [threading.Thread(target=worker, args=(index, call)) for index, call in enumerate(calls)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return outcomes


@pytest.mark.django_db(transaction=True)
def test_concurrent_withdrawals_never_overdraw(make_user):
    account = make_user(Role.FREELANCER, balance='100.00')
    actor = Actor.from_user(account)

    def withdraw():
        return PaymentService(DjangoStore()).withdraw(actor, Decimal('30'))

    outcomes = run_concurrently([withdraw] * 5)

    balances = sorted(outcome for outcome in outcomes if isinstance(outcome, Decimal))
    refused = [outcome for outcome in outcomes if isinstance(outcome, InsufficientFunds)]
    assert balances == [Decimal('10.00'), Decimal('40.00'), Decimal('70.00')], outcomes
    assert len(refused) == 2, outcomes
    account.refresh_from_db()
    assert account.balance == Decimal('10.00')


@pytest.mark.django_db(transaction=True)
def test_concurrent_payments_credit_once(client_user, freelancer, make_job):
    job = make_job(client_user, budget='1000.00', status=JobStatus.COMPLETED, freelancer=freelancer)
    actor = Actor.from_user(client_user)

    def pay():
        return PaymentService(StaleStore()).process_payment(job.id, actor)

    outcomes = run_concurrently([pay] * 5)

    paid = [outcome for outcome in outcomes if isinstance(outcome, Payment)]
    conflicts = [outcome for outcome in outcomes if isinstance(outcome, Conflict)]
    assert len(paid) == 1, outcomes
    assert len(conflicts) == 4, outcomes
    assert Payment.objects.filter(job=job).count() == 1
    freelancer.refresh_from_db()
    assert freelancer.balance == Decimal('1000.00')
