import logging

from core.exceptions import Conflict, InsufficientFunds, NotFound
from apps.payments import rules

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(self, store, payment_method='simulated'):
        self.store = store
        self.payment_method = payment_method

    def get_payment(self, payment_id, actor):
        payment = self.store.get_payment(payment_id)
        if payment is None:
            raise NotFound('Payment not found.')
        rules.check_view_payment(payment, actor)
        return payment

    def process_payment(self, job_id, actor):
        job = self.store.get_job(job_id)
        if job is None:
            raise NotFound('Job not found.')
        amount = rules.check_create_payment(job, actor, self.store.has_payment(job.pk))
        # The pre-check above is advisory; the unique job index decides races
        payment = self.store.create_payment(job, amount, self.payment_method)
        if payment is None:
            raise Conflict('This job has already been paid.')
        logger.info(f"Payment {payment.pk} of {amount} credited to freelancer {job.freelancer_id} for job {job.pk}")
        return payment

    def withdraw(self, actor, amount):
        """Returns the balance left after withdrawing ``amount``."""
        rules.check_withdraw(actor, amount)
        if self.store.get_account(actor.id) is None:
            raise NotFound('User not found.')
        balance = self.store.debit_account(actor.id, amount)
        if balance is None:
            raise InsufficientFunds('Insufficient balance.')
        logger.info(f"User {actor.id} withdrew {amount}, balance now {balance}")
        return balance
