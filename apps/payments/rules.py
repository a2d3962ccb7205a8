"""Payment ledger rule: who may pay a job, and who may withdraw how much."""
from core.constants import JobStatus
from core.exceptions import Conflict, Forbidden, InvalidState, ValidationError
from core.predicates import is_admin_or_owner, is_admin_or_participant


def check_create_payment(job, actor, already_paid):
    """Returns the amount to pay the job's freelancer."""
    if not is_admin_or_owner(actor, job):
        raise Forbidden('Only the client can process the payment.')
    if job.status != JobStatus.COMPLETED:
        raise InvalidState('The job must be completed before processing the payment.')
    if job.freelancer_id is None:
        raise InvalidState('The job has no freelancer to pay.')
    if already_paid:
        raise Conflict('This job has already been paid.')
    return job.budget


def check_withdraw(actor, amount):
    if not actor.is_freelancer:
        raise Forbidden('Only freelancers can withdraw balance.')
    if amount is None or amount <= 0:
        raise ValidationError('Amount must be greater than zero.')


def check_view_payment(payment, actor):
    if not is_admin_or_participant(actor, payment.job):
        raise Forbidden('Not authorized to view this payment.')
