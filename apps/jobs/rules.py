"""
Job lifecycle guard.

    PENDING --accept--> ACCEPTED --complete--> COMPLETED
       |                    |
       +------cancel--------+----------------> CANCELLED

Every check takes the job as currently stored and the calling ``Actor``. It
either raises one of the ``core.exceptions`` kinds or returns the status the
job moves to. Accept and complete check the status before the actor;
cancel checks the actor first.
"""
from core.constants import CANCELLABLE_STATUSES, JobStatus
from core.exceptions import Forbidden, InvalidState, ValidationError
from core.predicates import is_admin_or_owner, is_admin_or_participant


def check_budget(budget):
    if budget is None or budget <= 0:
        raise ValidationError('Budget must be greater than zero.')


def check_create(actor, budget):
    if not (actor.is_client or actor.is_admin):
        raise Forbidden('Only clients can create jobs.')
    check_budget(budget)
    return JobStatus.PENDING


def check_modify(job, actor):
    """Update and delete share the same actor predicate."""
    if not is_admin_or_owner(actor, job):
        raise Forbidden('Not authorized to modify this job.')


def check_accept(job, actor):
    if job.status != JobStatus.PENDING:
        raise InvalidState('This job has already been accepted or closed.')
    if not actor.is_freelancer:
        raise Forbidden('Only freelancers can accept jobs.')
    return JobStatus.ACCEPTED


def check_complete(job, actor):
    if job.status != JobStatus.ACCEPTED:
        raise InvalidState('The job must be accepted before it can be completed.')
    if not is_admin_or_owner(actor, job):
        raise Forbidden('Only the client can complete this job.')
    # freelancer is SET_NULL when the account is deleted
    if job.freelancer_id is None:
        raise InvalidState('The job has no freelancer to pay.')
    return JobStatus.COMPLETED


def check_cancel(job, actor):
    if not is_admin_or_participant(actor, job):
        raise Forbidden('Not authorized to cancel this job.')
    if job.status == JobStatus.COMPLETED:
        raise InvalidState('Completed jobs cannot be cancelled.')
    return JobStatus.CANCELLED


# Statuses a transition may start from; the store re-checks them atomically.
TRANSITION_SOURCES = {
    JobStatus.ACCEPTED: (JobStatus.PENDING,),
    JobStatus.COMPLETED: (JobStatus.ACCEPTED,),
    JobStatus.CANCELLED: CANCELLABLE_STATUSES,
}
