"""Review eligibility rule."""
from core.constants import JobStatus, MIN_RATING, MAX_RATING
from core.exceptions import Conflict, Forbidden, InvalidState, ValidationError
from core.predicates import is_admin_or_owner, is_owner


def check_rating(rating):
    # bool is an int subclass and never a valid star count
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f'Rating must be an integer between {MIN_RATING} and {MAX_RATING}.')


def check_create_review(job, actor, rating, already_reviewed):
    if not is_owner(actor, job):
        raise Forbidden('Only the client can review the freelancer.')
    if job.status != JobStatus.COMPLETED:
        raise InvalidState('The job must be completed before it can be reviewed.')
    if job.freelancer_id is None:
        raise InvalidState('The job has no freelancer to review.')
    check_rating(rating)
    if already_reviewed:
        raise Conflict('This job has already been reviewed.')


def check_modify_review(review, actor):
    if not is_admin_or_owner(actor, review.job):
        raise Forbidden('Not authorized to modify this review.')
