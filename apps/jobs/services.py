import logging

from core.constants import JobStatus
from core.exceptions import Conflict, InvalidState, NotFound
from apps.jobs import rules

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('title', 'description', 'category', 'location', 'budget', 'deadline')


class JobService:
    def __init__(self, store, payment_method='simulated'):
        self.store = store
        self.payment_method = payment_method

    def get_job(self, job_id):
        job = self.store.get_job(job_id)
        if job is None:
            raise NotFound('Job not found.')
        return job

    def create_job(self, actor, **fields):
        status = rules.check_create(actor, fields.get('budget'))
        job = self.store.create_job(client_id=actor.id, status=status, **fields)
        logger.info(f"Job {job.pk} created by user {actor.id}")
        return job

    def update_job(self, job_id, actor, **fields):
        job = self.get_job(job_id)
        rules.check_modify(job, actor)
        changes = {key: value for key, value in fields.items() if key in EDITABLE_FIELDS}
        if 'budget' in changes:
            rules.check_budget(changes['budget'])
        job = self.store.update_job(job, **changes)
        logger.info(f"Job {job.pk} updated by user {actor.id}")
        return job

    def delete_job(self, job_id, actor):
        job = self.get_job(job_id)
        rules.check_modify(job, actor)
        self.store.delete_job(job)
        logger.info(f"Job {job_id} deleted by user {actor.id}")

    def accept_job(self, job_id, actor):
        job = self.get_job(job_id)
        target = rules.check_accept(job, actor)
        return self._transition(job, target, actor, freelancer_id=actor.id)

    def cancel_job(self, job_id, actor):
        job = self.get_job(job_id)
        target = rules.check_cancel(job, actor)
        if job.status == JobStatus.CANCELLED:
            return job
        return self._transition(job, target, actor)

    def complete_job(self, job_id, actor):
        """Complete the job, then pay its budget to the assigned freelancer.

        Status change, payment row and balance credit commit together.
        """
        job = self.get_job(job_id)
        target = rules.check_complete(job, actor)
        with self.store.atomic():
            job = self._transition(job, target, actor)
            payment = self.store.create_payment(job, job.budget, self.payment_method)
            if payment is None:
                raise Conflict('This job has already been paid.')
        logger.info(f"Paid {job.budget} to freelancer {job.freelancer_id} for job {job.pk}")
        return job

    def _transition(self, job, target, actor, **changes):
        updated = self.store.transition_job(job.pk, rules.TRANSITION_SOURCES[target], target, **changes)
        if updated is None:
            # Another request moved the job between our read and this write
            logger.warning(f"Job {job.pk} left {job.status} before it could move to {target}")
            raise InvalidState(f'The job can no longer move to {target}.')
        logger.info(f"Job {job.pk} moved {job.status} -> {target} by user {actor.id}")
        return updated
