import logging

from core.exceptions import Conflict, NotFound
from apps.reviews import rules

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, store):
        self.store = store

    def get_review(self, review_id):
        review = self.store.get_review(review_id)
        if review is None:
            raise NotFound('Review not found.')
        return review

    def create_review(self, job_id, actor, rating, comment=None):
        job = self.store.get_job(job_id)
        if job is None:
            raise NotFound('Job not found.')
        rules.check_create_review(job, actor, rating, self.store.has_review(job.pk))
        review = self.store.create_review(job, rating, comment)
        if review is None:
            raise Conflict('This job has already been reviewed.')
        logger.info(f"Review {review.pk} ({rating}/5) left on job {job.pk} by user {actor.id}")
        return review

    def update_review(self, review_id, actor, **fields):
        review = self.get_review(review_id)
        rules.check_modify_review(review, actor)
        changes = {key: fields[key] for key in ('rating', 'comment') if key in fields}
        if 'rating' in changes:
            rules.check_rating(changes['rating'])
        return self.store.update_review(review, **changes)

    def delete_review(self, review_id, actor):
        review = self.get_review(review_id)
        rules.check_modify_review(review, actor)
        self.store.delete_review(review)
        logger.info(f"Review {review_id} deleted by user {actor.id}")
