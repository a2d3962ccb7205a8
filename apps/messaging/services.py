import logging

from core.exceptions import NotFound
from apps.messaging import rules

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, store):
        self.store = store

    def _get_job(self, job_id):
        job = self.store.get_job(job_id)
        if job is None:
            raise NotFound('Job not found.')
        return job

    def list_messages(self, job_id, actor):
        job = self._get_job(job_id)
        rules.check_access(job, actor)
        return self.store.list_messages(job.pk)

    def post_message(self, job_id, actor, content):
        job = self._get_job(job_id)
        rules.check_access(job, actor)
        rules.check_content(content)
        message = self.store.create_message(job, actor.id, content)
        logger.info(f"Message {message.pk} posted on job {job.pk} by user {actor.id}")
        return message

    def delete_message(self, message_id, actor):
        message = self.store.get_message(message_id)
        if message is None:
            raise NotFound('Message not found.')
        rules.check_delete(message, actor)
        self.store.delete_message(message)
        logger.info(f"Message {message_id} deleted by user {actor.id}")
