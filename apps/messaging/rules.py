"""Message access rule."""
from core.exceptions import Forbidden, ValidationError
from core.predicates import is_admin_or_participant


def check_access(job, actor):
    if not is_admin_or_participant(actor, job):
        raise Forbidden('Not authorized to access messages of this job.')


def check_content(content):
    if content is None or not content.strip():
        raise ValidationError('Message content cannot be empty.')


def check_delete(message, actor):
    if message.sender_id != actor.id and not actor.is_admin:
        raise Forbidden('Only the sender can delete this message.')
