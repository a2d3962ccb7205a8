"""
Named relationship predicates shared by the rule components.

Rules never compare role strings inline: they ask whether an actor owns a job,
takes part in it, or may act on it as an administrator.
"""
from dataclasses import dataclass

from core.constants import Role


@dataclass(frozen=True)
class Actor:
    """Read-only identity of the caller, already authenticated."""
    id: int
    role: Role

    @classmethod
    def from_user(cls, user):
        role = Role.ADMIN if user.is_superuser else Role(user.role)
        return cls(id=user.pk, role=role)

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @property
    def is_client(self):
        return self.role == Role.CLIENT

    @property
    def is_freelancer(self):
        return self.role == Role.FREELANCER


def is_owner(actor, job):
    return job.client_id == actor.id


def is_assigned(actor, job):
    return job.freelancer_id is not None and job.freelancer_id == actor.id


def is_participant(actor, job):
    """Client or assigned freelancer of the job."""
    return is_owner(actor, job) or is_assigned(actor, job)


def is_admin_or_owner(actor, job):
    return actor.is_admin or is_owner(actor, job)


def is_admin_or_participant(actor, job):
    return actor.is_admin or is_participant(actor, job)
