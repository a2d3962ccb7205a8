"""Account management rule."""
from core.exceptions import Forbidden


def check_manage_profile(account_id, actor):
    """Profiles are edited or deleted by their owner or an admin."""
    if not (actor.is_admin or actor.id == account_id):
        raise Forbidden('Not authorized to manage this profile.')
