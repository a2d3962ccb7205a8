from rest_framework.authentication import TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """Accept ``Authorization: Bearer <key>`` next to DRF's ``Token <key>``."""
    keyword = 'Bearer'
