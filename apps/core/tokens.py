"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Signed bearer tokens for the JSON API.
-------------------------------------------------------------------------
"""
from typing import Optional

from django.conf import settings
from django.core import signing

TOKEN_SALT = 'payrollhub.api.token'

TOKEN_INVALID = 'TOKEN_INVALID'
TOKEN_EXPIRED = 'TOKEN_EXPIRED'


class TokenError(Exception):
    """Raised when a bearer token cannot be trusted."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(code)


def issue_token(user) -> str:
    """Create a signed token carrying the user id, role and company."""
    payload = {
        'id': user.pk,
        'role': user.role,
        'company': user.company_id,
    }
    return signing.dumps(payload, salt=TOKEN_SALT, compress=True)


def read_token(token: str) -> dict:
    """
    Verify a token and return its payload.

    Raises:
        TokenError: With TOKEN_EXPIRED when older than API_TOKEN_MAX_AGE,
            TOKEN_INVALID for any other signature problem.
    """
    try:
        return signing.loads(
            token,
            salt=TOKEN_SALT,
            max_age=settings.API_TOKEN_MAX_AGE,
        )
    except signing.SignatureExpired:
        raise TokenError(TOKEN_EXPIRED)
    except signing.BadSignature:
        raise TokenError(TOKEN_INVALID)


def bearer_token(request) -> Optional[str]:
    """Extract the raw token from an ``Authorization: Bearer`` header."""
    header = request.META.get('HTTP_AUTHORIZATION', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()
