"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Middleware for bearer-token authentication, multi-tenancy
             enforcement and JSON error responses for the API.
-------------------------------------------------------------------------
"""
import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.http import HttpRequest, HttpResponse
from django.utils.deprecation import MiddlewareMixin

from apps.core.tokens import TokenError, bearer_token, read_token, TOKEN_INVALID

logger = logging.getLogger(__name__)


class TokenAuthenticationMiddleware(MiddlewareMixin):
    """
    Resolve ``Authorization: Bearer <token>`` into ``request.user``.

    Requests without a bearer header keep whatever user the session
    middleware attached. A bad token leaves the request anonymous and
    records the reason in ``request.auth_error`` so the API layer can
    answer 401 with TOKEN_INVALID or TOKEN_EXPIRED.

    Usage:
        Add to MIDDLEWARE in settings.py AFTER AuthenticationMiddleware:
        'apps.core.middleware.TokenAuthenticationMiddleware',
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        request.auth_error = None
        token = bearer_token(request)
        if token is None:
            return None

        try:
            payload = read_token(token)
        except TokenError as exc:
            request.auth_error = exc.code
            logger.info("Bearer token rejected (%s) for %s", exc.code, request.path)
            self._make_anonymous(request)
            return None

        User = get_user_model()
        user = User.objects.select_related('company').filter(
            pk=payload.get('id'), is_active=True
        ).first()
        if user is None:
            request.auth_error = TOKEN_INVALID
            self._make_anonymous(request)
            return None

        request.user = user
        return None

    @staticmethod
    def _make_anonymous(request: HttpRequest) -> None:
        from django.contrib.auth.models import AnonymousUser
        request.user = AnonymousUser()


class TenantMiddleware(MiddlewareMixin):
    """
    Inject ``request.company`` from the authenticated user.

    Every query in the API is scoped through ``request.company``;
    a CompanyId sent by the client is never trusted.

    Usage:
        Add to MIDDLEWARE in settings.py AFTER TokenAuthenticationMiddleware:
        'apps.core.middleware.TenantMiddleware',
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        request.company = None
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            request.company = getattr(user, 'company', None)
        return None


class ApiExceptionMiddleware(MiddlewareMixin):
    """
    Convert exceptions raised by API views into JSON error bodies.

    Only paths under ``/api/`` are handled; the admin keeps Django's
    regular error pages.
    """

    def process_exception(self, request: HttpRequest, exception: Exception) -> Optional[HttpResponse]:
        if not request.path.startswith('/api/'):
            return None
        from apps.core.api import exception_response
        return exception_response(request, exception)
