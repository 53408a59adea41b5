"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Base class-based view for the JSON API and the exception
             to response mapping used by ApiExceptionMiddleware.
-------------------------------------------------------------------------
"""
import json
import logging
from decimal import Decimal
from typing import Any, Iterable, Optional

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.http import Http404, JsonResponse
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.core.exceptions import (
    PayrollHubException,
    AuthenticationFailed,
    ResourceNotFound,
    ValidationFailed,
)
from apps.core.tokens import TOKEN_EXPIRED, TOKEN_INVALID

logger = logging.getLogger(__name__)


class ApiJSONEncoder(DjangoJSONEncoder):
    """Encode Decimal money values as JSON numbers."""

    def default(self, o: Any) -> Any:
        if isinstance(o, Decimal):
            return float(o)
        return super().default(o)


def json_response(data: Any, status: int = 200) -> JsonResponse:
    return JsonResponse(data, status=status, encoder=ApiJSONEncoder, safe=False)


def authentication_error(request) -> AuthenticationFailed:
    """Build the 401 matching the request's token state."""
    auth_error = getattr(request, 'auth_error', None)
    if auth_error in (TOKEN_INVALID, TOKEN_EXPIRED):
        exc = AuthenticationFailed("Invalid or expired token")
        exc.error_code = auth_error
        return exc
    return AuthenticationFailed()


def exception_response(request, exc: Exception) -> JsonResponse:
    """
    Map an exception raised while serving an API request to JSON.

    Args:
        request: The current request.
        exc: The exception raised by the view.

    Returns:
        JsonResponse with ``{message, error, **details}``.
    """
    if isinstance(exc, PayrollHubException):
        if exc.status_code >= 500:
            logger.error("API error on %s %s: %s", request.method, request.path, exc.message)
        else:
            logger.info(
                "API %s on %s %s: %s",
                exc.status_code, request.method, request.path, exc.message,
                extra={'error_code': exc.error_code},
            )
        body = {'message': exc.message, 'error': exc.error_code}
        body.update(exc.details)
        return json_response(body, status=exc.status_code)

    if isinstance(exc, (Http404, ObjectDoesNotExist)):
        message = str(exc) or ResourceNotFound.default_message
        return json_response(
            {'message': message, 'error': ResourceNotFound.error_code}, status=404
        )

    if isinstance(exc, ValidationError):
        if hasattr(exc, 'message_dict'):
            errors = exc.message_dict
            message = '; '.join(
                f"{field}: {', '.join(msgs)}" for field, msgs in errors.items()
            )
        else:
            errors = exc.messages
            message = '; '.join(exc.messages)
        return json_response(
            {'message': message, 'error': ValidationFailed.error_code, 'errors': errors},
            status=400,
        )

    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return json_response(
        {'message': 'Internal server error', 'error': str(exc)}, status=500
    )


class ApiView(View):
    """
    Base view for every ``/api/`` endpoint.

    - Requests must be authenticated unless ``public = True``.
    - The JSON body (or form body) is parsed into ``self.data``.
    - ``self.company`` is the caller's tenant; all queries go through it.

    CSRF is not used for bearer-token clients, so ``as_view`` marks the
    resulting callable exempt.
    """

    public: bool = False

    @classmethod
    def as_view(cls, **initkwargs):
        return csrf_exempt(super().as_view(**initkwargs))

    def dispatch(self, request, *args, **kwargs):
        if not self.public and not request.user.is_authenticated:
            raise authentication_error(request)
        self.data = self.parse_body(request)
        self.company = getattr(request, 'company', None)
        return super().dispatch(request, *args, **kwargs)

    @staticmethod
    def parse_body(request) -> dict:
        """Return the request body as a dict (JSON first, then form data)."""
        if request.method in ('GET', 'HEAD', 'OPTIONS'):
            return {}
        content_type = request.META.get('CONTENT_TYPE', '')
        if 'application/json' in content_type or not content_type:
            if not request.body:
                return {}
            try:
                payload = json.loads(request.body.decode('utf-8'))
            except (UnicodeDecodeError, json.JSONDecodeError):
                raise ValidationFailed("Request body must be valid JSON")
            if not isinstance(payload, dict):
                raise ValidationFailed("Request body must be a JSON object")
            return payload
        return request.POST.dict()

    # Parameter helpers

    def param(self, *names: str, default: Any = None) -> Any:
        """
        First non-empty value among ``names`` from the body, then the query string.

        Several names may be given because clients send either PascalCase
        or camelCase keys (``DepartmentId`` / ``departmentId``).
        """
        for name in names:
            value = self.data.get(name)
            if value not in (None, ''):
                return value
        for name in names:
            value = self.request.GET.get(name)
            if value not in (None, ''):
                return value
        return default

    def require(self, *names: str, message: Optional[str] = None) -> Any:
        value = self.param(*names)
        if value in (None, ''):
            raise ValidationFailed(message or f"{names[0]} is required")
        return value

    def get_tenant_object(self, model, pk: Any, message: Optional[str] = None, queryset=None):
        """
        Fetch a record by id inside the caller's company.

        Raises:
            ResourceNotFound: When missing or owned by another company.
        """
        qs = queryset if queryset is not None else model.get_tenant_filtered_queryset(self.company)
        try:
            return qs.get(pk=int(pk))
        except (model.DoesNotExist, TypeError, ValueError):
            raise ResourceNotFound(message or f"{str(model._meta.verbose_name).title()} not found")

    @staticmethod
    def serialize(items: Iterable) -> list:
        return [item.to_dict() for item in items]
