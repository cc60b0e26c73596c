"""
Access token authentication middleware.

This middleware resolves the calling user from an access token and
attaches the owner id to the request for API views.
"""

import logging
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils import timezone
from django.utils.crypto import constant_time_compare
from django.utils.deprecation import MiddlewareMixin

from accounts.domain.access_token import hash_token
from accounts.infrastructure.models import AccessToken

logger = logging.getLogger(__name__)

SWEEP_PATH = "/api/v1/notifications/check-license-expiry"
SWEEP_SECRET_HEADER = "X-Sweep-Secret"
SWEEP_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


class AccessTokenAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for access token authentication.

    This middleware:
    1. Lets public paths (admin, health, docs, registration, token issue) through
    2. Guards the expiry sweep with the optional shared secret
    3. Validates the access token on every other /api/v1/ path
    4. Returns 401 Unauthorized if authentication fails
    """

    public_paths = (
        "/admin/",
        "/health/",
        "/health",
        "/ready/",
        "/metrics",
        "/api/schema/",
        "/api/docs/",
        "/api/redoc/",
        "/static/",
        "/api/v1/auth/register",
        "/api/v1/auth/token",
    )

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        request.owner_id = None  # type: ignore

        if self._should_skip_auth(request.path):
            return None

        if request.path.startswith(SWEEP_PATH):
            return self._authenticate_sweep(request)

        if request.path.startswith("/api/v1/"):
            return self._authenticate_access_token(request)

        return None

    def _should_skip_auth(self, path: str) -> bool:
        """
        Check if authentication should be skipped for this path.

        Args:
            path: Request path

        Returns:
            True if auth should be skipped
        """
        return any(path.startswith(skip) for skip in self.public_paths)

    def _authenticate_sweep(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Check the shared sweep secret when one is configured.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if the secret does not match, None otherwise
        """
        secret = getattr(settings, "EXPIRY_SWEEP_SECRET", "")
        if not secret or request.method == "OPTIONS":
            return None

        provided = request.headers.get(SWEEP_SECRET_HEADER, "")
        if not constant_time_compare(provided, secret):
            logger.warning("Expiry sweep called with an invalid secret")
            response = JsonResponse(
                {"success": False, "error": "Invalid sweep secret"},
                status=401,
            )
            for header, value in SWEEP_CORS_HEADERS.items():
                response[header] = value
            return response
        return None

    def _authenticate_access_token(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Authenticate API request with an access token.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if auth fails, None if successful
        """
        raw_token = self._extract_token(request)
        if not raw_token:
            return JsonResponse(
                {
                    "error": {
                        "code": "MISSING_ACCESS_TOKEN",
                        "message": "Missing access token. Provide an Authorization: "
                        f"Bearer header or {settings.ACCESS_TOKEN_HEADER} header.",
                    }
                },
                status=401,
            )

        token_hash = hash_token(raw_token)

        # pylint: disable=no-member
        token = AccessToken.objects.filter(token_hash=token_hash).first()
        if not token:
            logger.warning("Invalid access token attempted: %s...", raw_token[:8])
            return JsonResponse(
                {"error": {"code": "INVALID_ACCESS_TOKEN", "message": "Invalid access token"}},
                status=401,
            )

        if not token.is_valid():
            logger.warning("Expired access token attempted: %s...", token.token_prefix)
            return JsonResponse(
                {"error": {"code": "ACCESS_TOKEN_EXPIRED", "message": "Access token expired"}},
                status=401,
            )

        AccessToken.objects.filter(pk=token.pk).update(last_used_at=timezone.now())

        request.owner_id = token.user_id  # type: ignore
        request.access_token = token  # type: ignore
        return None

    def _extract_token(self, request: HttpRequest) -> str:
        authorization = request.headers.get("Authorization", "")
        if authorization.startswith("Bearer "):
            return authorization[len("Bearer "):].strip()
        return request.headers.get(settings.ACCESS_TOKEN_HEADER, "").strip()
