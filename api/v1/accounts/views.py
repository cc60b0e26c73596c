"""
Account API views.

Registration, access token issue, the caller's profile and notification
preferences.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.issue_access_token import IssueAccessTokenCommand
from accounts.application.commands.register_user import RegisterUserCommand
from accounts.application.commands.update_notification_preferences import (
    UpdateNotificationPreferencesCommand,
)
from accounts.application.handlers.account_handlers import (
    GetNotificationPreferencesHandler,
    GetProfileHandler,
    IssueAccessTokenHandler,
    RegisterUserHandler,
    UpdateNotificationPreferencesHandler,
)
from accounts.application.queries.get_profile import (
    GetNotificationPreferencesQuery,
    GetProfileQuery,
)
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccessTokenRepository,
    DjangoAccountRepository,
)
from api.exceptions import validation_error_response
from api.v1.accounts.serializers import (
    AccessTokenSerializer,
    NotificationPreferencesSerializer,
    ProfileSerializer,
    RegisterRequestSerializer,
    TokenRequestSerializer,
    UpdateNotificationPreferencesSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer

_account_repo = DjangoAccountRepository()
_token_repo = DjangoAccessTokenRepository()

tracer = get_tracer(__name__)


class RegisterView(APIView):
    """View for registering a new account."""

    @extend_schema(
        operation_id="register",
        summary="Register",
        description=(
            "Create an account. A profile and default notification preferences "
            "are provisioned, and an access token is returned."
        ),
        tags=["Auth"],
        request=RegisterRequestSerializer,
        responses={
            201: AccessTokenSerializer,
            400: {"description": "Bad Request - invalid data or email already registered"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_register)(request)

    async def _handle_register(self, request: Request) -> Response:
        """Async handler for registration."""
        with tracer.start_as_current_span("register") as span:
            span.set_attribute("operation", "register")

            serializer = RegisterRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            handler = RegisterUserHandler(
                account_repository=_account_repo,
                token_repository=_token_repo,
                token_ttl_days=settings.ACCESS_TOKEN_TTL_DAYS,
            )
            result = await handler.handle(
                RegisterUserCommand(
                    email=serializer.validated_data["email"],
                    password=serializer.validated_data["password"],
                    full_name=serializer.validated_data.get("full_name"),
                )
            )

            span.set_attribute("user.id", result.profile.id)
            span.set_status(Status(StatusCode.OK))
            return Response(AccessTokenSerializer(result).data, status=status.HTTP_201_CREATED)


class TokenView(APIView):
    """View for exchanging credentials for an access token."""

    @extend_schema(
        operation_id="issue_token",
        summary="Issue Access Token",
        description="Exchange email and password for a new bearer token.",
        tags=["Auth"],
        request=TokenRequestSerializer,
        responses={
            200: AccessTokenSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Invalid email or password"},
        },
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_issue_token)(request)

    async def _handle_issue_token(self, request: Request) -> Response:
        """Async handler for token issue."""
        with tracer.start_as_current_span("issue_token") as span:
            span.set_attribute("operation", "issue_token")

            serializer = TokenRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            handler = IssueAccessTokenHandler(
                account_repository=_account_repo,
                token_repository=_token_repo,
                token_ttl_days=settings.ACCESS_TOKEN_TTL_DAYS,
            )
            result = await handler.handle(
                IssueAccessTokenCommand(
                    email=serializer.validated_data["email"],
                    password=serializer.validated_data["password"],
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(AccessTokenSerializer(result).data, status=status.HTTP_200_OK)


class ProfileView(APIView):
    """View for the caller's profile."""

    @extend_schema(
        operation_id="get_profile",
        summary="Get Profile",
        tags=["Auth"],
        responses={200: ProfileSerializer, 401: {"description": "Unauthorized"}},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_get_profile)(request)

    async def _handle_get_profile(self, request: Request) -> Response:
        with tracer.start_as_current_span("get_profile") as span:
            span.set_attribute("user.id", request.owner_id)
            handler = GetProfileHandler(account_repository=_account_repo)
            result = await handler.handle(GetProfileQuery(owner_id=request.owner_id))
            span.set_status(Status(StatusCode.OK))
            return Response(ProfileSerializer(result).data, status=status.HTTP_200_OK)


class NotificationPreferencesView(APIView):
    """View for reading and updating the caller's notification preferences."""

    @extend_schema(
        operation_id="get_notification_preferences",
        summary="Get Notification Preferences",
        tags=["Auth"],
        responses={200: NotificationPreferencesSerializer, 401: {"description": "Unauthorized"}},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_get_preferences)(request)

    @extend_schema(
        operation_id="update_notification_preferences",
        summary="Update Notification Preferences",
        description=(
            "Set whether reminder emails are enabled and which days before expiry "
            "to remind on. Allowed days: 30, 15, 7, 3, 1."
        ),
        tags=["Auth"],
        request=UpdateNotificationPreferencesSerializer,
        responses={
            200: NotificationPreferencesSerializer,
            400: {"description": "Bad Request"},
            401: {"description": "Unauthorized"},
        },
    )
    def put(self, request: Request) -> Response:
        return async_to_sync(self._handle_update_preferences)(request)

    async def _handle_get_preferences(self, request: Request) -> Response:
        with tracer.start_as_current_span("get_notification_preferences") as span:
            span.set_attribute("user.id", request.owner_id)
            handler = GetNotificationPreferencesHandler(account_repository=_account_repo)
            result = await handler.handle(
                GetNotificationPreferencesQuery(owner_id=request.owner_id)
            )
            span.set_status(Status(StatusCode.OK))
            return Response(NotificationPreferencesSerializer(result).data)

    async def _handle_update_preferences(self, request: Request) -> Response:
        """Async handler for preference update."""
        with tracer.start_as_current_span("update_notification_preferences") as span:
            span.set_attribute("user.id", request.owner_id)

            serializer = UpdateNotificationPreferencesSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return validation_error_response(serializer.errors)

            handler = UpdateNotificationPreferencesHandler(account_repository=_account_repo)
            result = await handler.handle(
                UpdateNotificationPreferencesCommand(
                    owner_id=request.owner_id,
                    email_enabled=serializer.validated_data.get("email_enabled"),
                    days_before_expiry=serializer.validated_data.get("days_before_expiry"),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(NotificationPreferencesSerializer(result).data)
