from accounts.infrastructure.models import (  # noqa: F401
    AccessToken,
    NotificationPreference,
    UserProfile,
)
