"""
App configuration for accounts.
"""
from django.apps import AppConfig
from django.conf import settings
from django.db.models.signals import post_save


class AccountsConfig(AppConfig):
    """Connects new-user provisioning to the user model."""

    name = "accounts"
    verbose_name = "Accounts"

    def ready(self):
        from accounts.infrastructure.provisioning import provision_user

        post_save.connect(
            provision_user,
            sender=settings.AUTH_USER_MODEL,
            dispatch_uid="accounts.provision_user",
        )
