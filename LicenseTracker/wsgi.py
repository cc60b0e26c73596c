"""
WSGI config for LicenseTracker project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseTracker.settings.dev")

application = get_wsgi_application()
