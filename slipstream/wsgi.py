"""WSGI config for the slipstream project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "slipstream.settings")

application = get_wsgi_application()
