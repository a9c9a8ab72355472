"""ASGI config for the slipstream project."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "slipstream.settings")

application = get_asgi_application()
