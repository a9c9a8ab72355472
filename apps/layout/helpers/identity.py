from __future__ import annotations

from django.conf import settings
from django.http import HttpRequest

from apps.layout.models import ANONYMOUS_USER_ID


def resolve_user_id(request: HttpRequest) -> str:
    """Return the caller's opaque identity token.

    The header value is trusted as-is and only used to partition storage.
    Missing or blank values fall back to the anonymous sentinel.
    """
    header = getattr(settings, "LAYOUT_API_KEY_HEADER", "X-API-Key")
    value = (request.headers.get(header) or "").strip()
    if value:
        return value
    return getattr(settings, "LAYOUT_ANONYMOUS_USER_ID", ANONYMOUS_USER_ID)
