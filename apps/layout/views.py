from __future__ import annotations

import logging
import uuid

from django.db import DatabaseError
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from apps.layout.exceptions import LayoutRequestError
from apps.layout.helpers.identity import resolve_user_id
from apps.layout.helpers.json import parse_json_body
from apps.layout.services import LayoutService

logger = logging.getLogger(__name__)
error_logger = logging.getLogger(name="app_errors")

ALLOWED_METHODS = ("GET", "POST")


def ping(_request: HttpRequest) -> HttpResponse:
    return HttpResponse("layout ok", content_type="text/plain")


def _method_not_allowed() -> JsonResponse:
    response = JsonResponse({"error": "Method not allowed"}, status=405)
    response["Allow"] = ", ".join(ALLOWED_METHODS)
    return response


def _server_error(exc: Exception, request: HttpRequest) -> JsonResponse:
    error_id = uuid.uuid4()
    error_logger.exception(
        "Layout store failure (error_id=%s, method=%s, path=%s): %s",
        error_id, request.method, request.path, exc,
    )
    return JsonResponse(
        {"error": "Layout state storage unavailable", "error_id": str(error_id)},
        status=500,
    )


@csrf_exempt
def layout_state(request: HttpRequest) -> HttpResponse:
    """Read (GET) or merge-write (POST) the caller's layout settings.

    GET takes ``path`` and optional ``device`` query parameters. POST takes a
    JSON object with ``path``, optional ``device`` and the settings fields to
    merge. Both respond with the stored settings object only.
    """
    if request.method not in ALLOWED_METHODS:
        return _method_not_allowed()

    user_id = resolve_user_id(request)
    service = LayoutService()
    try:
        if request.method == "GET":
            settings = service.read(
                user_id, request.GET.get("path"), request.GET.get("device")
            )
        else:
            settings = service.write(user_id, parse_json_body(request))
    except LayoutRequestError as exc:
        logger.warning("Rejected layout %s: %s", request.method, exc.message)
        return JsonResponse(exc.to_dict(), status=exc.status)
    except DatabaseError as exc:
        return _server_error(exc, request)
    return JsonResponse(settings)
