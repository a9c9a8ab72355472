import json
import logging
from typing import Any, Dict

from django.http import HttpRequest

from apps.layout.exceptions import LayoutRequestError

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON payload"


def parse_json_body(request: HttpRequest) -> Dict[str, Any]:
    """Decode the request body as a JSON object.

    Raises ``LayoutRequestError`` for an empty body, undecodable bytes, invalid
    JSON, or a JSON value that is not an object.
    """
    try:
        payload = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        body_len = len(request.body or b"")
        ctype = request.content_type or ""
        logger.warning("JSON parse failed: %s (len=%s, ctype=%s)", exc, body_len, ctype)
        raise LayoutRequestError(INVALID_JSON_MESSAGE) from exc
    if not isinstance(payload, dict):
        logger.warning("JSON body is not an object: %s", type(payload).__name__)
        raise LayoutRequestError(INVALID_JSON_MESSAGE)
    return payload
