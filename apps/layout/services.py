"""Read/write operations over stored layout state.

The service owns context-key derivation and payload validation; persistence
and merge semantics live on ``LayoutState.objects``. Store errors are not
caught here so the caller can report them as server failures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from apps.layout.exceptions import LayoutRequestError
from apps.layout.helpers.context import context_key, normalize_device
from apps.layout.models import LayoutState, LayoutStateManager

logger = logging.getLogger(__name__)

# Request fields that address the context rather than being stored.
ADDRESSING_FIELDS = ("path", "device")


def _require_path(path: Any) -> str:
    if not isinstance(path, str) or not path.strip():
        raise LayoutRequestError("Missing required parameter: path")
    return path


@dataclass
class LayoutService:
    store: Optional[LayoutStateManager] = None

    def __post_init__(self) -> None:
        if self.store is None:
            self.store = LayoutState.objects

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def read(self, user_id: str, path: Any, device: Optional[str] = None) -> Dict[str, Any]:
        """Return the settings stored for ``(user_id, path, device)``, or ``{}``."""

        key = context_key(_require_path(path), device)
        settings = self.store.get_settings(user_id, key)
        return settings if settings is not None else {}

    def write(self, user_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge the settings fields of ``payload`` into the addressed context.

        ``payload`` is the decoded request body: ``path`` (required),
        ``device`` (optional) and any number of settings fields.
        """

        path = _require_path(payload.get("path"))
        device = normalize_device(payload.get("device"))
        partial = {k: v for k, v in payload.items() if k not in ADDRESSING_FIELDS}
        key = context_key(path, device)
        merged = self.store.upsert(user_id, key, partial)
        logger.debug(
            "Saved layout fields %s for user=%s path=%s device=%s",
            sorted(partial), user_id, path, device,
        )
        return merged
