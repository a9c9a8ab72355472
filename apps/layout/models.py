from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Mapping, Optional

from django.core.exceptions import ValidationError
from django.db import IntegrityError, models, transaction

logger = logging.getLogger(__name__)

ANONYMOUS_USER_ID = "anonymous"


def validate_settings_object(value: Any) -> None:
    if not isinstance(value, dict):
        raise ValidationError(
            "Layout settings must be a JSON object, not %(kind)s.",
            code="invalid_settings",
            params={"kind": type(value).__name__},
        )


class LayoutStateQuerySet(models.QuerySet):
    def for_context(self, user_id: str, context_key: str) -> "LayoutStateQuerySet":
        return self.filter(user_id=user_id, context_key=context_key)


class LayoutStateManager(models.Manager.from_queryset(LayoutStateQuerySet)):
    """Keyed JSON document storage with merge-on-write semantics."""

    def get_settings(self, user_id: str, context_key: str) -> Optional[Dict[str, Any]]:
        """Return the stored settings for a context, or ``None`` when nothing is stored."""

        row = self.for_context(user_id, context_key).only("settings").first()
        if row is None:
            return None
        return dict(row.settings or {})

    def upsert(self, user_id: str, context_key: str, partial: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert or shallow-merge ``partial`` into the settings of a context.

        Keys present in ``partial`` overwrite stored ones; absent keys are
        preserved. Nested objects are replaced wholesale. The whole operation
        runs in one transaction with the row locked, so concurrent writers to
        the same context cannot drop each other's disjoint keys.
        """

        if not isinstance(partial, Mapping):
            raise TypeError(f"settings must be a mapping, got {type(partial).__name__}")
        partial = dict(partial)

        with transaction.atomic():
            row = self.select_for_update().for_context(user_id, context_key).first()
            if row is None:
                try:
                    # Savepoint so a lost insert race doesn't poison the outer transaction.
                    with transaction.atomic():
                        row = self.create(user_id=user_id, context_key=context_key, settings=partial)
                    logger.debug("Created layout state %s for user=%s", row.pk, user_id)
                    return dict(row.settings)
                except IntegrityError:
                    logger.debug("Lost insert race for user=%s; merging into existing row", user_id)
                    row = self.select_for_update().for_context(user_id, context_key).get()

            row.settings = {**(row.settings or {}), **partial}
            row.save(update_fields=["settings", "updated_at"])
            return dict(row.settings)


class LayoutState(models.Model):
    """Per-user UI layout settings for one (page path, device class) context."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=255, default=ANONYMOUS_USER_ID)
    # Derived from (path, device); see apps.layout.helpers.context.
    context_key = models.CharField(max_length=64)
    settings = models.JSONField(default=dict, validators=[validate_settings_object])
    created_at = models.DateTimeField(auto_now_add=True, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    objects = LayoutStateManager()

    class Meta:
        db_table = "layout_state"
        constraints = [
            models.UniqueConstraint(
                fields=["user_id", "context_key"], name="unique_layout_state_per_user_context"
            ),
        ]
        indexes = [
            models.Index(fields=["user_id", "context_key"], name="layout_state_user_ctx_idx"),
        ]

    def __str__(self):
        return f"{self.user_id}:{self.context_key}"
