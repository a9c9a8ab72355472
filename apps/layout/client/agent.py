"""Client-side mirror of layout state with debounced persistence.

``LayoutAgent`` runs on a single asyncio loop. It loads the stored settings
for its (path, device) context once, then turns every state change into a
debounced POST to ``/api/layout`` carrying only the fields that changed.
Network failures are logged and dropped; the local state stays usable.

Mutators are synchronous but schedule timers, so they must be called while
the agent's event loop is running.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Set

import httpx

from apps.layout.client import state as view
from apps.layout.client.state import AgentConfig, LayoutViewState

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "default"


@dataclass
class _Drag:
    side: str
    start_x: float
    start_width: int


class LayoutAgent:
    def __init__(
        self,
        path: str,
        viewport_width: int,
        *,
        user_id: str = DEFAULT_USER_ID,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = "",
        config: AgentConfig = AgentConfig(),
        prefers_dark: Optional[Callable[[], bool]] = None,
        on_theme: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.config = config
        self.path = path
        self.device = view.device_for(viewport_width, config.breakpoint)
        self.user_id = user_id
        self.state: LayoutViewState = view.initial_state(viewport_width, config)
        self.applied_theme: Optional[str] = None

        self._client = client if client is not None else httpx.AsyncClient(base_url=base_url)
        self._owns_client = client is None
        self._prefers_dark = prefers_dark or (lambda: False)
        self._on_theme = on_theme

        self._observing = False
        self._pending: Dict[str, Any] = {}
        self._timer: Optional[asyncio.TimerHandle] = None
        self._inflight: Set[asyncio.Task] = set()
        self._drag: Optional[_Drag] = None

    async def __aenter__(self) -> "LayoutAgent":
        await self.load()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @property
    def mobile(self) -> bool:
        return self.device == view.MOBILE

    @property
    def resizing(self) -> Optional[str]:
        return self._drag.side if self._drag else None

    @property
    def has_pending_write(self) -> bool:
        return self._timer is not None

    def _headers(self) -> Dict[str, str]:
        return {self.config.api_key_header: self.user_id}

    # ------------------------------------------------------------------
    # Load / persist
    # ------------------------------------------------------------------
    async def load(self) -> None:
        """Fetch stored settings, apply them over the defaults and start observing."""

        try:
            response = await self._client.get(
                self.config.endpoint,
                params={"path": self.path, "device": self.device},
                headers=self._headers(),
            )
            response.raise_for_status()
            settings = response.json()
            if not isinstance(settings, dict):
                raise ValueError(f"expected a JSON object, got {type(settings).__name__}")
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Failed to load layout state for %s: %s", self.path, exc)
        else:
            self.state = view.apply_settings(
                self.state, settings, desktop=not self.mobile, config=self.config
            )
        self.apply_theme()
        self._observing = True

    def _commit(self, new_state: LayoutViewState, changes: Dict[str, Any]) -> None:
        self.state = new_state
        if changes:
            self._schedule(changes)

    def _schedule(self, changes: Dict[str, Any]) -> None:
        if not self._observing:
            return
        # Newer values win; fields from superseded changes ride along.
        self._pending.update(changes)
        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.config.debounce_seconds, self._fire)

    def _fire(self) -> None:
        self._timer = None
        fields, self._pending = self._pending, {}
        if not fields:
            return
        task = asyncio.ensure_future(self._save(fields))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _save(self, fields: Dict[str, Any]) -> None:
        body = {"path": self.path, "device": self.device, **fields}
        try:
            response = await self._client.post(
                self.config.endpoint, json=body, headers=self._headers()
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Failed to save layout state for %s: %s", self.path, exc)

    async def flush(self) -> None:
        """Send any debounced write now and wait for in-flight writes."""

        if self._timer is not None:
            self._timer.cancel()
            self._fire()
        if self._inflight:
            await asyncio.gather(*list(self._inflight))

    async def aclose(self) -> None:
        await self.flush()
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Sidebars
    # ------------------------------------------------------------------
    def toggle_sidebar(self, side: str) -> None:
        self._commit(*view.toggle_sidebar(self.state, side, self.mobile))

    def dismiss_sidebar(self, side: str) -> None:
        """Outside-click / backdrop dismissal; only applies on narrow viewports."""

        if not self.mobile:
            return
        self._commit(*view.dismiss_sidebar(self.state, side))

    def start_resize(self, side: str, x: float) -> None:
        self._drag = _Drag(side=side, start_x=x, start_width=self.state.width(side))

    def drag(self, x: float) -> None:
        """Track the pointer during a resize. No network traffic until the drag ends."""

        drag = self._drag
        if drag is None:
            return
        delta = x - drag.start_x if drag.side == view.LEFT else drag.start_x - x
        new_width = int(drag.start_width + delta)
        if new_width <= self.config.collapse_threshold:
            # Treated as a close: persist visibility, not width, and end the drag.
            self._drag = None
            self._commit(*view.collapse_sidebar(self.state, drag.side, self.config))
            return
        self.state, _ = view.set_width(self.state, drag.side, new_width)

    def stop_resize(self) -> None:
        drag = self._drag
        self._drag = None
        if drag is None:
            return
        width = self.state.width(drag.side)
        if width == drag.start_width:
            return
        self._schedule({f"{drag.side}_width": width})

    # ------------------------------------------------------------------
    # Theme
    # ------------------------------------------------------------------
    def cycle_theme(self) -> None:
        new_state, changes = view.cycle_theme(self.state)
        self.state = new_state
        self.apply_theme()
        self._schedule(changes)

    def apply_theme(self) -> str:
        """Resolve ``system`` against the ambient preference and apply the result."""

        value = view.effective_theme(self.state.theme, self._prefers_dark())
        self.applied_theme = value
        if self._on_theme is not None:
            self._on_theme(value)
        return value
