"""View-model for the client layout agent.

Everything here is pure: functions take a ``LayoutViewState`` and return a new
one together with the persisted fields that changed, so the agent can decide
what to send to ``/api/layout``. Sidebar mutual exclusion on narrow viewports
is local UI policy and never reaches the server as a rule, only as the
resulting visibility flags.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Tuple

LEFT = "left"
RIGHT = "right"
SIDES = (LEFT, RIGHT)

THEME_SYSTEM = "system"
THEME_LIGHT = "light"
THEME_DARK = "dark"
THEME_CYCLE = (THEME_SYSTEM, THEME_LIGHT, THEME_DARK)

MOBILE = "mobile"
DESKTOP = "desktop"


@dataclass(frozen=True)
class AgentConfig:
    """Tunables for the client layout agent."""

    breakpoint: int = 1024
    default_width: int = 320
    collapse_threshold: int = 5
    debounce_seconds: float = 0.3
    endpoint: str = "/api/layout"
    api_key_header: str = "X-API-Key"


@dataclass(frozen=True)
class LayoutViewState:
    left_sidebar_open: bool = True
    right_sidebar_open: bool = True
    left_width: int = 320
    right_width: int = 320
    theme: str = THEME_SYSTEM

    def is_open(self, side: str) -> bool:
        return getattr(self, _open_field(side))

    def width(self, side: str) -> int:
        return getattr(self, _width_field(side))


Changes = Dict[str, Any]


def _check_side(side: str) -> str:
    if side not in SIDES:
        raise ValueError(f"unknown sidebar side: {side!r}")
    return side


def _open_field(side: str) -> str:
    return f"{_check_side(side)}_sidebar_open"


def _width_field(side: str) -> str:
    return f"{_check_side(side)}_width"


def _other(side: str) -> str:
    return RIGHT if _check_side(side) == LEFT else LEFT


def _update(state: LayoutViewState, **fields: Any) -> Tuple[LayoutViewState, Changes]:
    changes = {k: v for k, v in fields.items() if getattr(state, k) != v}
    if not changes:
        return state, {}
    return replace(state, **changes), changes


def device_for(viewport_width: int, breakpoint: int = AgentConfig.breakpoint) -> str:
    return MOBILE if viewport_width < breakpoint else DESKTOP


def initial_state(viewport_width: int, config: AgentConfig = AgentConfig()) -> LayoutViewState:
    """Defaults before anything is loaded: sidebars open on desktop widths only."""

    desktop = device_for(viewport_width, config.breakpoint) == DESKTOP
    return LayoutViewState(
        left_sidebar_open=desktop,
        right_sidebar_open=desktop,
        left_width=config.default_width,
        right_width=config.default_width,
        theme=THEME_SYSTEM,
    )


def _stored(settings: Mapping[str, Any], key: str, default: Any) -> Any:
    """Stored value for ``key``; missing and ``null`` both mean the default."""

    value = settings.get(key)
    return default if value is None else value


def _stored_width(settings: Mapping[str, Any], key: str, default: int) -> int:
    value = settings.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


def apply_settings(
    state: LayoutViewState,
    settings: Mapping[str, Any],
    desktop: bool,
    config: AgentConfig = AgentConfig(),
) -> LayoutViewState:
    """Overlay stored settings onto ``state``.

    Missing or ``null`` fields fall back to the defaults, as do widths that are
    not numbers. Visibility flags are only taken from storage on desktop
    viewports; narrow viewports always start closed.
    """

    fields: Dict[str, Any] = {
        "left_width": _stored_width(settings, "left_width", config.default_width),
        "right_width": _stored_width(settings, "right_width", config.default_width),
        "theme": _stored(settings, "theme", THEME_SYSTEM),
    }
    if fields["theme"] not in THEME_CYCLE:
        fields["theme"] = THEME_SYSTEM
    if desktop:
        fields["left_sidebar_open"] = bool(_stored(settings, "left_sidebar_open", True))
        fields["right_sidebar_open"] = bool(_stored(settings, "right_sidebar_open", True))
    return replace(state, **fields)


def toggle_sidebar(state: LayoutViewState, side: str, mobile: bool) -> Tuple[LayoutViewState, Changes]:
    opening = not state.is_open(side)
    fields: Dict[str, Any] = {_open_field(side): opening}
    if mobile and opening:
        fields[_open_field(_other(side))] = False
    return _update(state, **fields)


def dismiss_sidebar(state: LayoutViewState, side: str) -> Tuple[LayoutViewState, Changes]:
    """Close ``side`` after an outside click or backdrop tap."""

    return _update(state, **{_open_field(side): False})


def set_width(state: LayoutViewState, side: str, width: int) -> Tuple[LayoutViewState, Changes]:
    return _update(state, **{_width_field(side): width})


def collapse_sidebar(
    state: LayoutViewState, side: str, config: AgentConfig = AgentConfig()
) -> Tuple[LayoutViewState, Changes]:
    """Close ``side`` and reset its width; only the visibility change is reported."""

    new_state, changes = _update(state, **{_open_field(side): False})
    new_state = replace(new_state, **{_width_field(side): config.default_width})
    return new_state, changes


def next_theme(theme: str) -> str:
    try:
        index = THEME_CYCLE.index(theme)
    except ValueError:
        return THEME_SYSTEM
    return THEME_CYCLE[(index + 1) % len(THEME_CYCLE)]


def cycle_theme(state: LayoutViewState) -> Tuple[LayoutViewState, Changes]:
    return _update(state, theme=next_theme(state.theme))


def effective_theme(theme: str, prefers_dark: bool) -> str:
    if theme == THEME_SYSTEM:
        return THEME_DARK if prefers_dark else THEME_LIGHT
    return theme
