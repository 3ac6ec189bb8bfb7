from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from .session import Mode, Session, SortKey

logger = logging.getLogger(__name__)


class Action(Enum):
    NONE = "none"
    UPDATED = "updated"
    COPIED = "copied"
    QUIT = "quit"


# Key names follow Textual's ``events.Key.key`` naming.
KEYMAP: dict[Mode, dict[str, str]] = {
    Mode.REGULAR: {
        "enter": "refresh",
        "right": "refresh",
        "left": "go_back",
        "escape": "clear_selection",
        "down": "select_next",
        "up": "select_previous",
        "c": "copy",
        "f": "filter_mode",
        "s": "sort_mode",
        "r": "reset",
        "q": "quit",
    },
    Mode.FILTER: {
        "backspace": "delete_filter_char",
        "enter": "apply_filter",
        "escape": "regular_mode",
        "down": "regular_mode",
    },
    Mode.SORT: {
        "p": "sort_path",
        "d": "sort_last_modified",
        "escape": "regular_mode",
    },
}

HELP: dict[Mode, str] = {
    Mode.REGULAR: (
        "Use the arrow keys to navigate. Press [b]f[/b] to filter, [b]s[/b] to "
        "sort, [b]c[/b] to copy the object URI, [b]r[/b] to reset, or [b]q[/b] "
        "to exit."
    ),
    Mode.FILTER: (
        "Filter mode: type to edit, [b]Enter[/b] to apply, [b]Esc[/b] to leave "
        "filter mode."
    ),
    Mode.SORT: (
        "Sort mode: press [b]d[/b] to sort by date (last modified) or [b]p[/b] "
        "to sort by path. Press [b]Esc[/b] to leave sort mode."
    ),
}


def help_text(mode: Mode) -> str:
    return HELP[mode]


class InputRouter:
    """Maps ``(mode, key)`` to a session operation.

    Each table value names an ``action_*`` method. Keys missing from the
    active mode's table are ignored, except printable characters in filter
    mode, which extend the filter text.
    """

    def __init__(self, session: Session, copy: Callable[[str], None]) -> None:
        self.session = session
        self._copy = copy
        self.last_copied: Optional[str] = None

    def lookup(self, mode: Mode, key: str) -> Optional[str]:
        return KEYMAP[mode].get(key)

    def dispatch(self, key: str, character: Optional[str] = None) -> Action:
        mode = self.session.mode
        name = self.lookup(mode, key)
        if name is None:
            if mode is Mode.FILTER and _is_printable(character):
                self.session.append_filter_char(character)
                return Action.UPDATED
            return Action.NONE
        logger.debug("Key %r in %s mode -> %s", key, mode.value, name)
        return getattr(self, f"action_{name}")()

    def action_refresh(self) -> Action:
        self.session.refresh()
        return Action.UPDATED

    def action_go_back(self) -> Action:
        self.session.go_back()
        return Action.UPDATED

    def action_reset(self) -> Action:
        self.session.reset()
        return Action.UPDATED

    def action_clear_selection(self) -> Action:
        self.session.clear_selection()
        return Action.UPDATED

    def action_select_next(self) -> Action:
        self.session.select_next()
        return Action.UPDATED

    def action_select_previous(self) -> Action:
        self.session.select_previous()
        return Action.UPDATED

    def action_copy(self) -> Action:
        uri = self.session.selected_uri()
        if uri is None:
            return Action.NONE
        self._copy(uri)
        self.last_copied = uri
        return Action.COPIED

    def action_quit(self) -> Action:
        return Action.QUIT

    def action_filter_mode(self) -> Action:
        self.session.set_mode(Mode.FILTER)
        return Action.UPDATED

    def action_sort_mode(self) -> Action:
        self.session.set_mode(Mode.SORT)
        return Action.UPDATED

    def action_regular_mode(self) -> Action:
        self.session.set_mode(Mode.REGULAR)
        return Action.UPDATED

    def action_delete_filter_char(self) -> Action:
        self.session.pop_filter_char()
        return Action.UPDATED

    def action_apply_filter(self) -> Action:
        self.session.apply_filter()
        return Action.UPDATED

    def action_sort_path(self) -> Action:
        self.session.apply_sort(SortKey.PATH)
        return Action.UPDATED

    def action_sort_last_modified(self) -> Action:
        self.session.apply_sort(SortKey.LAST_MODIFIED)
        return Action.UPDATED


def _is_printable(character: Optional[str]) -> bool:
    return bool(character) and len(character) == 1 and character.isprintable()
