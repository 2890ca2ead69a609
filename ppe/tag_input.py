"""Free-form multi-value tag input with suggestions from a fixed vocabulary."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

COMMIT_KEYS = frozenset({"Return", "Enter", "KP_Enter"})
BACKSPACE_KEYS = frozenset({"BackSpace", "Backspace"})


class TagInput:
    """Selected tags for one field (categories or technologies).

    ``candidate_pool`` is read but never modified. Any string may be selected,
    including ones that are not in the pool.
    """

    def __init__(self, candidate_pool: Sequence[str], selected: Iterable[str] = ()) -> None:
        self.candidate_pool: Tuple[str, ...] = tuple(candidate_pool)
        self._selected: List[str] = []
        for value in selected:
            if value not in self._selected:
                self._selected.append(value)
        self.query = ""
        self.is_open = False

    def __repr__(self) -> str:  # pragma: no cover - utility repr
        return f"<TagInput {self._selected!r} query={self.query!r}>"

    @property
    def selected(self) -> List[str]:
        return list(self._selected)

    @property
    def suggestions(self) -> List[str]:
        """Pool entries containing the query (any case), minus selected ones, in pool order."""
        needle = self.query.lower()
        return [
            option
            for option in self.candidate_pool
            if needle in option.lower() and option not in self._selected
        ]

    @property
    def dropdown_visible(self) -> bool:
        return self.is_open and bool(self.suggestions)

    # ------------------------------------------------------------------
    # Dropdown state
    # ------------------------------------------------------------------
    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def set_query(self, text: str) -> List[str]:
        self.query = text
        self.is_open = True
        return self.suggestions

    def select(self, option: str) -> bool:
        added = option not in self._selected
        if added:
            self._selected.append(option)
            logger.debug("Selected tag %r", option)
        self.query = ""
        return added

    def remove(self, value: str) -> bool:
        if value not in self._selected:
            return False
        self._selected.remove(value)
        logger.debug("Removed tag %r", value)
        return True

    def commit_free_text(self) -> bool:
        """Add the typed query as a custom tag.

        Only text that is not exactly a pool entry is committed; pool entries
        are picked from the suggestions instead.
        """
        text = self.query.strip()
        if not text or text in self.candidate_pool or text in self._selected:
            return False

        self._selected.append(text)
        self.query = ""
        logger.debug("Committed free-text tag %r", text)
        return True

    def backspace_at_empty(self) -> Optional[str]:
        """Drop the last tag when backspace is pressed on an empty query."""
        if self.query or not self._selected:
            return None
        removed = self._selected.pop()
        logger.debug("Removed last tag %r", removed)
        return removed

    def handle_key(self, key: str) -> bool:
        """Dispatch a key name; return True when the key was consumed."""
        if key in COMMIT_KEYS:
            return self.commit_free_text()
        if key in BACKSPACE_KEYS:
            return self.backspace_at_empty() is not None
        return False
