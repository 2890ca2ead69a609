"""Opaque local references for files picked during an editing session."""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from .constants import LOCAL_REF_SCHEME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalRef:
    """Token standing in for a picked file until it is uploaded somewhere.

    Two references are equal when their tokens are equal. The token is not a
    path and carries no information about the file it points to.
    """

    token: str

    @classmethod
    def mint(cls) -> "LocalRef":
        return cls(f"{LOCAL_REF_SCHEME}:{uuid.uuid4().hex}")

    @classmethod
    def parse(cls, value: str) -> Optional["LocalRef"]:
        """Return a reference for a token string, or None for any other URL."""
        if isinstance(value, str) and value.startswith(f"{LOCAL_REF_SCHEME}:"):
            return cls(value)
        return None

    def __str__(self) -> str:
        return self.token


ImageUrl = Union[LocalRef, str]


def url_text(url: ImageUrl) -> str:
    return str(url) if url else ""


class LocalRefRegistry:
    """Track which picked file each live reference points to.

    References are acquired when a file enters a gallery and must be released
    when the entry is removed or the editing session ends. Release listeners
    are told about every released reference so caches keyed by it can drop
    their entries.
    """

    def __init__(self) -> None:
        self._files: Dict[LocalRef, Any] = {}
        self._release_listeners: List[Callable[[LocalRef], None]] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, ref: object) -> bool:
        return ref in self._files

    def add_release_listener(self, listener: Callable[[LocalRef], None]) -> None:
        self._release_listeners.append(listener)

    def acquire(self, source_file: Any) -> LocalRef:
        ref = LocalRef.mint()
        with self._lock:
            self._files[ref] = source_file
        logger.debug("Acquired %s", ref)
        return ref

    def resolve(self, ref: ImageUrl) -> Optional[Any]:
        """Return the file behind a live reference, or None."""
        if not isinstance(ref, LocalRef):
            ref = LocalRef.parse(ref)
            if ref is None:
                return None
        with self._lock:
            return self._files.get(ref)

    def release(self, ref: ImageUrl) -> bool:
        """Release a reference. Remote URLs and unknown tokens are ignored."""
        if not isinstance(ref, LocalRef):
            ref = LocalRef.parse(ref)
            if ref is None:
                return False

        with self._lock:
            if ref not in self._files:
                return False
            del self._files[ref]

        logger.debug("Released %s", ref)
        for listener in self._release_listeners:
            listener(ref)
        return True

    def release_all(self) -> int:
        with self._lock:
            refs = list(self._files)
        return sum(1 for ref in refs if self.release(ref))
