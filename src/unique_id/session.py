"""Per-file session state used by ``create_id``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Session(Protocol):
    """Per-file compilation context supplied by the host.

    A session lives for the processing of one file. ``create_id`` stores the
    file's identity string and its counters in the session's slots.
    """

    @property
    def file_path(self) -> str | None: ...

    @property
    def source_text(self) -> str: ...

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


@dataclass
class FileSession:
    """Dict-backed ``Session`` for a single source file.

    Not safe for concurrent use: counter updates are read-modify-write.
    """

    source_text: str
    file_path: str | None = None
    _slots: dict[str, Any] = field(default_factory=dict, repr=False)

    def get(self, key: str) -> Any:
        return self._slots.get(key)

    def set(self, key: str, value: Any) -> None:
        self._slots[key] = value


__all__ = ["FileSession", "Session"]
