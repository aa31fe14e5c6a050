"""Result types returned by ``ProductRequestHandler``.

Expected outcomes (bad input, duplicate name/code) travel as values so the
view can map them to responses without ``try/except``. Only unexpected
service failures ever raise, and the handler converts those too.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")


class HandlerStatus(str, Enum):
    OK = "ok"
    INVALID = "invalid"
    CONFLICT = "conflict"
    ERROR = "error"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True)
class HandlerResult:
    """Outcome of one handler operation.

    ``errors`` holds field-level messages (``INVALID``, ``CONFLICT`` and
    write-path ``ERROR``); ``message`` holds the text for ``SERVER_ERROR``
    and for errors reported without field detail.
    """

    status: HandlerStatus
    value: Any = None
    errors: Dict[str, List[str]] = field(default_factory=dict)
    message: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return self.status is HandlerStatus.OK

    @classmethod
    def ok(cls, value: Any = None) -> HandlerResult:
        return cls(HandlerStatus.OK, value=value)

    @classmethod
    def invalid(cls, errors: Dict[str, List[str]], value: Any = None) -> HandlerResult:
        return cls(HandlerStatus.INVALID, value=value, errors=errors)

    @classmethod
    def conflict(cls, key: str, message: str, value: Any = None) -> HandlerResult:
        return cls(HandlerStatus.CONFLICT, value=value, errors={key: [message]})

    @classmethod
    def error(
        cls,
        message: str,
        key: Optional[str] = None,
        value: Any = None,
    ) -> HandlerResult:
        errors = {key: [message]} if key else {}
        return cls(HandlerStatus.ERROR, value=value, errors=errors, message=message)

    @classmethod
    def server_error(cls, message: str) -> HandlerResult:
        return cls(HandlerStatus.SERVER_ERROR, message=message)


@dataclass(frozen=True)
class PagedList(Generic[T]):
    """One page of items plus the metadata needed to render a pager."""

    items: Sequence[T]
    page_number: int
    page_size: int
    total_count: int

    @property
    def page_count(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.page_count
