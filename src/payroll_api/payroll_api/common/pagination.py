from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Generic, Mapping, Sequence, TypeVar

T = TypeVar("T")


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class PageRequest:
    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @classmethod
    def from_args(cls, args: Mapping[str, Any], *, default_size: int, max_size: int) -> "PageRequest":
        page = max(1, _as_int(args.get("page"), 1))
        per_page = min(max(1, _as_int(args.get("per_page"), default_size)), max_size)
        return cls(page=page, per_page=per_page)


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    total: int
    request: PageRequest

    def meta(self) -> dict:
        return {
            "current_page": self.request.page,
            "per_page": self.request.per_page,
            "total_records": int(self.total),
            "total_pages": int(math.ceil(self.total / self.request.per_page)) if self.total else 0,
        }
