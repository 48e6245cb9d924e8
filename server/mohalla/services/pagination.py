from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mohalla.core.errors import InvalidParameter

# OFFSET is bound as a signed 64-bit integer.
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def take(self) -> int:
        return self.limit


def _parse_int(params: Mapping[str, Any], field: str, default: int) -> int:
    raw = params.get(field)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    if isinstance(raw, bool):
        raise InvalidParameter(field, "malformed")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise InvalidParameter(field, "malformed", f"'{field}' must be an integer") from exc


def resolve_pagination(
    params: Mapping[str, Any],
    *,
    default_limit: int = 50,
    max_limit: int = 100,
) -> PageRequest:
    page = _parse_int(params, "page", 1)
    if page < 1:
        raise InvalidParameter("page", "out_of_range", "'page' must be 1 or greater")

    limit = _parse_int(params, "limit", default_limit)
    if limit < 1 or limit > max_limit:
        raise InvalidParameter("limit", "out_of_range", f"'limit' must be between 1 and {max_limit}")

    paging = PageRequest(page=page, limit=limit)
    if paging.skip > MAX_OFFSET:
        raise InvalidParameter("page", "out_of_range", "'page' is too large")
    return paging


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)
