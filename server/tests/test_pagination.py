from __future__ import annotations

import pytest

from mohalla.core.errors import InvalidParameter
from mohalla.services.pagination import resolve_pagination, total_pages


def test_defaults():
    paging = resolve_pagination({})
    assert (paging.page, paging.limit) == (1, 50)
    assert (paging.skip, paging.take) == (0, 50)


def test_skip_and_take():
    paging = resolve_pagination({"page": "3", "limit": "20"})
    assert paging.skip == 40
    assert paging.take == 20


def test_custom_default_limit():
    assert resolve_pagination({"page": "2"}, default_limit=20).skip == 20


@pytest.mark.parametrize(
    "params,field,kind",
    [
        ({"page": "0"}, "page", "out_of_range"),
        ({"page": "-1"}, "page", "out_of_range"),
        ({"page": "first"}, "page", "malformed"),
        ({"page": "1.5"}, "page", "malformed"),
        ({"page": "99999999999999999999"}, "page", "out_of_range"),
        ({"limit": "101"}, "limit", "out_of_range"),
        ({"limit": "0"}, "limit", "out_of_range"),
        ({"limit": "lots"}, "limit", "malformed"),
    ],
)
def test_invalid_values(params, field, kind):
    with pytest.raises(InvalidParameter) as exc_info:
        resolve_pagination(params)
    assert exc_info.value.field == field
    assert exc_info.value.kind == kind


def test_limit_cap_is_configurable():
    assert resolve_pagination({"limit": "100"}).limit == 100
    with pytest.raises(InvalidParameter):
        resolve_pagination({"limit": "30"}, max_limit=25)


def test_total_pages():
    assert total_pages(120, 50) == 3
    assert total_pages(100, 50) == 2
    assert total_pages(1, 50) == 1
    assert total_pages(0, 50) == 0


def test_offset_must_fit_a_64_bit_integer():
    assert resolve_pagination({"page": str(2**63), "limit": "1"}).skip == 2**63 - 1
    with pytest.raises(InvalidParameter) as exc_info:
        resolve_pagination({"page": str(2**63 + 1), "limit": "1"})
    assert exc_info.value.field == "page"
    assert exc_info.value.kind == "out_of_range"
