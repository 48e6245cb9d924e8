from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from mohalla.models.member import (
    CHILD_AGE_LIMIT,
    DAWAT_LEVELS,
    MEMBER_EDUCATION_LEVELS,
    MEMBER_GENDERS,
    MEMBER_OCCUPATIONS,
    YES_NO,
)
from mohalla.schemas.filters import HouseFilterRequest
from mohalla.services.predicates import (
    MATCH_ALL,
    MATCH_NOTHING,
    ElementMatch,
    Equals,
    Predicate,
    Range,
    RegexContains,
    all_of,
    any_of,
)

# Member attributes matched by plain equality, in the order they are composed,
# with the values each column can hold.
MEMBER_EQUALITY_FIELDS = {
    "occupation": MEMBER_OCCUPATIONS,
    "education": MEMBER_EDUCATION_LEVELS,
    "quran": YES_NO,
    "gender": MEMBER_GENDERS,
    "dawat": DAWAT_LEVELS,
}

SEARCH_FIELDS = ("number", "street")

MAKTAB_AGE_RANGE = (0, CHILD_AGE_LIMIT - 1)

# Dawat tallies are stored in 32-bit integer columns.
MAX_DAWAT_TIMES = 2**31 - 1


def _choice(field: str, value: str, allowed: tuple[str, ...]) -> Predicate:
    # Enum columns reject unknown literals on PostgreSQL, so those never reach SQL.
    if value not in allowed:
        return MATCH_NOTHING
    return Equals(field, value)


def _dawat_times(text: str) -> Optional[int]:
    try:
        times = int(text)
    except ValueError:
        return None
    if times < 0 or times > MAX_DAWAT_TIMES:
        return None
    return times


def _search_predicate(text: str) -> Predicate:
    return any_of(
        [RegexContains(field, text) for field in SEARCH_FIELDS]
        + [ElementMatch("members", RegexContains("name", text))]
    )


def _age_range(request: HouseFilterRequest) -> Optional[Range]:
    lower, upper = request.min_age, request.max_age
    if request.maktab is not None:
        child_min, child_max = MAKTAB_AGE_RANGE
        lower = child_min if lower is None else max(lower, child_min)
        upper = child_max if upper is None else min(upper, child_max)
    if lower is None and upper is None:
        return None
    return Range("age", lower, upper)


def _member_predicate(request: HouseFilterRequest) -> Predicate:
    conditions: list[Predicate] = []
    for field, allowed in MEMBER_EQUALITY_FIELDS.items():
        value = getattr(request, field)
        if value is not None:
            conditions.append(_choice(field, value, allowed))

    if request.maktab is not None:
        conditions.append(_choice("maktab", request.maktab, YES_NO))

    age_range = _age_range(request)
    if age_range is not None:
        conditions.append(age_range)

    if request.dawat_count_key is not None and request.dawat_count_times is not None:
        times = _dawat_times(request.dawat_count_times)
        if times is None:
            conditions.append(MATCH_NOTHING)
        else:
            conditions.append(Equals(f"dawat_counts.{request.dawat_count_key}", times))

    if not conditions:
        return MATCH_ALL
    return ElementMatch("members", all_of(conditions))


def compile_filter(params: Union[HouseFilterRequest, Mapping[str, Any]]) -> Predicate:
    """Build the house predicate for a listing or statistics request.

    Top-level conditions (search, street, member match) must all hold. Every
    member-scoped condition is folded into one ElementMatch so a single member
    has to satisfy all of them together.
    """

    request = params if isinstance(params, HouseFilterRequest) else HouseFilterRequest.from_params(params)

    terms: list[Predicate] = []
    if request.search is not None:
        terms.append(_search_predicate(request.search))
    if request.street is not None:
        terms.append(Equals("street", request.street))
    terms.append(_member_predicate(request))
    return all_of(terms)
