"""Composable match predicates over house documents and their nested members.

A predicate describes *what* should match without committing to a storage
engine. :mod:`mohalla.services.predicate_sql` turns one into a SQLAlchemy
clause; :func:`matches` evaluates one against already-loaded objects or plain
mappings so the same rules can be checked without a database.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class MatchAll:
    pass


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any


@dataclass(frozen=True)
class Range:
    """Inclusive bounds on a numeric field; either side may be open."""

    field: str
    min: Optional[int] = None
    max: Optional[int] = None


@dataclass(frozen=True)
class RegexContains:
    """Substring match; `text` is taken literally, not as a pattern."""

    field: str
    text: str
    case_insensitive: bool = True


@dataclass(frozen=True)
class Or:
    predicates: Tuple["Predicate", ...]


@dataclass(frozen=True)
class And:
    predicates: Tuple["Predicate", ...]


@dataclass(frozen=True)
class ElementMatch:
    """At least one element of `collection` satisfies `predicate` on its own."""

    collection: str
    predicate: "Predicate"


Predicate = Union[MatchAll, Equals, Range, RegexContains, Or, And, ElementMatch]

MATCH_ALL = MatchAll()

# An empty disjunction: compiles to FALSE and never matches in memory.
MATCH_NOTHING = Or(())

MISSING = object()


def all_of(predicates: Iterable[Predicate]) -> Predicate:
    """Conjunction that drops MatchAll terms and unwraps a single survivor."""

    terms = tuple(p for p in predicates if not isinstance(p, MatchAll))
    if not terms:
        return MATCH_ALL
    if len(terms) == 1:
        return terms[0]
    return And(terms)


def any_of(predicates: Iterable[Predicate]) -> Predicate:
    terms = tuple(predicates)
    if any(isinstance(p, MatchAll) for p in terms):
        return MATCH_ALL
    if len(terms) == 1:
        return terms[0]
    return Or(terms)


def resolve_path(document: Any, path: str) -> Any:
    current = document
    for segment in path.split("."):
        if current is None or current is MISSING:
            return MISSING
        if isinstance(current, Mapping):
            current = current.get(segment, MISSING)
        else:
            current = getattr(current, segment, MISSING)
    return current


def _within(value: Any, lower: Optional[int], upper: Optional[int]) -> bool:
    if value is MISSING or value is None or isinstance(value, bool):
        return False
    if lower is not None and value < lower:
        return False
    if upper is not None and value > upper:
        return False
    return True


def matches(predicate: Predicate, document: Any) -> bool:
    """Evaluate `predicate` against a mapping or attribute object."""

    if isinstance(predicate, MatchAll):
        return True
    if isinstance(predicate, Equals):
        value = resolve_path(document, predicate.field)
        return value is not MISSING and value == predicate.value
    if isinstance(predicate, Range):
        return _within(resolve_path(document, predicate.field), predicate.min, predicate.max)
    if isinstance(predicate, RegexContains):
        value = resolve_path(document, predicate.field)
        if not isinstance(value, str):
            return False
        flags = re.IGNORECASE if predicate.case_insensitive else 0
        return re.search(re.escape(predicate.text), value, flags) is not None
    if isinstance(predicate, Or):
        return any(matches(inner, document) for inner in predicate.predicates)
    if isinstance(predicate, And):
        return all(matches(inner, document) for inner in predicate.predicates)
    if isinstance(predicate, ElementMatch):
        elements = resolve_path(document, predicate.collection)
        if elements is MISSING or elements is None:
            return False
        return any(matches(predicate.predicate, element) for element in elements)
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def filter_documents(predicate: Predicate, documents: Iterable[Any]) -> list[Any]:
    return [document for document in documents if matches(predicate, document)]
