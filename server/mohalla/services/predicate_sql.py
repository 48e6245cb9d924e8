from __future__ import annotations

from sqlalchemy import and_, false, func, or_, true
from sqlalchemy.orm import Query, RelationshipProperty
from sqlalchemy.sql.elements import ColumnElement

from mohalla.services.predicates import (
    And,
    ElementMatch,
    Equals,
    MatchAll,
    Or,
    Predicate,
    Range,
    RegexContains,
)


def _column(model, path: str):
    resolver = getattr(model, "predicate_column", None)
    if resolver is not None:
        return resolver(path)
    if path in model.__table__.columns:
        return getattr(model, path)
    return None


def like_pattern(text: str) -> str:
    escaped = text.replace("/", "//").replace("%", "/%").replace("_", "/_")
    return f"%{escaped}%"


def to_clause(predicate: Predicate, model) -> ColumnElement:
    """Translate a predicate into a boolean SQL expression over `model`.

    ElementMatch becomes a correlated EXISTS over the related table, so every
    condition inside it is checked against the same row. Fields the model does
    not know compile to FALSE, mirroring a document store where a missing
    field never matches.
    """

    if isinstance(predicate, MatchAll):
        return true()

    if isinstance(predicate, (Equals, Range, RegexContains)):
        column = _column(model, predicate.field)
        if column is None:
            return false()
        if isinstance(predicate, Equals):
            return column == predicate.value
        if isinstance(predicate, Range):
            bounds = []
            if predicate.min is not None:
                bounds.append(column >= predicate.min)
            if predicate.max is not None:
                bounds.append(column <= predicate.max)
            return and_(true(), *bounds)
        if predicate.case_insensitive:
            return func.lower(column).like(like_pattern(predicate.text.lower()), escape="/")
        return column.like(like_pattern(predicate.text), escape="/")

    if isinstance(predicate, And):
        return and_(true(), *[to_clause(inner, model) for inner in predicate.predicates])

    if isinstance(predicate, Or):
        return or_(false(), *[to_clause(inner, model) for inner in predicate.predicates])

    if isinstance(predicate, ElementMatch):
        relation = getattr(model, predicate.collection, None)
        prop = getattr(relation, "property", None)
        if not isinstance(prop, RelationshipProperty):
            return false()
        target = prop.mapper.class_
        return relation.any(to_clause(predicate.predicate, target))

    raise TypeError(f"Unsupported predicate: {predicate!r}")


def apply_predicate(query: Query, predicate: Predicate, model) -> Query:
    if isinstance(predicate, MatchAll):
        return query
    return query.filter(to_clause(predicate, model))
