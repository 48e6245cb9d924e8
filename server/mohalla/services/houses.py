from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, selectinload

from mohalla.core.errors import ConflictingUniqueValue
from mohalla.models.house import House
from mohalla.models.member import Member
from mohalla.schemas.house import HouseCreate, HouseUpdate, MemberCreate, MemberUpdate
from mohalla.services.house_filters import compile_filter
from mohalla.services.predicate_sql import apply_predicate

logger = logging.getLogger(__name__)

NULLABLE_MEMBER_FIELDS = {"father_name", "mobile"}
NULLABLE_HOUSE_FIELDS = {"notes"}


def build_houses_query(db: Session, params: Mapping[str, Any]) -> Query:
    predicate = compile_filter(params)
    return apply_predicate(db.query(House), predicate, House)


def load_members(query: Query) -> Query:
    return query.options(selectinload(House.members))


def build_member(payload: MemberCreate) -> Member:
    return Member(**payload.dict())


def apply_member_changes(member: Member, payload: MemberUpdate) -> None:
    for field, value in payload.dict(exclude_unset=True).items():
        if value is None and field not in NULLABLE_MEMBER_FIELDS:
            continue
        setattr(member, field, value)


def replace_members(house: House, payloads: Iterable[MemberCreate]) -> None:
    house.members = [build_member(payload) for payload in payloads]


def _ensure_number_available(db: Session, number: str, exclude_id: int | None = None) -> None:
    query = db.query(House.id).filter(House.number == number)
    if exclude_id is not None:
        query = query.filter(House.id != exclude_id)
    if query.first() is not None:
        raise ConflictingUniqueValue("number", number, "House number already exists")


def _commit_house(db: Session, house: House) -> House:
    # The unique index on houses.number is the authority; the pre-check above
    # only gives the common case a friendly answer.
    number = house.number
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("house_number_conflict", extra={"number": number})
        raise ConflictingUniqueValue("number", number, "House number already exists") from exc
    db.refresh(house)
    return house


def create_house(db: Session, payload: HouseCreate) -> House:
    _ensure_number_available(db, payload.number)
    house = House(
        number=payload.number,
        street=payload.street,
        taleem=payload.taleem,
        mashwara=payload.mashwara,
        notes=payload.notes,
    )
    replace_members(house, payload.members)
    db.add(house)
    house = _commit_house(db, house)
    logger.info("house_created", extra={"house_id": house.id, "number": house.number, "members": len(house.members)})
    return house


def update_house(db: Session, house: House, payload: HouseUpdate) -> House:
    changes = payload.dict(exclude_unset=True)
    members = changes.pop("members", None)

    if changes.get("number"):
        _ensure_number_available(db, changes["number"], exclude_id=house.id)

    for field, value in changes.items():
        if value is None and field not in NULLABLE_HOUSE_FIELDS:
            continue
        setattr(house, field, value)

    if members is not None:
        replace_members(house, payload.members or [])

    house = _commit_house(db, house)
    logger.info("house_updated", extra={"house_id": house.id, "fields": sorted(changes)})
    return house


def add_member(db: Session, house: House, payload: MemberCreate) -> Member:
    member = build_member(payload)
    house.members.append(member)
    db.commit()
    db.refresh(house)
    logger.info("member_added", extra={"house_id": house.id, "member_id": member.id})
    return member


def update_member(db: Session, member: Member, payload: MemberUpdate) -> Member:
    apply_member_changes(member, payload)
    db.commit()
    db.refresh(member)
    logger.info("member_updated", extra={"house_id": member.house_id, "member_id": member.id})
    return member


def remove_member(db: Session, house: House, member: Member) -> None:
    member_id = member.id
    house.members.remove(member)
    db.commit()
    db.refresh(house)
    logger.info("member_removed", extra={"house_id": house.id, "member_id": member_id})


def delete_house(db: Session, house: House) -> None:
    house_id, number = house.id, house.number
    db.delete(house)
    db.commit()
    logger.info("house_deleted", extra={"house_id": house_id, "number": number})
