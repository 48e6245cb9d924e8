from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from mohalla.auth.deps import READ_ROLES, WRITE_ROLES, require_roles
from mohalla.core.config import settings
from mohalla.core.db import get_db
from mohalla.models.house import House
from mohalla.models.member import Member
from mohalla.models.user import User
from mohalla.schemas.house import (
    HouseCreate,
    HouseListResponse,
    HouseOut,
    HouseOverviewStats,
    HouseUpdate,
    MemberCreate,
    MemberUpdate,
)
from mohalla.services import houses as houses_service
from mohalla.services.pagination import resolve_pagination, total_pages
from mohalla.services.statistics import overview_stats

router = APIRouter(prefix="/houses", tags=["houses"])


def _get_house_or_404(db: Session, house_id: int) -> House:
    house = houses_service.load_members(db.query(House)).filter(House.id == house_id).first()
    if house is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="House not found")
    return house


def _get_member_or_404(house: House, member_id: int) -> Member:
    member = next((item for item in house.members if item.id == member_id), None)
    if member is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    return member


@router.get("", response_model=HouseListResponse)
def list_houses(
    request: Request,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(*READ_ROLES)),
) -> HouseListResponse:
    params = request.query_params
    paging = resolve_pagination(
        params,
        default_limit=settings.HOUSES_DEFAULT_PAGE_SIZE,
        max_limit=settings.MAX_PAGE_SIZE,
    )
    query = houses_service.build_houses_query(db, params)
    total = query.count()
    houses = (
        houses_service.load_members(query.order_by(House.number.asc()))
        .offset(paging.skip)
        .limit(paging.take)
        .all()
    )
    return HouseListResponse(
        houses=[HouseOut.from_orm(house) for house in houses],
        total_pages=total_pages(total, paging.limit),
        current_page=paging.page,
        total=total,
    )


@router.get("/stats/overview", response_model=HouseOverviewStats)
def house_overview(request: Request, db: Session = Depends(get_db)) -> HouseOverviewStats:
    query = houses_service.build_houses_query(db, request.query_params)
    return overview_stats(houses_service.load_members(query).all())


@router.get("/{house_id}", response_model=HouseOut)
def get_house(
    house_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(*READ_ROLES)),
) -> HouseOut:
    return HouseOut.from_orm(_get_house_or_404(db, house_id))


@router.post("", response_model=HouseOut, status_code=status.HTTP_201_CREATED)
def create_house(
    payload: HouseCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(*WRITE_ROLES)),
) -> HouseOut:
    house = houses_service.create_house(db, payload)
    return HouseOut.from_orm(house)


@router.put("/{house_id}", response_model=HouseOut)
def update_house(
    house_id: int,
    payload: HouseUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(*WRITE_ROLES)),
) -> HouseOut:
    house = _get_house_or_404(db, house_id)
    house = houses_service.update_house(db, house, payload)
    return HouseOut.from_orm(house)


@router.delete("/{house_id}", response_model=None, status_code=status.HTTP_204_NO_CONTENT)
def delete_house(
    house_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(*WRITE_ROLES)),
) -> Response:
    house = _get_house_or_404(db, house_id)
    houses_service.delete_house(db, house)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{house_id}/members", response_model=HouseOut, status_code=status.HTTP_201_CREATED)
def add_house_member(
    house_id: int,
    payload: MemberCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(*WRITE_ROLES)),
) -> HouseOut:
    house = _get_house_or_404(db, house_id)
    houses_service.add_member(db, house, payload)
    return HouseOut.from_orm(house)


@router.put("/{house_id}/members/{member_id}", response_model=HouseOut)
def update_house_member(
    house_id: int,
    member_id: int,
    payload: MemberUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(*WRITE_ROLES)),
) -> HouseOut:
    house = _get_house_or_404(db, house_id)
    member = _get_member_or_404(house, member_id)
    houses_service.update_member(db, member, payload)
    db.refresh(house)
    return HouseOut.from_orm(house)


@router.delete("/{house_id}/members/{member_id}", response_model=HouseOut)
def remove_house_member(
    house_id: int,
    member_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(*WRITE_ROLES)),
) -> HouseOut:
    house = _get_house_or_404(db, house_id)
    member = _get_member_or_404(house, member_id)
    houses_service.remove_member(db, house, member)
    return HouseOut.from_orm(house)
