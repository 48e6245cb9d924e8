from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from mohalla.auth.deps import WRITE_ROLES, require_roles
from mohalla.core.config import settings
from mohalla.core.db import get_db
from mohalla.models.resource import Resource
from mohalla.models.user import User
from mohalla.schemas.resource import (
    ResourceCreate,
    ResourceListResponse,
    ResourceOut,
    ResourceStats,
    ResourceUpdate,
)
from mohalla.services import resources as resources_service
from mohalla.services.pagination import resolve_pagination, total_pages
from mohalla.services.statistics import resource_stats

router = APIRouter(prefix="/resources", tags=["resources"])


def _get_resource_or_404(db: Session, resource_id: int) -> Resource:
    resource = db.get(Resource, resource_id)
    if resource is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")
    return resource


@router.get("", response_model=ResourceListResponse)
def list_resources(
    request: Request,
    search: str | None = Query(default=None),
    category: str | None = Query(default=None),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default="desc", alias="sortOrder"),
    db: Session = Depends(get_db),
) -> ResourceListResponse:
    paging = resolve_pagination(
        request.query_params,
        default_limit=settings.RESOURCES_DEFAULT_PAGE_SIZE,
        max_limit=settings.MAX_PAGE_SIZE,
    )
    query = resources_service.build_resources_query(db, search=search, category=category)
    total = query.count()
    resources = (
        resources_service.apply_resource_sort(query, sort_by, sort_order)
        .offset(paging.skip)
        .limit(paging.take)
        .all()
    )
    return ResourceListResponse(
        resources=[ResourceOut.from_orm(resource) for resource in resources],
        total_pages=total_pages(total, paging.limit),
        current_page=paging.page,
        total=total,
    )


@router.get("/stats/overview", response_model=ResourceStats)
def resources_overview(db: Session = Depends(get_db)) -> ResourceStats:
    return resource_stats(db.query(Resource).all())


@router.get("/popular", response_model=list[ResourceOut])
def popular(
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
) -> list[ResourceOut]:
    return [ResourceOut.from_orm(resource) for resource in resources_service.popular_resources(db, limit)]


@router.get("/{resource_id}", response_model=ResourceOut)
def get_resource(resource_id: int, db: Session = Depends(get_db)) -> ResourceOut:
    resource = _get_resource_or_404(db, resource_id)
    return ResourceOut.from_orm(resources_service.record_view(db, resource))


@router.post("", response_model=ResourceOut, status_code=status.HTTP_201_CREATED)
def create_resource(
    payload: ResourceCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(*WRITE_ROLES)),
) -> ResourceOut:
    return ResourceOut.from_orm(resources_service.create_resource(db, payload))


@router.put("/{resource_id}", response_model=ResourceOut)
def update_resource(
    resource_id: int,
    payload: ResourceUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(*WRITE_ROLES)),
) -> ResourceOut:
    resource = _get_resource_or_404(db, resource_id)
    return ResourceOut.from_orm(resources_service.update_resource(db, resource, payload))


@router.delete("/{resource_id}", response_model=None, status_code=status.HTTP_204_NO_CONTENT)
def delete_resource(
    resource_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(*WRITE_ROLES)),
) -> Response:
    resource = _get_resource_or_404(db, resource_id)
    resources_service.delete_resource(db, resource)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{resource_id}/download")
def download_resource(resource_id: int, db: Session = Depends(get_db)) -> dict[str, object]:
    resource = resources_service.record_download(db, _get_resource_or_404(db, resource_id))
    return {"message": "Download count incremented", "downloadCount": resource.download_count}
