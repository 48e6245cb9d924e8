from __future__ import annotations

import logging

from sqlalchemy import asc, desc, false, func, or_
from sqlalchemy.orm import Query, Session

from mohalla.models.resource import RESOURCE_CATEGORIES, Resource
from mohalla.schemas.resource import ResourceCreate, ResourceUpdate
from mohalla.services.predicate_sql import like_pattern

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "createdAt": Resource.created_at,
    "title": Resource.title,
    "downloadCount": Resource.download_count,
    "viewCount": Resource.view_count,
    "fileSize": Resource.file_size,
}

NULLABLE_FIELDS = {"description", "file_name", "file_type"}


def build_resources_query(
    db: Session,
    *,
    search: str | None,
    category: str | None,
) -> Query:
    query: Query = db.query(Resource).filter(Resource.status == "active")

    if search:
        pattern = like_pattern(search.lower())
        query = query.filter(
            or_(
                func.lower(Resource.title).like(pattern, escape="/"),
                func.lower(Resource.description).like(pattern, escape="/"),
            )
        )

    if category:
        if category in RESOURCE_CATEGORIES:
            query = query.filter(Resource.category == category)
        else:
            query = query.filter(false())

    return query


def apply_resource_sort(query: Query, sort_by: str | None, sort_order: str | None) -> Query:
    column = SORTABLE_FIELDS.get(sort_by or "createdAt", Resource.created_at)
    direction = asc if sort_order == "asc" else desc
    return query.order_by(direction(column), desc(Resource.id))


def popular_resources(db: Session, limit: int) -> list[Resource]:
    return (
        db.query(Resource)
        .filter(Resource.status == "active")
        .order_by(desc(Resource.download_count), desc(Resource.view_count), asc(Resource.id))
        .limit(limit)
        .all()
    )


def create_resource(db: Session, payload: ResourceCreate) -> Resource:
    resource = Resource(**payload.dict())
    db.add(resource)
    db.commit()
    db.refresh(resource)
    logger.info("resource_created", extra={"resource_id": resource.id, "category": resource.category})
    return resource


def update_resource(db: Session, resource: Resource, payload: ResourceUpdate) -> Resource:
    changes = payload.dict(exclude_unset=True)
    for field, value in changes.items():
        if value is None and field not in NULLABLE_FIELDS:
            continue
        setattr(resource, field, value)
    db.commit()
    db.refresh(resource)
    logger.info("resource_updated", extra={"resource_id": resource.id, "fields": sorted(changes)})
    return resource


def delete_resource(db: Session, resource: Resource) -> None:
    resource_id = resource.id
    db.delete(resource)
    db.commit()
    logger.info("resource_deleted", extra={"resource_id": resource_id})


def record_view(db: Session, resource: Resource) -> Resource:
    resource.view_count = Resource.view_count + 1
    db.commit()
    db.refresh(resource)
    return resource


def record_download(db: Session, resource: Resource) -> Resource:
    resource.download_count = Resource.download_count + 1
    db.commit()
    db.refresh(resource)
    return resource
