from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, validator

from mohalla.models.resource import RESOURCE_CATEGORIES, RESOURCE_STATUSES
from mohalla.schemas.house import CamelModel


class ResourceFields(CamelModel):
    @validator("category", check_fields=False)
    def validate_category(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in RESOURCE_CATEGORIES:
            raise ValueError("Invalid resource category")
        return value

    @validator("status", check_fields=False)
    def validate_status(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in RESOURCE_STATUSES:
            raise ValueError("Invalid resource status")
        return value

    @validator("tags", check_fields=False)
    def clean_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        return [tag.strip() for tag in value if tag and tag.strip()]


class ResourceCreate(ResourceFields):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    category: str = "Other"
    file_url: str = Field(..., min_length=1, max_length=500)
    file_name: Optional[str] = Field(None, max_length=255)
    file_size: int = Field(0, ge=0)
    file_type: Optional[str] = Field(None, max_length=100)
    tags: List[str] = Field(default_factory=list)
    is_public: bool = True
    uploaded_by: str = Field("admin", max_length=150)


class ResourceUpdate(ResourceFields):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    category: Optional[str] = None
    file_url: Optional[str] = Field(None, min_length=1, max_length=500)
    file_name: Optional[str] = Field(None, max_length=255)
    file_size: Optional[int] = Field(None, ge=0)
    file_type: Optional[str] = Field(None, max_length=100)
    tags: Optional[List[str]] = None
    is_public: Optional[bool] = None
    status: Optional[str] = None


class ResourceOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    category: str
    file_url: str
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    formatted_file_size: str
    tags: List[str]
    download_count: int
    view_count: int
    is_public: bool
    uploaded_by: str
    status: str
    created_at: datetime
    updated_at: datetime


class ResourceListResponse(CamelModel):
    resources: List[ResourceOut]
    total_pages: int
    current_page: int
    total: int


class ResourceOverview(CamelModel):
    total_resources: int = 0
    total_downloads: int = 0
    total_views: int = 0
    total_size: int = 0
    categories: List[str] = Field(default_factory=list)


class ResourceCategoryStat(CamelModel):
    category: str
    count: int
    total_downloads: int


class ResourceStats(CamelModel):
    overview: ResourceOverview
    category_stats: List[ResourceCategoryStat]
