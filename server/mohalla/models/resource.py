from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Enum, Integer, String
from sqlalchemy.sql import func

from mohalla.core.db import Base

RESOURCE_CATEGORIES = ("PDF", "Document", "Image", "Video", "Link", "Audio", "Other")
RESOURCE_STATUSES = ("active", "inactive", "pending")

ResourceCategory = Enum(*RESOURCE_CATEGORIES, name="resource_category")
ResourceStatus = Enum(*RESOURCE_STATUSES, name="resource_status")

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size: int | None) -> str:
    if not size:
        return "Unknown"
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    scaled = round(size / 1024**exponent, 2)
    return f"{scaled:g} {_SIZE_UNITS[exponent]}"


class Resource(Base):
    __tablename__ = "resources"

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)
    category = Column(ResourceCategory, nullable=False, default="Other", index=True)
    file_url = Column(String(500), nullable=False)
    file_name = Column(String(255), nullable=True)
    file_size = Column(Integer, nullable=True)
    file_type = Column(String(100), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    download_count = Column(Integer, nullable=False, default=0)
    view_count = Column(Integer, nullable=False, default=0)
    is_public = Column(Boolean, nullable=False, default=True)
    uploaded_by = Column(String(150), nullable=False, default="admin")
    status = Column(ResourceStatus, nullable=False, default="active", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def formatted_file_size(self) -> str:
        return format_file_size(self.file_size)
