from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship

from mohalla.core.db import Base
from mohalla.models.member import is_child_age


class House(Base):
    __tablename__ = "houses"

    id = Column(Integer, primary_key=True)
    number = Column(String(50), nullable=False, unique=True)
    street = Column(String(150), nullable=False, index=True)
    taleem = Column(Boolean, default=False, nullable=False)
    mashwara = Column(Boolean, default=False, nullable=False)
    notes = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    members = relationship(
        "Member",
        back_populates="house",
        order_by="Member.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    @property
    def total_members(self) -> int:
        return len(self.members)

    @property
    def adults_count(self) -> int:
        return len([member for member in self.members if not is_child_age(member.age)])

    @property
    def children_count(self) -> int:
        return len([member for member in self.members if is_child_age(member.age)])

    @classmethod
    def predicate_column(cls, path: str):
        if path in cls.__table__.columns:
            return getattr(cls, path)
        return None
