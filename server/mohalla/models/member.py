from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship, validates

from mohalla.core.db import Base

CHILD_AGE_LIMIT = 14
MAX_MEMBER_AGE = 120

MEMBER_GENDERS = ("Male", "Female")
MEMBER_OCCUPATIONS = (
    "Child",
    "Student",
    "Farmer",
    "Businessman",
    "Other",
    "Free",
    "Shopkeeper",
    "Worker",
    "Ulma",
    "Hafiz",
    "Teacher",
    "Engineer",
    "Doctor",
)
MEMBER_EDUCATION_LEVELS = ("Below 8th", "10th", "12th", "Graduate", "Above Graduate")
YES_NO = ("yes", "no")
DAWAT_LEVELS = ("Nil", "3-day", "10-day", "40-day", "4-month")
MEMBER_ROLES = ("Head", "Member")

# Tally columns for each non-Nil dawat category.
DAWAT_COUNT_COLUMNS = {
    "3-day": "dawat_count_3_day",
    "10-day": "dawat_count_10_day",
    "40-day": "dawat_count_40_day",
    "4-month": "dawat_count_4_month",
}

MemberGender = Enum(*MEMBER_GENDERS, name="member_gender")
MemberOccupation = Enum(*MEMBER_OCCUPATIONS, name="member_occupation")
MemberEducation = Enum(*MEMBER_EDUCATION_LEVELS, name="member_education")
MemberQuran = Enum(*YES_NO, name="member_quran")
MemberMaktab = Enum(*YES_NO, name="member_maktab")
MemberDawat = Enum(*DAWAT_LEVELS, name="member_dawat")
MemberRole = Enum(*MEMBER_ROLES, name="member_role")


def is_child_age(age: int | None) -> bool:
    return age is not None and age < CHILD_AGE_LIMIT


class Member(Base):
    __tablename__ = "house_members"

    id = Column(Integer, primary_key=True)
    house_id = Column(Integer, ForeignKey("houses.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(150), nullable=False, index=True)
    father_name = Column(String(150), nullable=True)
    age = Column(Integer, nullable=False)
    gender = Column(MemberGender, nullable=False)
    occupation = Column(MemberOccupation, nullable=False, default="Other", index=True)
    education = Column(MemberEducation, nullable=False, default="Below 8th")
    quran = Column(MemberQuran, nullable=False, default="no")
    maktab = Column(MemberMaktab, nullable=False, default="no")
    dawat = Column(MemberDawat, nullable=False, default="Nil")
    dawat_count_3_day = Column(Integer, nullable=False, default=0)
    dawat_count_10_day = Column(Integer, nullable=False, default=0)
    dawat_count_40_day = Column(Integer, nullable=False, default=0)
    dawat_count_4_month = Column(Integer, nullable=False, default=0)
    mobile = Column(String(25), nullable=True)
    role = Column(MemberRole, nullable=False, default="Member")
    is_child = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    house = relationship("House", back_populates="members")

    @validates("age")
    def _sync_is_child(self, key: str, value: int) -> int:
        self.is_child = is_child_age(value)
        return value

    @property
    def dawat_counts(self) -> dict[str, int]:
        return {key: getattr(self, column) or 0 for key, column in DAWAT_COUNT_COLUMNS.items()}

    @dawat_counts.setter
    def dawat_counts(self, counts: dict[str, int] | None) -> None:
        for key, value in (counts or {}).items():
            column = DAWAT_COUNT_COLUMNS.get(key)
            if column is not None:
                setattr(self, column, value)

    @classmethod
    def predicate_column(cls, path: str):
        """Map a predicate field path onto a column, or None if unknown."""

        if path.startswith("dawat_counts."):
            column = DAWAT_COUNT_COLUMNS.get(path.split(".", 1)[1])
            return getattr(cls, column) if column else None
        if path in cls.__table__.columns:
            return getattr(cls, path)
        return None
