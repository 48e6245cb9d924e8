from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, validator
from pydantic.alias_generators import to_camel

from mohalla.models.member import (
    DAWAT_COUNT_COLUMNS,
    DAWAT_LEVELS,
    MAX_MEMBER_AGE,
    MEMBER_EDUCATION_LEVELS,
    MEMBER_GENDERS,
    MEMBER_OCCUPATIONS,
    MEMBER_ROLES,
    YES_NO,
)


def _check_choice(value: Optional[str], allowed: tuple[str, ...], label: str) -> Optional[str]:
    if value is not None and value not in allowed:
        raise ValueError(f"Invalid {label} value")
    return value


def _empty_dawat_counts() -> Dict[str, int]:
    return {key: 0 for key in DAWAT_COUNT_COLUMNS}


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MemberFields(CamelModel):
    @validator("name", "father_name", "mobile", pre=True, check_fields=False)
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value

    @validator("gender", check_fields=False)
    def validate_gender(cls, value: Optional[str]) -> Optional[str]:
        return _check_choice(value, MEMBER_GENDERS, "gender")

    @validator("occupation", check_fields=False)
    def validate_occupation(cls, value: Optional[str]) -> Optional[str]:
        return _check_choice(value, MEMBER_OCCUPATIONS, "occupation")

    @validator("education", check_fields=False)
    def validate_education(cls, value: Optional[str]) -> Optional[str]:
        return _check_choice(value, MEMBER_EDUCATION_LEVELS, "education")

    @validator("quran", "maktab", check_fields=False)
    def validate_yes_no(cls, value: Optional[str]) -> Optional[str]:
        return _check_choice(value, YES_NO, "yes/no")

    @validator("dawat", check_fields=False)
    def validate_dawat(cls, value: Optional[str]) -> Optional[str]:
        return _check_choice(value, DAWAT_LEVELS, "dawat")

    @validator("role", check_fields=False)
    def validate_role(cls, value: Optional[str]) -> Optional[str]:
        return _check_choice(value, MEMBER_ROLES, "role")

    @validator("dawat_counts", check_fields=False)
    def validate_dawat_counts(cls, value: Optional[Dict[str, int]]) -> Optional[Dict[str, int]]:
        if value is None:
            return value
        unknown = set(value) - set(DAWAT_COUNT_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown dawat categories: {', '.join(sorted(unknown))}")
        if any(count < 0 for count in value.values()):
            raise ValueError("Dawat counts cannot be negative")
        return value


class MemberCreate(MemberFields):
    name: str = Field(..., min_length=1, max_length=150)
    father_name: Optional[str] = Field(None, max_length=150)
    age: int = Field(..., ge=0, le=MAX_MEMBER_AGE)
    gender: str
    occupation: str = "Other"
    education: str = "Below 8th"
    quran: str = "no"
    maktab: str = "no"
    dawat: str = "Nil"
    dawat_counts: Dict[str, int] = Field(default_factory=_empty_dawat_counts)
    mobile: Optional[str] = Field(None, max_length=25)
    role: str = "Member"


class MemberUpdate(MemberFields):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    father_name: Optional[str] = Field(None, max_length=150)
    age: Optional[int] = Field(None, ge=0, le=MAX_MEMBER_AGE)
    gender: Optional[str] = None
    occupation: Optional[str] = None
    education: Optional[str] = None
    quran: Optional[str] = None
    maktab: Optional[str] = None
    dawat: Optional[str] = None
    dawat_counts: Optional[Dict[str, int]] = None
    mobile: Optional[str] = Field(None, max_length=25)
    role: Optional[str] = None


class MemberOut(CamelModel):
    id: int
    name: str
    father_name: Optional[str] = None
    age: int
    gender: str
    occupation: str
    education: str
    quran: str
    maktab: str
    dawat: str
    dawat_counts: Dict[str, int]
    mobile: Optional[str] = None
    role: str
    is_child: bool


class HouseFields(CamelModel):
    @validator("number", "street", pre=True, check_fields=False)
    def strip_required_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @validator("notes", pre=True, check_fields=False)
    def strip_notes(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value


class HouseCreate(HouseFields):
    number: str = Field(..., min_length=1, max_length=50)
    street: str = Field(..., min_length=1, max_length=150)
    members: List[MemberCreate] = Field(default_factory=list)
    taleem: bool = False
    mashwara: bool = False
    notes: Optional[str] = Field(None, max_length=1000)


class HouseUpdate(HouseFields):
    number: Optional[str] = Field(None, min_length=1, max_length=50)
    street: Optional[str] = Field(None, min_length=1, max_length=150)
    members: Optional[List[MemberCreate]] = None
    taleem: Optional[bool] = None
    mashwara: Optional[bool] = None
    notes: Optional[str] = Field(None, max_length=1000)


class HouseOut(CamelModel):
    id: int
    number: str
    street: str
    members: List[MemberOut]
    taleem: bool
    mashwara: bool
    notes: Optional[str] = None
    total_members: int
    adults_count: int
    children_count: int
    created_at: datetime
    updated_at: datetime


class HouseListResponse(CamelModel):
    houses: List[HouseOut]
    total_pages: int
    current_page: int
    total: int


class HouseOverviewStats(CamelModel):
    total_houses: int = 0
    total_members: int = 0
    total_adults: int = 0
    total_children: int = 0
    total_hafiz: int = 0
    total_ulma: int = 0
    houses_with_taleem: int = 0
    houses_with_mashwara: int = 0
