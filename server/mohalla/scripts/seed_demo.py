from __future__ import annotations

import logging

from sqlalchemy.orm import Session

import mohalla.models  # noqa: F401

from mohalla.core.db import Base, SessionLocal, engine
from mohalla.models.house import House
from mohalla.models.member import Member
from mohalla.models.resource import Resource
from mohalla.models.user import Role

logger = logging.getLogger(__name__)

ROLE_NAMES = ["Admin", "Editor", "Viewer"]


def _member(name: str, father_name: str | None, age: int, gender: str, occupation: str, **extra) -> dict:
    data = {
        "name": name,
        "father_name": father_name,
        "age": age,
        "gender": gender,
        "occupation": occupation,
        "education": extra.pop("education", "Below 8th"),
        "quran": extra.pop("quran", "no"),
        "maktab": extra.pop("maktab", "no"),
        "dawat": extra.pop("dawat", "Nil"),
        "dawat_counts": extra.pop("dawat_counts", {}),
        "role": extra.pop("role", "Member"),
    }
    data.update(extra)
    return data


DEMO_HOUSES = [
    {
        "number": "1",
        "street": "Main Street",
        "taleem": True,
        "mashwara": False,
        "notes": "First house on main street",
        "members": [
            _member(
                "Ahmed Khan", "Abdul Khan", 45, "Male", "Businessman",
                education="Graduate", quran="yes", dawat="3-day",
                dawat_counts={"3-day": 2, "10-day": 1}, mobile="9876543210", role="Head",
            ),
            _member("Fatima Khan", "Ahmed Khan", 40, "Female", "Other", education="12th", quran="yes", mobile="9876543211"),
            _member("Ali Khan", "Ahmed Khan", 12, "Male", "Child", maktab="yes"),
        ],
    },
    {
        "number": "2",
        "street": "Main Street",
        "taleem": False,
        "mashwara": True,
        "notes": "Second house with mashwara",
        "members": [
            _member(
                "Mohammed Ali", "Hassan Ali", 50, "Male", "Farmer",
                education="10th", quran="yes", dawat="10-day",
                dawat_counts={"3-day": 3, "10-day": 1}, role="Head",
            ),
            _member("Aisha Ali", "Mohammed Ali", 15, "Female", "Student", education="10th", quran="yes", dawat="3-day", dawat_counts={"3-day": 1}),
        ],
    },
    {
        "number": "3",
        "street": "Park Road",
        "taleem": True,
        "mashwara": True,
        "notes": "House with both taleem and mashwara",
        "members": [
            _member(
                "Abdul Rahman", "Yusuf Rahman", 55, "Male", "Ulma",
                education="Above Graduate", quran="yes", dawat="40-day",
                dawat_counts={"3-day": 5, "10-day": 2, "40-day": 1}, role="Head",
            ),
            _member("Zara Rahman", "Abdul Rahman", 25, "Female", "Student", education="Graduate", quran="yes", dawat="10-day", dawat_counts={"10-day": 1}),
            _member("Yusuf Rahman", "Abdul Rahman", 8, "Male", "Child", maktab="yes"),
        ],
    },
    {
        "number": "4",
        "street": "Park Road",
        "taleem": False,
        "mashwara": False,
        "members": [
            _member("Hassan Ahmed", "Ahmed Hassan", 35, "Male", "Worker", education="10th", role="Head"),
            _member("Sara Ahmed", "Hassan Ahmed", 30, "Female", "Other", education="12th"),
        ],
    },
    {
        "number": "5",
        "street": "School Street",
        "taleem": True,
        "mashwara": False,
        "members": [
            _member(
                "Omar Farooq", "Farooq Ahmed", 42, "Male", "Shopkeeper",
                education="12th", quran="yes", dawat="4-month",
                dawat_counts={"3-day": 4, "10-day": 2, "40-day": 1, "4-month": 1}, role="Head",
            ),
            _member("Layla Farooq", "Omar Farooq", 18, "Female", "Student", education="12th", quran="yes", dawat="3-day", dawat_counts={"3-day": 1}),
            _member("Ahmad Farooq", "Omar Farooq", 10, "Male", "Child", maktab="yes"),
        ],
    },
]

DEMO_RESOURCES = [
    {
        "title": "Quran Learning Guide",
        "description": "A comprehensive guide for learning Quran recitation",
        "category": "PDF",
        "file_url": "/uploads/quran-guide.pdf",
        "file_name": "quran-guide.pdf",
        "file_size": 2048576,
        "file_type": "application/pdf",
        "tags": ["Quran", "Learning", "Guide"],
    },
    {
        "title": "Islamic Calendar 2024",
        "description": "Monthly calendar with important dates",
        "category": "Document",
        "file_url": "/uploads/islamic-calendar-2024.docx",
        "file_name": "islamic-calendar-2024.docx",
        "file_size": 1048576,
        "tags": ["Calendar", "Dates"],
    },
    {
        "title": "Masjid Architecture Design",
        "description": "Architectural plans for the community masjid",
        "category": "Image",
        "file_url": "/uploads/masjid-design.jpg",
        "file_name": "masjid-design.jpg",
        "file_size": 3145728,
        "file_type": "image/jpeg",
        "tags": ["Architecture", "Masjid"],
    },
    {
        "title": "Islamic Education Resources",
        "description": "Online resources for Islamic education",
        "category": "Link",
        "file_url": "https://example.com/islamic-education",
        "file_size": 0,
        "tags": ["Education", "Online"],
    },
    {
        "title": "Community Management Guide",
        "description": "Guide for managing community activities",
        "category": "PDF",
        "file_url": "/uploads/community-guide.pdf",
        "file_name": "community-guide.pdf",
        "file_size": 1572864,
        "file_type": "application/pdf",
        "tags": ["Community", "Management", "Guide"],
    },
]


def ensure_role(db: Session, name: str) -> Role:
    role = db.query(Role).filter_by(name=name).first()
    if role is None:
        role = Role(name=name)
        db.add(role)
        db.commit()
        db.refresh(role)
    return role


def ensure_houses(db: Session) -> int:
    created = 0
    for data in DEMO_HOUSES:
        if db.query(House).filter_by(number=data["number"]).first():
            continue
        fields = dict(data)
        members = fields.pop("members")
        house = House(**fields)
        house.members = [Member(**member) for member in members]
        db.add(house)
        created += 1
    db.commit()
    return created


def ensure_resources(db: Session) -> int:
    created = 0
    for data in DEMO_RESOURCES:
        if db.query(Resource).filter_by(title=data["title"]).first():
            continue
        db.add(Resource(**data))
        created += 1
    db.commit()
    return created


def seed(db: Session) -> dict[str, int]:
    for role_name in ROLE_NAMES:
        ensure_role(db, role_name)
    summary = {"houses": ensure_houses(db), "resources": ensure_resources(db)}
    logger.info("demo_data_seeded", extra=summary)
    return summary


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
