from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from mohalla.core.errors import InvalidParameter
from mohalla.models.member import MAX_MEMBER_AGE

# pydantic error types raised by the ge/le bounds on the age fields.
_RANGE_ERRORS = {"greater_than_equal", "less_than_equal"}


class HouseFilterRequest(BaseModel):
    """Typed view of the house listing query string.

    Every field is optional; unknown keys are dropped and blank values are
    treated as absent. Only the age bounds are parsed strictly; everything
    else is kept as text and interpreted when the filter is compiled.
    """

    search: Optional[str] = None
    street: Optional[str] = None
    occupation: Optional[str] = None
    education: Optional[str] = None
    quran: Optional[str] = None
    maktab: Optional[str] = None
    gender: Optional[str] = None
    dawat: Optional[str] = None
    min_age: Optional[int] = Field(None, alias="minAge", ge=0, le=MAX_MEMBER_AGE)
    max_age: Optional[int] = Field(None, alias="maxAge", ge=0, le=MAX_MEMBER_AGE)
    dawat_count_key: Optional[str] = Field(None, alias="dawatCountKey")
    dawat_count_times: Optional[str] = Field(None, alias="dawatCountTimes")

    class Config:
        populate_by_name = True
        extra = "ignore"
        frozen = True

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "HouseFilterRequest":
        cleaned: dict[str, Any] = {}
        for key, value in params.items():
            if isinstance(value, str):
                value = value.strip()
            if value is None or value == "":
                continue
            cleaned[key] = value
        try:
            return cls(**cleaned)
        except ValidationError as exc:
            error = exc.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "query"
            kind = "out_of_range" if error["type"] in _RANGE_ERRORS else "malformed"
            raise InvalidParameter(_FIELD_ALIASES.get(field, field), kind) from exc


_FIELD_ALIASES = {
    name: info.alias for name, info in HouseFilterRequest.model_fields.items() if info.alias
}
