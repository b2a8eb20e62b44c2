from __future__ import annotations

import re
from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

ViolationField = Literal["start_time", "date", "movie_id", "room_id"]


def validate_time_value(value: str) -> str:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    return value


def validate_date_value(value: str) -> str:
    if not DATE_PATTERN.match(value):
        raise ValueError("Date must be in YYYY-MM-DD format")
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError("Date must be a valid calendar day") from exc
    return value


class ValidationError(BaseModel):
    message: str
    field: ViolationField
    rule: str


class ScreeningBase(BaseModel):
    movie_id: str = Field(min_length=1, max_length=36)
    room_id: str = Field(min_length=1, max_length=36)
    date: str
    start_time: str

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return validate_date_value(value.strip())

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, value: str) -> str:
        return validate_time_value(value.strip())


class ScreeningCreate(ScreeningBase):
    pass


class ScreeningUpdate(BaseModel):
    movie_id: str | None = Field(default=None, min_length=1, max_length=36)
    room_id: str | None = Field(default=None, min_length=1, max_length=36)
    date: str | None = None
    start_time: str | None = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return validate_date_value(value.strip())

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return validate_time_value(value.strip())


class ScreeningOut(ScreeningBase):
    id: str
    end_time: str

    model_config = {"from_attributes": True}


class ScreeningMutationOut(BaseModel):
    screening: ScreeningOut
    advisories: list[str] = Field(default_factory=list)


class ScreeningValidationOut(BaseModel):
    valid: bool
    end_time: str | None = None
    errors: list[ValidationError] = Field(default_factory=list)
    advisories: list[str] = Field(default_factory=list)


class OverlapReport(BaseModel):
    overlapping_pairs: list[tuple[str, str]] = Field(default_factory=list)
