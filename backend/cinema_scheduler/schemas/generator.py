from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from cinema_scheduler.schemas.screening import ScreeningOut, validate_date_value


class GenerationSettingsBase(BaseModel):
    max_attempts: int = Field(default=1000, ge=1, le=100_000)
    slot_attempts: int = Field(default=100, ge=1, le=10_000)
    min_shows_per_room: int = Field(default=2, ge=0, le=20)
    max_shows_per_room: int = Field(default=4, ge=0, le=20)
    random_seed: int | None = Field(default=None, ge=0, le=2_000_000_000)

    @model_validator(mode="after")
    def validate_relationships(self) -> "GenerationSettingsBase":
        if self.min_shows_per_room > self.max_shows_per_room:
            raise ValueError("min_shows_per_room cannot exceed max_shows_per_room")
        return self


class GenerateWeekRequest(BaseModel):
    reference_date: str
    random_seed: int | None = Field(default=None, ge=0, le=2_000_000_000)

    @field_validator("reference_date")
    @classmethod
    def validate_reference_date(cls, value: str) -> str:
        return validate_date_value(value.strip())


class GenerateWeekResponse(BaseModel):
    week_dates: list[str]
    created: int
    attempts: int
    budget_exhausted: bool
    message: str
    screenings: list[ScreeningOut] = Field(default_factory=list)


class ClearWeekResponse(BaseModel):
    week_dates: list[str]
    deleted: int
    message: str
