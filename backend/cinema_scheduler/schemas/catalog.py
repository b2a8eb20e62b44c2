from pydantic import BaseModel, Field

from cinema_scheduler.models.movie import AgeRating, MovieCategory
from cinema_scheduler.models.room import RoomSize


class MovieOut(BaseModel):
    id: str
    title: str
    runtime_min: int = Field(gt=0)
    rating: AgeRating
    category: MovieCategory
    demand_score: int = Field(ge=0, le=100)
    trailer_url: str | None = None

    model_config = {"from_attributes": True}


class RoomOut(BaseModel):
    id: str
    name: str
    size: RoomSize
    seats: int = Field(gt=0)

    model_config = {"from_attributes": True}
