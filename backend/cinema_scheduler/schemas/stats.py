from pydantic import BaseModel, Field


class DayStats(BaseModel):
    date: str
    usage_percentage: float = Field(ge=0)
    total_dead_time: int = Field(ge=0)
    scheduled_shows: int = Field(ge=0)
    estimated_capacity: int = Field(ge=0)


class RoomStats(BaseModel):
    room_id: str
    room_name: str = ""
    usage_percentage: float = Field(ge=0)
    total_dead_time: int = Field(ge=0)
    scheduled_shows: int = Field(ge=0)


class DayBreakdown(BaseModel):
    day_name: str
    totals: DayStats
    rooms: list[RoomStats] = Field(default_factory=list)


class WeekStats(BaseModel):
    week_start: str
    previous_week: str
    next_week: str
    days: list[DayStats] = Field(default_factory=list)
