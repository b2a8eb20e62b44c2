from cinema_scheduler.models.movie import AgeRating, Movie, MovieCategory  # noqa: F401
from cinema_scheduler.models.room import Room, RoomSize  # noqa: F401
from cinema_scheduler.models.screening import Screening, ScreeningCandidate  # noqa: F401
