import pytest

from cinema_scheduler.models.movie import AgeRating, Movie, MovieCategory
from cinema_scheduler.models.room import Room, RoomSize
from cinema_scheduler.models.screening import Screening, ScreeningCandidate
from cinema_scheduler.services.validator import find_overlaps, premiere_advisory, validate_screening

TUESDAY = "2025-01-07"
SATURDAY = "2025-01-11"

LARGE = Room(id="S1", name="Sala 1", size=RoomSize.large, seats=200)
MEDIUM = Room(id="S2", name="Sala 2", size=RoomSize.medium, seats=120)
SMALL = Room(id="S3", name="Sala 3", size=RoomSize.small, seats=80)


def make_movie(movie_id="m1", *, runtime=100, category=MovieCategory.regular, demand=60):
    return Movie(
        id=movie_id,
        title=f"Movie {movie_id}",
        runtime_min=runtime,
        rating=AgeRating.A,
        category=category,
        demand_score=demand,
    )


def candidate(room, start, date=TUESDAY, movie_id="m1"):
    return ScreeningCandidate(movie_id=movie_id, room_id=room.id, date=date, start_time=start)


def rules(errors):
    return [error.rule for error in errors]


def test_valid_regular_screening_has_no_errors():
    assert validate_screening(candidate(MEDIUM, "10:00"), make_movie(), MEDIUM, []) == []


@pytest.mark.parametrize("start", ["09:59", "00:00", "08:30"])
def test_start_before_opening_is_rejected(start):
    errors = validate_screening(candidate(MEDIUM, start), make_movie(), MEDIUM, [])
    assert rules(errors) == ["operating_window"]
    assert errors[0].field == "start_time"


def test_end_bound_counts_large_room_cleanup():
    movie = make_movie(runtime=1)
    errors = validate_screening(candidate(LARGE, "23:39"), movie, LARGE, [])
    assert rules(errors) == ["end_bound"]
    assert "24:00" in errors[0].message
    assert "23:38" in errors[0].message


def test_end_bound_allows_medium_room_to_finish_before_closing():
    movie = make_movie(runtime=1)
    assert validate_screening(candidate(MEDIUM, "23:39"), movie, MEDIUM, []) == []


def test_end_bound_message_reports_latest_start():
    movie = make_movie(runtime=120)
    errors = validate_screening(candidate(MEDIUM, "22:00"), movie, MEDIUM, [])
    assert rules(errors) == ["end_bound"]
    # 1439 - (120 + 15) = 1304 -> 21:44
    assert "21:44" in errors[0].message
    assert "24:15" in errors[0].message


def test_end_bound_message_when_no_start_fits_the_window():
    # 900 + 15 = 915 minutes cannot fit between 10:00 and 23:59.
    movie = make_movie(runtime=900)
    errors = validate_screening(candidate(MEDIUM, "10:00"), movie, MEDIUM, [])
    assert rules(errors) == ["end_bound"]
    assert "no start time between 10:00 and 23:59" in errors[0].message
    assert "latest start" not in errors[0].message
    assert "00:00" not in errors[0].message


def test_overlap_in_same_room_is_rejected():
    existing = [Screening("x", "m9", MEDIUM.id, TUESDAY, "10:00", "12:15")]
    errors = validate_screening(candidate(MEDIUM, "12:00"), make_movie(), MEDIUM, existing)
    assert rules(errors) == ["overlap"]
    assert "10:00-12:15" in errors[0].message


def test_back_to_back_screenings_are_allowed():
    existing = [Screening("x", "m9", MEDIUM.id, TUESDAY, "10:00", "12:15")]
    assert validate_screening(candidate(MEDIUM, "12:15"), make_movie(), MEDIUM, existing) == []


def test_candidate_wrapping_an_existing_screening_overlaps():
    existing = [Screening("x", "m9", LARGE.id, TUESDAY, "13:00", "13:30")]
    errors = validate_screening(candidate(LARGE, "12:00", movie_id="m1"), make_movie(runtime=120), LARGE, existing)
    assert rules(errors) == ["overlap"]


def test_other_rooms_and_days_do_not_overlap():
    existing = [
        Screening("x", "m9", LARGE.id, TUESDAY, "10:00", "12:15"),
        Screening("y", "m9", MEDIUM.id, SATURDAY, "10:00", "12:15"),
    ]
    assert validate_screening(candidate(MEDIUM, "10:30"), make_movie(), MEDIUM, existing) == []


def test_special_movie_rejected_on_tuesday():
    movie = make_movie(category=MovieCategory.special)
    errors = validate_screening(candidate(MEDIUM, "10:00"), movie, MEDIUM, [])
    assert rules(errors) == ["special_day"]
    assert errors[0].field == "date"
    assert "Tuesday" in errors[0].message


@pytest.mark.parametrize("date", ["2025-01-10", SATURDAY, "2025-01-12"])
def test_special_movie_accepted_on_weekend(date):
    movie = make_movie(category=MovieCategory.special)
    assert validate_screening(candidate(MEDIUM, "10:00", date=date), movie, MEDIUM, []) == []


def test_low_demand_premiere_rejected_even_when_not_first():
    movie = make_movie("m3", category=MovieCategory.premiere, demand=65)
    existing = [Screening("x", "m3", LARGE.id, TUESDAY, "10:00", "12:00")]
    errors = validate_screening(candidate(MEDIUM, "15:00", movie_id="m3"), movie, MEDIUM, existing)
    assert rules(errors) == ["premiere_demand"]
    assert errors[0].field == "movie_id"


def test_first_premiere_screening_must_start_before_two():
    movie = make_movie("m3", category=MovieCategory.premiere, demand=81)
    errors = validate_screening(candidate(MEDIUM, "14:00", movie_id="m3"), movie, MEDIUM, [])
    assert rules(errors) == ["premiere_first_show"]
    assert validate_screening(candidate(MEDIUM, "13:45", movie_id="m3"), movie, MEDIUM, []) == []


def test_later_premiere_screening_may_start_after_two():
    movie = make_movie("m3", category=MovieCategory.premiere, demand=81)
    existing = [Screening("x", "m3", LARGE.id, TUESDAY, "11:00", "13:00")]
    assert validate_screening(candidate(MEDIUM, "15:00", movie_id="m3"), movie, MEDIUM, existing) == []


def test_premiere_candidate_earlier_than_existing_becomes_first():
    movie = make_movie("m3", category=MovieCategory.premiere, demand=81)
    existing = [Screening("x", "m3", LARGE.id, TUESDAY, "16:00", "18:00")]
    errors = validate_screening(candidate(MEDIUM, "15:00", movie_id="m3"), movie, MEDIUM, existing)
    assert rules(errors) == ["premiere_first_show"]


def test_long_movie_rejected_in_small_room():
    movie = make_movie(runtime=156)
    errors = validate_screening(candidate(SMALL, "10:00"), movie, SMALL, [])
    assert rules(errors) == ["room_size"]
    assert errors[0].field == "room_id"
    assert validate_screening(candidate(MEDIUM, "10:00"), movie, MEDIUM, []) == []


def test_all_violations_are_collected():
    movie = make_movie(runtime=160, category=MovieCategory.special)
    errors = validate_screening(candidate(SMALL, "09:00"), movie, SMALL, [])
    assert rules(errors) == ["operating_window", "special_day", "room_size"]


def test_premiere_advisory_only_for_first_screening_of_day():
    movie = make_movie("m3", category=MovieCategory.premiere, demand=81)
    first = candidate(MEDIUM, "10:00", movie_id="m3")
    assert "at least 2" in premiere_advisory(first, movie, [])

    existing = [Screening("x", "m3", LARGE.id, TUESDAY, "11:00", "13:00")]
    assert premiere_advisory(first, movie, existing) is None
    assert premiere_advisory(candidate(MEDIUM, "10:00"), make_movie(), []) is None


def test_find_overlaps_reports_pairs_per_room_and_day():
    screenings = [
        Screening("a", "m1", "S1", TUESDAY, "10:00", "12:00"),
        Screening("b", "m1", "S1", TUESDAY, "11:00", "13:00"),
        Screening("c", "m1", "S1", TUESDAY, "13:00", "14:00"),
        Screening("d", "m1", "S2", TUESDAY, "11:00", "13:00"),
        Screening("e", "m1", "S1", SATURDAY, "11:00", "13:00"),
    ]
    assert find_overlaps(screenings) == [("a", "b")]
