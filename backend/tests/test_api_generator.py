def test_generate_week_then_stats_and_clear(client):
    response = client.post("/api/generator/week", json={"reference_date": "2025-01-08", "random_seed": 99})
    assert response.status_code == 200
    body = response.json()
    assert body["week_dates"][0] == "2025-01-06"
    assert body["created"] == len(body["screenings"]) > 0
    assert body["attempts"] <= 1000
    assert client.get("/api/screenings/overlaps").json()["overlapping_pairs"] == []

    stats = client.get("/api/stats/week", params={"reference_date": "2025-01-08"}).json()
    assert stats["week_start"] == "2025-01-06"
    assert sum(day["scheduled_shows"] for day in stats["days"]) == body["created"]
    assert all(0 < day["usage_percentage"] <= 100 for day in stats["days"])

    cleared = client.delete("/api/generator/week", params={"reference_date": "2025-01-12"})
    assert cleared.status_code == 200
    assert cleared.json()["deleted"] == body["created"]
    assert client.get("/api/screenings/").json() == []


def test_same_seed_generates_the_same_week(client):
    first = client.post("/api/generator/week", json={"reference_date": "2025-01-08", "random_seed": 5}).json()
    client.delete("/api/generator/week", params={"reference_date": "2025-01-08"})
    second = client.post("/api/generator/week", json={"reference_date": "2025-01-08", "random_seed": 5}).json()
    strip = lambda items: [(i["movie_id"], i["room_id"], i["date"], i["start_time"]) for i in items]  # noqa: E731
    assert strip(first["screenings"]) == strip(second["screenings"])


def test_clear_empty_week_reports_zero(client):
    response = client.delete("/api/generator/week", params={"reference_date": "2025-01-08"})
    assert response.status_code == 200
    assert response.json()["deleted"] == 0


def test_generate_rejects_bad_reference_date(client):
    response = client.post("/api/generator/week", json={"reference_date": "08/01/2025"})
    assert response.status_code == 422


def test_day_and_room_stats(client):
    client.post(
        "/api/screenings/",
        json={"movie_id": "m1", "room_id": "S2", "date": "2025-01-07", "start_time": "10:00"},
    )
    day = client.get("/api/stats/day/2025-01-07").json()
    assert day["day_name"] == "Tuesday"
    assert day["totals"]["scheduled_shows"] == 1
    assert day["totals"]["estimated_capacity"] == 120
    assert [room["room_id"] for room in day["rooms"]] == ["S1", "S2", "S3"]

    room = client.get("/api/stats/rooms/S2", params={"date": "2025-01-07"}).json()
    assert room == {
        "room_id": "S2",
        "room_name": "Sala 2",
        "usage_percentage": 14.3,
        "total_dead_time": 719,
        "scheduled_shows": 1,
    }

    empty = client.get("/api/stats/rooms/S1", params={"date": "2025-01-07"}).json()
    assert empty["usage_percentage"] == 0
    assert empty["total_dead_time"] == 839
    assert client.get("/api/stats/rooms/S9", params={"date": "2025-01-07"}).status_code == 404


def test_week_stats_link_neighbouring_weeks(client):
    stats = client.get("/api/stats/week", params={"reference_date": "2025-01-01"}).json()
    assert stats["week_start"] == "2024-12-30"
    assert stats["previous_week"] == "2024-12-23"
    assert stats["next_week"] == "2025-01-06"

    following = client.get("/api/stats/week", params={"reference_date": stats["next_week"]}).json()
    assert following["week_start"] == "2025-01-06"
    assert following["previous_week"] == "2024-12-30"
