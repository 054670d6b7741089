"""Tests for crop calendar entries and the proximity search."""

from datetime import datetime, timedelta, timezone

import pytest


SUNFLOWER = {
    "name": "Sunflower",
    "floweringStart": "2025-04-10",
    "floweringEnd": "2025-04-25",
    "latitude": 26.9124,
    "longitude": 75.7873,
    "recommendedHiveDensity": 5,
}

JAIPUR = {"latitude": 26.9, "longitude": 75.8}


def add_crop(client, headers, **overrides):
    resp = client.post("/api/crops", json={**SUNFLOWER, **overrides}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["crop"]


def nearby(client, headers, **params):
    resp = client.get("/api/crops/nearby", params=params, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


class TestAddCrop:
    def test_add(self, client, beekeeper_headers):
        resp = client.post("/api/crops", json=SUNFLOWER, headers=beekeeper_headers)
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "Crop entry added successfully"
        crop = body["crop"]
        assert crop["name"] == "Sunflower"
        assert crop["floweringStart"] == "2025-04-10"
        assert crop["floweringEnd"] == "2025-04-25"
        assert crop["recommendedHiveDensity"] == 5
        assert crop["location"] == {"type": "Point", "coordinates": [75.7873, 26.9124]}
        assert crop["dateCreated"]

    @pytest.mark.parametrize("end", ["2025-04-10", "2025-04-01"])
    def test_flowering_end_must_follow_start(self, client, beekeeper_headers, end):
        resp = client.post("/api/crops", json={**SUNFLOWER, "floweringEnd": end}, headers=beekeeper_headers)
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["message"] == "floweringStart must be before floweringEnd"

    def test_one_day_window_accepted(self, client, beekeeper_headers):
        add_crop(client, beekeeper_headers, floweringStart="2025-04-10", floweringEnd="2025-04-11")

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"name": ""}, "name"),
            ({"floweringStart": "soon"}, "floweringStart"),
            ({"latitude": -91}, "latitude"),
            ({"longitude": 180.1}, "longitude"),
            ({"recommendedHiveDensity": 0}, "recommendedHiveDensity"),
        ],
    )
    def test_validation(self, client, beekeeper_headers, overrides, field):
        resp = client.post("/api/crops", json={**SUNFLOWER, **overrides}, headers=beekeeper_headers)
        assert resp.status_code == 400
        assert field in [err["field"] for err in resp.json()["errors"]]

    def test_requires_token(self, client):
        assert client.post("/api/crops", json=SUNFLOWER).status_code == 401


class TestNearby:
    def test_flowering_sunflower_found(self, client, beekeeper_headers):
        add_crop(client, beekeeper_headers)
        body = nearby(client, beekeeper_headers, radius=50, date="2025-04-15", **JAIPUR)
        assert [c["name"] for c in body["crops"]] == ["Sunflower"]
        assert "message" not in body
        assert body["crops"][0]["distanceKm"] == pytest.approx(1.9, abs=0.2)

    def test_out_of_season_is_empty(self, client, beekeeper_headers):
        add_crop(client, beekeeper_headers)
        body = nearby(client, beekeeper_headers, radius=50, date="2025-05-01", **JAIPUR)
        assert body == {"crops": [], "message": "No crops found nearby for the given date"}

    @pytest.mark.parametrize("day", ["2025-04-10", "2025-04-25"])
    def test_window_inclusive(self, client, beekeeper_headers, day):
        add_crop(client, beekeeper_headers)
        assert len(nearby(client, beekeeper_headers, radius=50, date=day, **JAIPUR)["crops"]) == 1

    @pytest.mark.parametrize("day", ["2025-04-09", "2025-04-26"])
    def test_just_outside_window(self, client, beekeeper_headers, day):
        add_crop(client, beekeeper_headers)
        assert nearby(client, beekeeper_headers, radius=50, date=day, **JAIPUR)["crops"] == []

    def test_radius_filters_by_great_circle_distance(self, client, beekeeper_headers):
        add_crop(client, beekeeper_headers)
        add_crop(client, beekeeper_headers, name="Mustard", latitude=28.7041, longitude=77.1025)
        near = nearby(client, beekeeper_headers, radius=200, date="2025-04-15", **JAIPUR)
        assert [c["name"] for c in near["crops"]] == ["Sunflower"]
        wide = nearby(client, beekeeper_headers, radius=300, date="2025-04-15", **JAIPUR)
        assert [c["name"] for c in wide["crops"]] == ["Sunflower", "Mustard"]
        assert all(c["distanceKm"] <= 300 for c in wide["crops"])

    def test_default_radius_is_100km(self, client, beekeeper_headers):
        # About 0.8 degrees of latitude north of the query point, i.e. ~89 km.
        add_crop(client, beekeeper_headers, name="Near", latitude=27.7, longitude=75.8)
        # About 1.0 degree north, i.e. ~111 km.
        add_crop(client, beekeeper_headers, name="Far", latitude=27.9, longitude=75.8)
        body = nearby(client, beekeeper_headers, date="2025-04-15", **JAIPUR)
        assert [c["name"] for c in body["crops"]] == ["Near"]

    def test_default_date_is_today(self, client, beekeeper_headers):
        today = datetime.now(timezone.utc).date()
        add_crop(
            client,
            beekeeper_headers,
            name="Clover",
            floweringStart=(today - timedelta(days=2)).isoformat(),
            floweringEnd=(today + timedelta(days=2)).isoformat(),
        )
        add_crop(client, beekeeper_headers)
        body = nearby(client, beekeeper_headers, **JAIPUR)
        assert [c["name"] for c in body["crops"]] == ["Clover"]

    def test_nearest_first(self, client, beekeeper_headers):
        add_crop(client, beekeeper_headers, name="Farther", latitude=27.1, longitude=75.8)
        add_crop(client, beekeeper_headers, name="Closer", latitude=26.95, longitude=75.8)
        body = nearby(client, beekeeper_headers, radius=50, date="2025-04-15", **JAIPUR)
        assert [c["name"] for c in body["crops"]] == ["Closer", "Farther"]

    def test_across_antimeridian(self, client, beekeeper_headers):
        add_crop(client, beekeeper_headers, name="Taveuni", latitude=-16.85, longitude=-179.95)
        body = nearby(client, beekeeper_headers, latitude=-16.85, longitude=179.95, radius=50, date="2025-04-15")
        assert [c["name"] for c in body["crops"]] == ["Taveuni"]

    @pytest.mark.parametrize(
        "params, field",
        [
            ({"longitude": 75.8}, "latitude"),
            ({"latitude": 26.9}, "longitude"),
            ({"latitude": 95, "longitude": 75.8}, "latitude"),
            ({**JAIPUR, "radius": 0.5}, "radius"),
            ({**JAIPUR, "date": "someday"}, "date"),
        ],
    )
    def test_bad_query(self, client, beekeeper_headers, params, field):
        resp = client.get("/api/crops/nearby", params=params, headers=beekeeper_headers)
        assert resp.status_code == 400
        assert field in [err["field"] for err in resp.json()["errors"]]
