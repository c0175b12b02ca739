"""Tests for postgis-search API endpoints."""

import inspect

import psycopg
import pytest

POINT = "SRID=4326;POINT(151.2153 -33.8568)"
SHAPE = "SRID=4326;POLYGON((0 0, 4 0, 4 4, 0 4, 0 0))"


class TestRootEndpoints:
    """Tests for root and health endpoints."""

    def test_root(self, client):
        """Root endpoint should return server info."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "postgis-search"
        assert "version" in data

    def test_health(self, client):
        """Health endpoint should return healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestSearch:
    """Tests for the search endpoints."""

    def test_radius_by_coordinates(self, client, store):
        """Radius search should return the rows the store selects."""
        store.returns([{"id": 1, "name": "Opera House"}])
        response = client.post(
            "/search/radius",
            json={
                "location": {"kind": "coordinates", "lat": -33.8568, "lng": 151.2153},
                "radius": 750,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["results"] == [{"id": 1, "name": "Opera House"}]
        assert store.last_statement[1] == (POINT, 750)

    def test_radius_default(self, client, store):
        """Omitting the radius should use the 10km default."""
        response = client.post(
            "/search/radius",
            json={"location": {"kind": "geography", "geog_point": POINT}},
        )
        assert response.status_code == 200
        assert store.last_statement[1] == (POINT, 10_000)

    def test_radius_infers_coordinates(self, client, store):
        """Plain lat/lng without a kind should be read as coordinates."""
        response = client.post(
            "/search/radius",
            json={"location": {"lat": -33.8568, "lng": 151.2153}, "radius": 750},
        )
        assert response.status_code == 200
        assert store.last_statement[1] == (POINT, 750)

    def test_radius_infers_geography(self, client, store):
        response = client.post("/search/radius", json={"location": {"geog_point": POINT}})
        assert response.status_code == 200
        assert "%s::geography" in store.last_statement[0]

    def test_radius_empty_location(self, client, store):
        """An empty location carries nothing to search from."""
        response = client.post("/search/radius", json={"location": {}})
        assert response.status_code == 422
        assert store.executed == []

    def test_radius_without_location(self, client, store):
        """A location-less search should be rejected without querying."""
        response = client.post("/search/radius", json={"location": {"kind": "none"}})
        assert response.status_code == 422
        assert store.executed == []

    def test_radius_negative(self, client):
        response = client.post(
            "/search/radius",
            json={"location": {"kind": "coordinates", "lat": 0, "lng": 0}, "radius": -1},
        )
        assert response.status_code == 422

    def test_nearest(self, client, store):
        """Nearest search should return at most one row."""
        store.returns([{"id": 9}])
        response = client.post(
            "/search/nearest",
            json={"location": {"kind": "coordinates", "lat": 0, "lng": 0}, "radius": 50},
        )
        assert response.status_code == 200
        assert response.json()["results"] == [{"id": 9}]
        assert store.last_statement[0].endswith("LIMIT %s")

    def test_nearest_nothing_in_range(self, client, store):
        store.returns([])
        response = client.post(
            "/search/nearest",
            json={"location": {"kind": "coordinates", "lat": 0, "lng": 0}},
        )
        assert response.status_code == 200
        assert response.json()["results"] == []

    def test_nearest_without_location(self, client, store):
        response = client.post("/search/nearest", json={"location": {"kind": "none"}})
        assert response.status_code == 422
        assert store.executed == []

    def test_shape(self, client, store):
        store.returns([{"id": 2}, {"id": 5}])
        response = client.post("/search/shape", json={"shape": SHAPE})
        assert response.status_code == 200
        assert [r["id"] for r in response.json()["results"]] == [2, 5]
        assert store.last_statement[1] == (SHAPE,)

    def test_bbox(self, client, store):
        response = client.post(
            "/search/bbox",
            json={"box": {"min_lng": 0, "min_lat": 0, "max_lng": 10, "max_lat": 10}},
        )
        assert response.status_code == 200
        assert store.last_statement[1] == (0, 0, 10, 10)

    def test_store_error(self, client, store):
        """Store failures should surface with the store's message."""
        store.returns(psycopg.DataError("parse error - invalid geometry"))
        response = client.post("/search/shape", json={"shape": "POLYGON((nonsense"})
        assert response.status_code == 502
        data = response.json()
        assert data["error"] == "DataError"
        assert data["detail"] == "parse error - invalid geometry"


class TestEntities:
    """Tests for searches and measurements from a stored row."""

    def test_nearby(self, client, store):
        store.returns([{"id": 1, "lat": 1.0, "lng": 2.0}], [{"id": 3}])
        response = client.get("/entities/regions/1/nearby", params={"radius": 300})
        assert response.status_code == 200
        assert response.json()["results"] == [{"id": 3}]
        assert store.executed[0] == ('SELECT * FROM "regions" WHERE id = %s', ("1",))
        assert store.last_statement[1] == ("SRID=4326;POINT(2.0 1.0)", 300)

    def test_nearby_without_location(self, client, store):
        store.returns([{"id": 1, "name": "Nowhere"}])
        response = client.get("/entities/regions/1/nearby")
        assert response.status_code == 422
        assert len(store.executed) == 1

    def test_nearest(self, client, store):
        store.returns([{"id": 1, "geog_point": POINT}], [{"id": 4}])
        response = client.get("/entities/regions/1/nearest")
        assert response.status_code == 200
        assert response.json()["results"] == [{"id": 4}]

    def test_contained(self, client, store):
        store.returns([{"id": 1, "geog_shape": SHAPE}], [{"id": 6}, {"id": 7}])
        response = client.get("/entities/regions/1/contained")
        assert response.status_code == 200
        assert len(response.json()["results"]) == 2

    def test_contained_without_shape(self, client, store):
        store.returns([{"id": 1, "geog_point": POINT}])
        response = client.get("/entities/regions/1/contained")
        assert response.status_code == 422

    def test_missing_entity(self, client, store):
        store.returns([])
        response = client.get("/entities/regions/404/nearby")
        assert response.status_code == 404

    def test_bad_table_name(self, client, store):
        response = client.get("/entities/regions;drop/1/area")
        assert response.status_code == 400
        assert store.executed == []

    def test_distance(self, client, store):
        store.returns(
            [{"id": 1, "geog_point": POINT}],
            [{"id": 2, "geog_point": "SRID=4326;POINT(0 0)"}],
            [{"st_distance": 1609.34 * 2}],
        )
        response = client.get("/entities/regions/1/distance/places/2")
        assert response.status_code == 200
        assert response.json()["miles"] == pytest.approx(2.0)

    def test_distance_without_point(self, client, store):
        store.returns([{"id": 1, "lat": 0.0, "lng": 0.0}], [{"id": 2, "geog_point": POINT}])
        response = client.get("/entities/regions/1/distance/places/2")
        assert response.status_code == 200
        assert response.json()["miles"] is None

    def test_area(self, client, store):
        store.returns([{"id": 1, "geog_shape": SHAPE}], [{"st_area": 1609.34**2}])
        response = client.get("/entities/regions/1/area")
        assert response.status_code == 200
        assert response.json()["square_miles"] == pytest.approx(1.0)


class TestGeometry:
    """Tests for the geometry calculation endpoints."""

    def test_centroid(self, client, store):
        response = client.post("/geometry/centroid", json={"points": [[0, 0], [0, 90]]})
        assert response.status_code == 200
        data = response.json()
        assert data["lat"] == pytest.approx(0, abs=1e-9)
        assert data["lng"] == pytest.approx(45)
        assert store.executed == []

    def test_centroid_empty(self, client):
        response = client.post("/geometry/centroid", json={"points": []})
        assert response.status_code == 422

    def test_union(self, client, store):
        store.returns([{"geography": SHAPE}])
        response = client.post("/geometry/union", json={"ids": [1, 2]})
        assert response.status_code == 200
        assert response.json()["shape"] == SHAPE
        assert store.last_statement[1] == (0.0001, [1, 2])

    def test_union_numeric_string_ids(self, client, store):
        """Ids are bound as one integer array."""
        store.returns([{"geography": SHAPE}])
        response = client.post("/geometry/union", json={"ids": [1, "2"]})
        assert response.status_code == 200
        assert store.last_statement[1] == (0.0001, [1, 2])

    def test_union_rejects_non_numeric_ids(self, client, store):
        response = client.post("/geometry/union", json={"ids": [1, "abc"]})
        assert response.status_code == 422
        assert store.executed == []

    def test_bbox_intersects(self, client, store):
        store.returns([{"st_intersects": False}])
        response = client.post(
            "/geometry/bbox/intersects",
            json={
                "shape": SHAPE,
                "box": {"min_lng": 0, "min_lat": 0, "max_lng": 10, "max_lat": 10},
            },
        )
        assert response.status_code == 200
        assert response.json()["result"] is False
        assert store.last_statement[1][:4] == pytest.approx((1, 1, 9, 9))

    def test_bbox_within_radius(self, client, store):
        store.returns([{"st_dwithin": True}])
        response = client.post(
            "/geometry/bbox/within-radius",
            json={
                "point": POINT,
                "radius": 1000,
                "box": {"min_lng": 150, "min_lat": -35, "max_lng": 152, "max_lat": -33},
            },
        )
        assert response.status_code == 200
        assert response.json()["result"] is True


class TestHandlers:
    """Store-bound endpoints run in the threadpool."""

    def test_store_endpoints_are_sync(self):
        from fastapi.routing import APIRoute

        from postgis_search.main import app

        routes = [
            route
            for route in app.routes
            if isinstance(route, APIRoute)
            and route.path.startswith(("/search", "/entities", "/geometry"))
        ]
        assert routes
        for route in routes:
            assert not inspect.iscoroutinefunction(route.endpoint), route.path
