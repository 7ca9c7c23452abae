"""
Tests for the planet API.
"""

from fastapi.testclient import TestClient

from planet_service.config import Settings
from planet_service.services import ALL_PLANETS_KEY


def test_planet_lifecycle(client):
    """Create, read, rename and delete a planet end to end."""
    response = client.post("/", json={"name": "Mars"})
    assert response.status_code == 200
    assert response.json() == {
        "message": "planet added succesfully",
        "inserted_id": 1,
        "name": "Mars",
    }

    response = client.get("/1")
    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "Mars"}

    response = client.put("/1", json={"name": "Mars2"})
    assert response.status_code == 200
    assert response.json() == {"message": "Planet updated", "id": "1", "name": "Mars2"}

    response = client.get("/1")
    assert response.json() == {"id": 1, "name": "Mars2"}

    response = client.delete("/1")
    assert response.status_code == 200
    assert response.json() == {"message": "Planeted deleted"}

    response = client.get("/1")
    assert response.status_code == 404
    assert response.json() == {"error": "planet not found"}


def test_list_planets(client, planet_store):
    """List returns every planet and is served from cache on repeat."""
    client.post("/", json={"name": "Mars"})
    client.post("/", json={"name": "Venus"})

    first = client.get("/")
    second = client.get("/")

    assert first.status_code == 200
    assert first.json() == [{"id": 1, "name": "Mars"}, {"id": 2, "name": "Venus"}]
    assert second.json() == first.json()
    assert planet_store.calls["list_all"] == 1


def test_list_reflects_delete(client, cache_store):
    """Deleting a planet drops it from the cached collection."""
    client.post("/", json={"name": "Mars"})
    client.post("/", json={"name": "Venus"})
    client.get("/")

    client.delete("/1")

    assert not cache_store.contains(ALL_PLANETS_KEY)
    assert client.get("/").json() == [{"id": 2, "name": "Venus"}]


def test_list_store_error_is_400(client, planet_store):
    planet_store.available = False

    response = client.get("/")
    assert response.status_code == 400
    assert response.json() == {"error message": "error selecting planets"}


def test_get_store_error_is_400(client, planet_store):
    planet_store.available = False

    response = client.get("/1")
    assert response.status_code == 400
    assert response.json() == {"error message": "error scanning planet by id"}


def test_create_with_invalid_body_is_400(client):
    assert client.post("/", json={}).status_code == 400
    assert client.post("/", json={"name": ""}).status_code == 400
    assert client.post("/", json={"name": 42}).status_code == 400
    assert client.post("/", content="not json", headers={"content-type": "application/json"}).status_code == 400

    response = client.post("/", json={"name": ""})
    assert response.json() == {"error": "Invalid request body"}


def test_create_store_error_is_400(client, planet_store):
    planet_store.available = False

    response = client.post("/", json={"name": "Mars"})
    assert response.status_code == 400
    assert response.json() == {"error message": "error adding a planet"}


def test_update_missing_planet_is_404(client):
    response = client.put("/99", json={"name": "Nowhere"})
    assert response.status_code == 404
    assert response.json() == {"error": "Planet not found"}


def test_update_invalid_body_is_400(client):
    client.post("/", json={"name": "Mars"})

    assert client.put("/1", json={"title": "Mars2"}).status_code == 400


def test_update_store_error_is_500(client, planet_store):
    client.post("/", json={"name": "Mars"})
    planet_store.available = False

    response = client.put("/1", json={"name": "Mars2"})
    assert response.status_code == 500
    assert response.json() == {"error": "Error updating"}


def test_delete_twice_is_404(client):
    client.post("/", json={"name": "Mars"})

    assert client.delete("/1").status_code == 200
    response = client.delete("/1")
    assert response.status_code == 404
    assert response.json() == {"error": "Planet not found"}


def test_delete_store_error_is_500(client, planet_store):
    planet_store.available = False

    response = client.delete("/1")
    assert response.status_code == 500
    assert response.json() == {"error": "error deleting planet"}


def test_non_integer_id_is_400(client):
    assert client.get("/mars").status_code == 400


def test_cache_outage_is_invisible_to_clients(client, cache_store):
    """Requests succeed from the store when the cache is down."""
    cache_store.available = False

    assert client.post("/", json={"name": "Mars"}).status_code == 200
    assert client.get("/1").json() == {"id": 1, "name": "Mars"}
    assert client.put("/1", json={"name": "Mars2"}).status_code == 200
    assert client.get("/").json() == [{"id": 1, "name": "Mars2"}]


def test_health(client, cache_store):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "store_healthy": True, "cache_healthy": True}

    cache_store.available = False
    response = client.get("/health")
    assert response.status_code == 503
    assert response.json()["cache_healthy"] is False


def test_rate_limit_rejects_twenty_first_request(app_factory, planet_store, clock):
    config = Settings(redis_addr="localhost:6379", rate_limit_requests=20, rate_limit_window=60)

    with TestClient(app_factory(config)) as client:
        statuses = [client.get("/").status_code for _ in range(21)]

        assert statuses[:20] == [200] * 20
        assert statuses[20] == 429
        assert planet_store.calls["list_all"] == 1

        clock.advance(60)
        assert client.get("/").status_code == 200


def test_rate_limited_request_never_reaches_handler(app_factory, planet_store):
    config = Settings(redis_addr="localhost:6379", rate_limit_requests=1, rate_limit_window=60)

    with TestClient(app_factory(config)) as client:
        assert client.post("/", json={"name": "Mars"}).status_code == 200
        response = client.post("/", json={"name": "Venus"})

    assert response.status_code == 429
    assert response.json() == {"error": "too many requests"}
    assert response.headers["retry-after"] == "60"
    assert planet_store.rows == {1: "Mars"}


def test_rate_limit_fails_open(app_factory, cache_store):
    config = Settings(redis_addr="localhost:6379", rate_limit_requests=1, rate_limit_window=60)
    cache_store.available = False

    with TestClient(app_factory(config)) as client:
        statuses = [client.get("/").status_code for _ in range(5)]

    assert statuses == [200] * 5


def test_forwarded_for_used_only_when_trusted(app_factory):
    config = Settings(
        redis_addr="localhost:6379",
        rate_limit_requests=1,
        rate_limit_window=60,
        trust_proxy_headers=True,
    )

    with TestClient(app_factory(config)) as client:
        assert client.get("/", headers={"X-Forwarded-For": "1.1.1.1"}).status_code == 200
        assert client.get("/", headers={"X-Forwarded-For": "2.2.2.2, 10.0.0.1"}).status_code == 200
        assert client.get("/", headers={"X-Forwarded-For": "1.1.1.1"}).status_code == 429
