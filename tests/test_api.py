"""Tests for the restaurant HTTP endpoints."""

import logging

from fastapi.testclient import TestClient

from restaurant_finder.api.app import create_app
from restaurant_finder.errors import UpstreamError
from tests.conftest import FakeDiscoveryClient


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_restaurants_returns_json_array(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/restaurants/LL574BB")

    assert response.status_code == 200
    data = response.json()
    assert isinstance(data, list)
    assert 0 < len(data) <= 10
    assert data[0] == {
        "name": "Restaurant 0",
        "cuisines": ["Pizza", "Italian"],
        "rating": 4.5,
        "address": "0 High Street, Bangor, LL57 4BB",
    }


def test_restaurants_accepts_spaced_postcode(
    container, discovery_client: FakeDiscoveryClient
) -> None:
    client = TestClient(create_app(container))

    response = client.get("/restaurants/ll57%204bb")

    assert response.status_code == 200
    assert discovery_client.calls == ["LL574BB"]


def test_restaurants_lower_bound(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/restaurants/LL")

    assert response.status_code == 400
    assert response.text == "Postcode should be at least 5 characters"


def test_restaurants_upper_bound(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/restaurants/LLLLLLLLLLLLLLLL")

    assert response.status_code == 400
    assert response.text == "Postcode should be at most 7 characters"


def test_restaurants_invalid_format(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/restaurants/LLLLLL")

    assert response.status_code == 400
    assert response.text == "Enter a valid postcode"


def test_restaurants_blank_postcode(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/restaurants/%20%20")

    assert response.status_code == 400
    assert response.text == "Postcode is required"


def test_restaurants_not_found(
    container, discovery_client: FakeDiscoveryClient
) -> None:
    discovery_client.payloads["ZE29ZZ"] = {"restaurants": []}
    client = TestClient(create_app(container))

    response = client.get("/restaurants/ZE29ZZ")

    assert response.status_code == 404
    assert response.text == "No restaurants found for postcode ZE29ZZ"


def test_restaurants_upstream_failure(
    container, discovery_client: FakeDiscoveryClient
) -> None:
    discovery_client.error = UpstreamError("Service Unavailable", status_code=503)
    client = TestClient(create_app(container))

    response = client.get("/restaurants/LL574BB")

    assert response.status_code == 500
    assert response.text == "Error fetching restaurant data: Service Unavailable"


def test_upstream_failure_is_logged_with_details(
    container, discovery_client: FakeDiscoveryClient, caplog
) -> None:
    discovery_client.error = UpstreamError("Service Unavailable", status_code=503)
    client = TestClient(create_app(container))
    app_logger = logging.getLogger("restaurant_finder")
    app_logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.WARNING, logger="restaurant_finder"):
            client.get("/restaurants/LL574BB")
    finally:
        app_logger.removeHandler(caplog.handler)

    messages = [record.getMessage() for record in caplog.records]
    assert (
        "Restaurant lookup failed: postcode=LL574BB status=503 "
        "reason=Service Unavailable"
    ) in messages
