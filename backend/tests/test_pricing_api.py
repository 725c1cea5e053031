"""
Integration tests for bike listings and estimate-time pricing.
"""

import pytest
from decimal import Decimal


BIKE_PAYLOAD = {
    "name": "Eco Rider E-Bike",
    "bike_type": "electric",
    "pricing_slabs": {
        "hourly": {
            "price": 100, "duration_min": 1, "duration_max": 6,
            "included_km": 20, "extra_km_price": 2,
            "minimum_booking_rule": "min_price", "minimum_value": 150
        }
    },
    "weekend_surge_multiplier": 1.5,
}


@pytest.mark.asyncio
async def test_create_bike(client):
    response = await client.post("/v1/bikes", json=BIKE_PAYLOAD)

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Eco Rider E-Bike"
    assert data["gst_percentage"] == 18.0
    assert data["pricing_slabs"]["hourly"]["included_distance"] == "20"


@pytest.mark.asyncio
async def test_create_bike_rejects_low_surge(client):
    response = await client.post("/v1/bikes", json={**BIKE_PAYLOAD, "weekend_surge_multiplier": 0.5})

    assert response.status_code == 422
    assert response.json()["error_code"] == "ERR_VALIDATION"


@pytest.mark.asyncio
async def test_get_missing_bike(client):
    response = await client.get("/v1/bikes/999")

    assert response.status_code == 404
    assert response.json()["error_code"] == "ERR_NOT_FOUND_001"


@pytest.mark.asyncio
async def test_list_bikes_sorted_by_price(client, legacy_bike, slab_bike, tariff_bike):
    response = await client.get("/v1/bikes", params={"sort": "price"})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    # tariff 10/h, legacy 10/h, slab 100/h; stable sort keeps insertion order on ties
    assert [bike["name"] for bike in data["bikes"]] == [
        "Thunder E-Bike", "Velocity Sport", "Trail Blazer MTB"
    ]
    assert Decimal(data["bikes"][2]["indicative_hourly_rate"]) == Decimal("100")


@pytest.mark.asyncio
async def test_pricing_types_for_slab_bike(client, slab_bike):
    response = await client.get(f"/v1/bikes/{slab_bike.id}/pricing-types")

    assert response.status_code == 200
    assert response.json()["pricing_types"] == ["hourly", "daily"]


@pytest.mark.asyncio
async def test_pricing_types_for_package_only_configuration(client):
    response = await client.post("/v1/pricing/types", json={"configuration": {"package_12_hour": 499}})

    assert response.status_code == 200
    assert response.json()["pricing_types"] == []


@pytest.mark.asyncio
async def test_estimate_legacy_bike(client, legacy_bike):
    response = await client.post(f"/v1/bikes/{legacy_bike.id}/estimate", json={
        "pickup_time": "2024-06-10T09:00:00",
        "dropoff_time": "2024-06-10T14:00:00",
        "actual_distance": 25,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["bike_id"] == legacy_bike.id
    assert data["currency"] == "INR"
    breakdown = data["breakdown"]
    assert Decimal(breakdown["base_price"]) == Decimal("50")
    assert Decimal(breakdown["excess_distance_charge"]) == Decimal("25")
    assert Decimal(breakdown["total"]) == Decimal("88.5")


@pytest.mark.asyncio
async def test_estimate_slab_bike_weekend_surge(client, slab_bike):
    response = await client.post(f"/v1/bikes/{slab_bike.id}/estimate", json={
        "pickup_time": "2024-06-14T23:00:00",
        "dropoff_time": "2024-06-15T02:00:00",
        "pricing_type": "hourly",
    })

    assert response.status_code == 200
    breakdown = response.json()["breakdown"]
    assert breakdown["has_weekend"] is True
    assert Decimal(breakdown["surge_multiplier"]) == Decimal("1.5")
    assert Decimal(breakdown["price_after_surge"]) == Decimal("225")


@pytest.mark.asyncio
async def test_estimate_out_of_range_slab(client, slab_bike):
    response = await client.post(f"/v1/bikes/{slab_bike.id}/estimate", json={
        "pickup_time": "2024-06-10T10:00:00",
        "dropoff_time": "2024-06-11T12:00:00",
        "pricing_type": "daily",
    })

    assert response.status_code == 422
    data = response.json()
    assert data["error_code"] == "ERR_PRICING_002"
    assert data["details"]["pricing_type"] == "daily"


@pytest.mark.asyncio
async def test_estimate_rejects_inverted_window(client, legacy_bike):
    response = await client.post(f"/v1/bikes/{legacy_bike.id}/estimate", json={
        "pickup_time": "2024-06-10T14:00:00",
        "dropoff_time": "2024-06-10T09:00:00",
    })

    assert response.status_code == 400
    assert response.json()["error_code"] == "ERR_RENTAL_001"


@pytest.mark.asyncio
async def test_estimate_returns_correlation_id(client, legacy_bike):
    response = await client.post(
        f"/v1/bikes/{legacy_bike.id}/estimate",
        json={"pickup_time": "2024-06-10T09:00:00", "dropoff_time": "2024-06-10T10:00:00"},
        headers={"X-Correlation-ID": "test-correlation"},
    )

    assert response.status_code == 200
    assert response.headers["X-Correlation-ID"] == "test-correlation"


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
