"""
Shared pricing vectors.

The same vectors run against the engine directly (settlement side) and through
the HTTP estimate endpoint (estimate side); both must agree exactly.
"""

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from backend.app.domain.pricing.engine import calculate_price
from backend.app.domain.pricing.errors import PricingError
from backend.app.domain.pricing.models import PricingConfiguration

VECTORS = json.loads((Path(__file__).parent / "data" / "pricing_vectors.json").read_text())


def assert_matches(actual: dict, expected: dict):
    for field, value in expected.items():
        if isinstance(value, bool) or field == "resolved_pricing_type":
            assert actual[field] == value, field
        else:
            assert Decimal(str(actual[field])) == Decimal(value), field


@pytest.mark.parametrize("vector", VECTORS, ids=[v["name"] for v in VECTORS])
def test_engine_vector(vector):
    config = PricingConfiguration(**vector["configuration"])
    args = (
        config,
        datetime.fromisoformat(vector["pickup"]),
        datetime.fromisoformat(vector["dropoff"]),
        vector["pricing_type"],
        vector["actual_distance"],
    )

    if "expected_error" in vector:
        with pytest.raises(PricingError) as exc_info:
            calculate_price(*args)
        assert exc_info.value.error_code == vector["expected_error"]
        return

    breakdown = calculate_price(*args)
    assert_matches(breakdown.model_dump(mode="python"), vector["expected"])

    # Invariants hold exactly
    assert breakdown.subtotal == breakdown.price_after_surge + breakdown.excess_distance_charge
    assert breakdown.total == breakdown.subtotal + breakdown.tax_amount
    assert breakdown.tax_amount == breakdown.subtotal * breakdown.tax_percentage / 100
    assert breakdown.total >= 0

    # Same inputs, same output
    assert calculate_price(*args) == breakdown


@pytest.mark.asyncio
@pytest.mark.parametrize("vector", VECTORS, ids=[v["name"] for v in VECTORS])
async def test_estimate_endpoint_vector(client, vector):
    response = await client.post("/v1/pricing/estimate", json={
        "configuration": vector["configuration"],
        "pickup_time": vector["pickup"],
        "dropoff_time": vector["dropoff"],
        "pricing_type": vector["pricing_type"],
        "actual_distance": vector["actual_distance"],
    })

    if "expected_error" in vector:
        assert response.status_code == 422
        assert response.json()["error_code"] == vector["expected_error"]
        return

    assert response.status_code == 200
    breakdown = response.json()["breakdown"]
    assert_matches(breakdown, vector["expected"])

    engine_breakdown = calculate_price(
        PricingConfiguration(**vector["configuration"]),
        datetime.fromisoformat(vector["pickup"]),
        datetime.fromisoformat(vector["dropoff"]),
        vector["pricing_type"],
        vector["actual_distance"],
    )
    assert breakdown == engine_breakdown.model_dump(mode="json")
