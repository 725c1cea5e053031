"""
Pre-Deploy and Smoke Test Script.

Runs the application in-process against the configured database and executes a smoke test:
1. Health Check
2. Bike Creation -> Estimate -> Booking -> Payment -> Completion
3. Settled total matches the stateless estimate for the same inputs
"""

import sys
import uuid
from decimal import Decimal
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient
from backend.app.main import app

WINDOW = {
    "pickup_time": "2030-01-04T18:00:00",  # Friday evening
    "dropoff_time": "2030-01-05T02:00:00",
}


def print_step(step, msg):
    print(f"[{step}] {msg}")


def fail(msg):
    print(f"❌ FAILURE: {msg}")
    sys.exit(1)


def success(msg):
    print(f"✅ {msg}")


def expect(response, status_code, what):
    if response.status_code != status_code:
        fail(f"{what} failed: {response.status_code} {response.text}")
    return response.json()


def main():
    print("🚀 Starting Deployment Validation...")

    with TestClient(app) as client:
        # 1. Health Check
        print_step("PRE-DEPLOY", "Checking /health...")
        expect(client.get("/health"), 200, "Health check")
        success("Health check passed")

        # 2. Smoke Test: Rental Flow
        print_step("SMOKE", "Running Bike -> Estimate -> Rental -> Settlement Flow...")
        bike = expect(
            client.post("/v1/bikes", json={
                "name": f"Smoke Test Bike {uuid.uuid4().hex[:6]}",
                "bike_type": "fuel",
                "weekday_rate": 100,
                "weekend_rate": 150,
                "min_booking_hours": 2,
                "km_limit_per_hour": 10,
                "excess_km_charge": 5,
            }),
            201,
            "Bike creation",
        )
        success(f"Created bike {bike['id']}")

        estimate = expect(
            client.post(f"/v1/bikes/{bike['id']}/estimate", json={**WINDOW, "actual_distance": "95"}),
            200,
            "Estimate",
        )
        expected_total = Decimal(estimate["breakdown"]["total"])
        success(f"Estimate with 95 km: {expected_total} {estimate['currency']}")

        rental = expect(
            client.post("/v1/rentals", json={
                "bike_id": bike["id"],
                "customer_ref": f"smoke-{uuid.uuid4().hex[:8]}",
                **WINDOW,
            }),
            201,
            "Booking",
        )
        expect(
            client.post(f"/v1/rentals/{rental['id']}/confirm-payment", json={"payment_reference": "smoke"}),
            200,
            "Payment confirmation",
        )
        settled = expect(
            client.post(f"/v1/rentals/{rental['id']}/complete", json={"start_km": 0, "end_km": 95}),
            200,
            "Completion",
        )

        if Decimal(settled["total_amount"]) != expected_total:
            fail(f"Settled total {settled['total_amount']} != estimate {expected_total}")
        success(f"Rental {settled['booking_id']} settled at {settled['total_amount']}")

    success("Deployment Validation Passed!")


if __name__ == "__main__":
    main()
