"""
Order Simulation Script

Fires concurrent order submissions at a running server and checks that
every returned grand total matches the menu prices. Part of the submitted
quantities are deliberately blank, malformed or non-positive; those items
must simply be missing from the order.

Run from project root: python scripts/simulate.py --orders 50

Version: 1.0.0
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import datetime
from decimal import Decimal
from typing import Any

import httpx

API_BASE_URL = "http://localhost:8080"
TOTAL_ORDERS = 50

SALUTATIONS = ["Frau", "Herr", None]
FIRST_NAMES = ["Anna", "Jonas", "Lena", "Paul", "Marie", "Felix", "Sophie", "Lukas"]
LAST_NAMES = ["Schmidt", "Müller", "Schneider", "Fischer", "Weber", "Meyer", "Wagner"]
STREETS = ["Bahnhofstraße", "Hauptstraße", "Gartenweg", "Schulstraße", "Lindenallee"]
CITIES = [("10115", "Berlin"), ("20095", "Hamburg"), ("80331", "München")]

# Values the server has to ignore
JUNK_QUANTITIES = ["", "   ", "abc", "1.5", "0", "-2"]


def generate_random_customer() -> dict[str, Any]:
    """Generate random customer fields."""
    postal_code, city = random.choice(CITIES)
    return {
        "salutation": random.choice(SALUTATIONS),
        "first_name": random.choice(FIRST_NAMES),
        "last_name": random.choice(LAST_NAMES),
        "street": random.choice(STREETS),
        "house_number": str(random.randint(1, 120)),
        "postal_code": postal_code,
        "city": city,
    }


def generate_quantities(item_ids: list[str]) -> tuple[dict[str, str], dict[str, int]]:
    """
    Generate raw quantities for a random subset of the menu.

    Returns:
        (raw values to submit, quantities the server should accept)
    """
    raw: dict[str, str] = {}
    expected: dict[str, int] = {}
    for item_id in random.sample(item_ids, k=random.randint(1, len(item_ids))):
        if random.random() < 0.25:
            raw[item_id] = random.choice(JUNK_QUANTITIES)
        else:
            quantity = random.randint(1, 5)
            raw[item_id] = str(quantity)
            expected[item_id] = quantity
    return raw, expected


async def send_order(
    order_num: int,
    prices: dict[str, Decimal],
) -> dict[str, Any]:
    """Submit one order in its own session and check the total."""
    raw, expected = generate_quantities(list(prices))
    payload = {"customer": generate_random_customer(), "quantities": raw}
    expected_total = sum(
        (prices[item_id] * qty for item_id, qty in expected.items()), Decimal("0")
    )
    start_time = time.time()

    try:
        async with httpx.AsyncClient(base_url=API_BASE_URL) as client:
            response = await client.post("/api/orders", json=payload, timeout=30.0)
        elapsed = round(time.time() - start_time, 3)

        if response.status_code != 200:
            return {
                "order_num": order_num,
                "success": False,
                "error": response.text[:100],
                "time": elapsed,
            }

        data = response.json()
        total = Decimal(data["grand_total"])
        returned = {line["item_id"]: line["quantity"] for line in data["lines"]}
        consistent = total == expected_total and returned == expected
        return {
            "order_num": order_num,
            "success": consistent,
            "total": total,
            "error": None if consistent else f"expected {expected_total}, got {total}",
            "time": elapsed,
        }
    except httpx.HTTPError as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": elapsed,
        }


async def run_simulation(num_orders: int = TOTAL_ORDERS) -> dict[str, Any]:
    """
    Run the simulation.

    Args:
        num_orders: Number of orders to submit concurrently
    """
    print("=" * 70)
    print("🍕 ORDER SIMULATION")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    async with httpx.AsyncClient(base_url=API_BASE_URL) as client:
        response = await client.get("/api/menu")
        response.raise_for_status()
        prices = {item["item_id"]: Decimal(item["unit_price"]) for item in response.json()}

    start_time = time.time()
    results = await asyncio.gather(*(send_order(i + 1, prices) for i in range(num_orders)))
    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print(f"\n✅ Consistent Orders: {len(successful)}/{num_orders}")
    print(f"❌ Failed Orders: {len(failed)}/{num_orders}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        revenue = sum((r["total"] for r in successful), Decimal("0"))
        print(f"\n📈 Average Response: {avg_time}s")
        print(f"💰 Total Revenue: {revenue} €")

    if failed:
        print("\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Simulation Script")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--url", default=API_BASE_URL, help="Server base URL")
    args = parser.parse_args()

    API_BASE_URL = args.url
    summary = asyncio.run(run_simulation(args.orders))
    sys.exit(0 if summary["failed"] == 0 else 1)
