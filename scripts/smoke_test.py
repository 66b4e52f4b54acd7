#!/usr/bin/env python3
"""
Smoke Tests for the Bid Evaluation Service
Checks the health endpoint and runs one evaluation of a known package.

Usage:
    python scripts/smoke_test.py
    python scripts/smoke_test.py --url http://localhost:8030
    python scripts/smoke_test.py --timeout 10
"""

import argparse
import sys
import time

import httpx


def _bid(bid_id, amount, scores, rating):
    return {
        "id": bid_id,
        "vendor_id": f"v-{bid_id}",
        "vendor_name": f"Vendor {bid_id}",
        "amount": amount,
        "submitted_at": "2024-12-15T09:00:00Z",
        "compliance": {
            "review_complete": True,
            "bond_required": True,
            "bond_provided": True,
            "missing_documents": [],
            "open_clarifications": [],
        },
        "raw_scores": scores,
        "vendor_rating": rating,
        "schedule": {"start_date": "2025-01-15", "duration_days": 120, "milestones": []},
    }


# Structural steel package; X must come out on top
SAMPLE_PACKAGE = {
    "id": "smoke-bp001",
    "title": "Structural Steel Package",
    "trade": "Structural",
    "status": "evaluation",
    "estimated_value": 2800000,
    "due_date": "2024-12-22",
    "criteria_weights": {"price": 40, "schedule": 20, "experience": 20, "quality": 15, "safety": 5},
    "bids": [
        _bid("X", 2650000, {"schedule": 90, "experience": 95, "quality": 92, "safety": 88}, 4.8),
        _bid("Y", 2890000, {"schedule": 95, "experience": 90, "quality": 95, "safety": 95}, 4.6),
        _bid("Z", 2720000, {"schedule": 85, "experience": 88, "quality": 89, "safety": 92}, 4.4),
    ],
}
EXPECTED_RANKING = ["X", "Z", "Y"]


def check(name: str, func, verbose: bool) -> bool:
    start = time.time()
    try:
        detail = func()
        ok = True
    except httpx.ConnectError:
        ok, detail = False, "Connection refused"
    except httpx.TimeoutException:
        ok, detail = False, "Timeout"
    except AssertionError as e:
        ok, detail = False, str(e)

    elapsed = round((time.time() - start) * 1000, 1)
    status = "PASS" if ok else "FAIL"
    line = f"  [{status}] {name:<20} {elapsed:>8}ms"
    if not ok or verbose:
        line += f"  {detail}"
    print(line)
    return ok


def run_smoke_tests(base_url: str, timeout: float = 5.0, verbose: bool = False) -> bool:
    client = httpx.Client(base_url=base_url, timeout=timeout)

    def health():
        response = client.get("/health")
        assert response.status_code == 200, f"HTTP {response.status_code}"
        return response.json()

    def evaluation():
        response = client.post("/evaluate", json=SAMPLE_PACKAGE)
        assert response.status_code == 200, f"HTTP {response.status_code}: {response.text}"
        body = response.json()
        assert body["ranking"] == EXPECTED_RANKING, f"unexpected ranking {body['ranking']}"
        assert body["recommendation"]["bid_id"] == "X", f"unexpected recommendation {body['recommendation']}"
        return body["recommendation"]

    print("\n" + "=" * 60)
    print("BID EVALUATION SMOKE TEST")
    print("=" * 60)
    try:
        results = [
            check("health", health, verbose),
            check("evaluate", evaluation, verbose),
        ]
    finally:
        client.close()

    passed = all(results)
    print("=" * 60)
    print("All checks passed" if passed else "Some checks failed")
    return passed


def main():
    parser = argparse.ArgumentParser(description="Bid evaluation service smoke tests")
    parser.add_argument("--url", default="http://localhost:8030", help="Service base URL")
    parser.add_argument("--timeout", type=float, default=5.0, help="Request timeout in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show response details")
    args = parser.parse_args()

    sys.exit(0 if run_smoke_tests(args.url, args.timeout, args.verbose) else 1)


if __name__ == "__main__":
    main()
