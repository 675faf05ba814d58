"""
E2E tests for customer scenarios run through the full HTTP flow.

Each scenario builds a snapshot the way the estimator UI does (field edits,
slider moves, currency switch) and then calculates, reports and saves it.

Customer scenarios:
- reference_payer: $50M mid-size USD payer, expected clear benefit
- card_heavy: mostly card payments, benefit driven by rebates
- expensive_alternative: alternative priced above the incumbent, negative benefit
- dormant: no payment volume, everything zero without errors
- uk_payer: GBP customer switched from USD defaults
"""

import pytest
from fastapi.testclient import TestClient


def _apply(client: TestClient, snapshot, path, value, provider=None):
    payload = {"snapshot": snapshot, "path": path, "value": value}
    if provider:
        payload["provider"] = provider
    response = client.post("/v1/fields", json=payload)
    assert response.status_code == 200
    return response.json()["snapshot"]


@pytest.mark.integration
def test_reference_payer_benefit(client: TestClient, canonical_snapshot):
    """
    reference_payer: default inputs
    Expected: ~$938.5K annual benefit, calculation saved and listed
    """
    results = client.post("/v1/calculate", json={"snapshot": canonical_snapshot}).json()
    assert results["total_annual_benefit"] == pytest.approx(938_500)
    assert results["costs"]["savings_percentage"] == pytest.approx(44.867, abs=0.001)

    saved = client.post("/v1/calculations", json={"snapshot": results["snapshot"], "name": "Reference"})
    assert saved.status_code == 201

    listing = client.get("/v1/calculations").json()["calculations"]
    assert listing[0]["name"] == "Reference"


@pytest.mark.integration
def test_card_heavy_payer(client: TestClient, canonical_snapshot):
    """
    card_heavy: 10% rails / 90% cards
    Expected: rebate differential outweighs rail savings, incentives dominate the benefit
    """
    response = client.post("/v1/splits", json={"snapshot": canonical_snapshot, "split": "method", "percent": 10})
    snapshot = response.json()["snapshot"]

    results = client.post("/v1/calculate", json={"snapshot": snapshot}).json()

    assert results["breakdown"]["method"]["card"]["value"] == pytest.approx(45_000_000)
    assert results["incentives"]["differential"] == pytest.approx(225_000)  # 45M x 0.5%
    assert results["freed_working_capital"] == pytest.approx(45_000_000)
    assert results["incentives"]["differential"] > results["costs"]["savings"]["total"]

    report = client.post("/v1/report", json={"snapshot": snapshot}).json()
    assert report["incentive_row"]["note"] == (
        "Exceptional card rebate value with best-in-class rates and processing"
    )


@pytest.mark.integration
def test_expensive_alternative(client: TestClient, canonical_snapshot):
    """
    expensive_alternative: alternative fees above the incumbent on every line
    Expected: negative benefit, reported as no savings
    """
    snapshot = canonical_snapshot
    for path, value in [
        ("localRailFee", 1.50),
        ("crossBorderFee", 4.00),
        ("fxMargins.tier1", 0.90),
        ("fxMargins.tier2", 0.80),
        ("fxMargins.tier3", 0.70),
        ("cardRebate", 0.75),
    ]:
        snapshot = _apply(client, snapshot, path, value, provider="tungsten")

    results = client.post("/v1/calculate", json={"snapshot": snapshot}).json()
    assert results["costs"]["savings"]["total"] < 0
    assert results["incentives"]["differential"] < 0
    assert results["total_annual_benefit"] < 0

    report = client.post("/v1/report", json={"snapshot": snapshot}).json()
    assert all(row["note"] == "No savings in this category" for row in report["cost_rows"])


@pytest.mark.integration
def test_dormant_customer(client: TestClient, canonical_snapshot):
    """
    dormant: no payments at all
    Expected: all totals zero, no division errors
    """
    snapshot = _apply(client, canonical_snapshot, "totalPaymentValue", 0)
    snapshot = _apply(client, snapshot, "totalPaymentCount", 0)

    response = client.post("/v1/calculate", json={"snapshot": snapshot})

    assert response.status_code == 200
    results = response.json()
    assert results["total_annual_benefit"] == 0
    assert results["average_transaction_size"] == 0
    assert results["costs"]["savings_percentage"] == 0
    assert results["detailed_costs"]["tungsten"]["effective_rate"] == 0


@pytest.mark.integration
def test_uk_payer(client: TestClient, canonical_snapshot):
    """
    uk_payer: defaults converted to GBP, FX tiers reshaped
    Expected: monetary results scale by the rate, validation still passes
    """
    response = client.post("/v1/currency", json={"snapshot": canonical_snapshot, "currency": "GBP"})
    snapshot = response.json()["snapshot"]

    response = client.post("/v1/fx-tiers/adjust", json={"snapshot": snapshot, "tier": 3, "percent": 50})
    snapshot = response.json()["snapshot"]

    validation = client.post("/v1/validate", json={"snapshot": snapshot}).json()
    assert validation["valid"] is True

    results = client.post("/v1/calculate", json={"snapshot": snapshot}).json()
    assert results["currency"] == "GBP"
    assert results["currency_symbol"] == "£"
    assert results["breakdown"]["method"]["rail"]["value"] == pytest.approx(35_550_000)
    assert results["total_annual_benefit"] > 0

    report = client.post("/v1/report", json={"snapshot": snapshot}).json()
    assert report["benefit_summary"].startswith("Cost savings: £")

    client.put("/v1/calculations/current", json={"snapshot": snapshot})
    current = client.get("/v1/calculations/current").json()
    assert current["snapshot"]["customerInfo"]["currency"] == "GBP"
