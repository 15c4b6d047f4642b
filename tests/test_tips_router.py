from fastapi import FastAPI
from fastapi.testclient import TestClient

from tipstream.core.dependencies import get_tip_service
from tipstream.models.tips import TipTier
from tipstream.services import TipService
from tipstream.services.gemini_client import TierGenerationResult


class StubGenerator:
    async def try_generate_tiers(self, **kwargs) -> TierGenerationResult:
        return TierGenerationResult(
            success=True,
            tiers=[
                TipTier(
                    id="gaming-extra-life",
                    theme="gaming",
                    amount=3,
                    emoji="🍄",
                    name="Extra Life",
                    perk="Respawn shoutout",
                )
            ],
        )


def test_suggest_defaults(client: TestClient):
    response = client.get("/tips/suggest")

    assert response.status_code == 200
    data = response.json()
    assert data["theme"] == "fun"
    assert data["currency"] == "EUR"
    assert len(data["tiers"]) == 9
    assert data["tiers"][0] == {
        "id": "fun-spark",
        "theme": "fun",
        "amount": 0.5,
        "emoji": "✨",
        "name": "Spark",
        "perk": "You lit the flame!",
    }


def test_suggest_with_query_params(client: TestClient):
    response = client.get(
        "/tips/suggest",
        params={"streamId": "s1", "creatorId": "c1", "theme": "crypto", "currency": "USD"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["theme"] == "crypto"
    assert data["currency"] == "USD"
    assert len(data["tiers"]) == 9


def test_generate_without_api_key_returns_filtered_static_tiers(client: TestClient):
    response = client.post("/tips", json={"useAI": True, "minAmount": 10, "maxAmount": 50})

    assert response.status_code == 200
    data = response.json()
    assert [tier["amount"] for tier in data["tiers"]] == [10, 25, 50]


def test_generate_with_empty_body(client: TestClient):
    response = client.post("/tips", json={})

    assert response.status_code == 200
    assert len(response.json()["tiers"]) == 9


def test_generate_uses_ai_tiers(app: FastAPI, client: TestClient):
    app.dependency_overrides[get_tip_service] = lambda: TipService(
        generator=StubGenerator()  # type: ignore[arg-type]
    )

    response = client.post("/tips", json={"theme": "gaming", "currency": "GBP"})

    assert response.status_code == 200
    data = response.json()
    assert data["theme"] == "gaming"
    assert data["currency"] == "GBP"
    assert [tier["id"] for tier in data["tiers"]] == ["gaming-extra-life"]


def test_generate_rejects_bad_amount(client: TestClient):
    response = client.post("/tips", json={"minAmount": "lots"})

    assert response.status_code == 422


def test_default_dependency_has_no_generator_without_key(app: FastAPI):
    assert get_tip_service().ai_available is False


def test_generate_with_real_dependencies_and_no_key(app: FastAPI):
    with TestClient(app) as test_client:
        response = test_client.post(
            "/tips", json={"useAI": True, "minAmount": 10, "maxAmount": 50}
        )

    assert response.status_code == 200
    assert [tier["id"] for tier in response.json()["tiers"]] == [
        "fun-stream-fuel",
        "fun-golden-flame",
        "fun-boss-tip",
    ]


def test_suggest_rejects_unknown_theme(client: TestClient):
    response = client.get("/tips/suggest", params={"theme": "vaporwave"})

    assert response.status_code == 422


def test_generate_rejects_unknown_theme(client: TestClient):
    response = client.post("/tips", json={"theme": "vaporwave"})

    assert response.status_code == 422
