import httpx
import pytest
from asgi_lifespan import LifespanManager

from dresswell.core.errors import ProviderUnavailable
from dresswell.main import app
from dresswell.routers.deps import get_item_store, get_vision_provider
from dresswell.storage.items import InMemoryItemStore
from tests.fixtures.wardrobe import ScriptedProvider, basic_wardrobe

JEANS_DESCRIPTION = {
    "id": "desc_jeans",
    "itemType": "jeans",
    "color": "indigo",
    "style": "casual",
    "category": "Jeans",
    "tags": ["denim"],
}


@pytest.fixture
def provider():
    return ScriptedProvider()


@pytest.fixture
def store():
    return InMemoryItemStore()


@pytest.fixture
async def client(provider, store):
    app.dependency_overrides[get_vision_provider] = lambda: provider
    app.dependency_overrides[get_item_store] = lambda: store
    async with LifespanManager(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    app.dependency_overrides.pop(get_vision_provider, None)
    app.dependency_overrides.pop(get_item_store, None)


@pytest.mark.asyncio
async def test_root(client: httpx.AsyncClient):
    r = await client.get("/")
    assert r.status_code == 200
    assert r.json()["name"] == "Dresswell API"


@pytest.mark.asyncio
async def test_analysis_requires_valid_image(client: httpx.AsyncClient):
    r = await client.post("/v1/analysis", json={})
    assert r.status_code == 400
    assert r.json()["detail"] == "image_required"

    r = await client.post("/v1/analysis/detect", json={"imageB64": "%%%"})
    assert r.status_code == 400
    assert r.json()["detail"] == "invalid_image"


@pytest.mark.asyncio
async def test_analysis_camel_case_output(client: httpx.AsyncClient, provider, image_b64):
    provider.replies["analyze_comprehensive"] = {
        "detection": {"isClothing": True, "confidence": 0.9, "detectedItem": "jeans", "reason": "denim"},
        "description": JEANS_DESCRIPTION,
        "suggestions": [{"title": "Weekend", "description": "With a tee."}],
    }
    r = await client.post("/v1/analysis", json={"imageB64": image_b64})
    assert r.status_code == 200
    body = r.json()
    assert body["detection"]["isClothing"] is True
    assert body["description"]["itemType"] == "jeans"
    assert body["suggestions"][0]["title"] == "Weekend"


@pytest.mark.asyncio
async def test_describe_and_suggest_fallbacks(client: httpx.AsyncClient, provider, image_b64):
    provider.replies["describe_clothing"] = ProviderUnavailable("timeout")
    r = await client.post("/v1/analysis/describe", json={"imageB64": image_b64})
    assert r.status_code == 200
    assert r.json()["detailedDescription"].startswith("A versatile clothing item")

    r = await client.post("/v1/analysis/suggestions", json={"imageB64": image_b64})
    assert r.status_code == 200
    assert [s["id"] for s in r.json()] == ["fallback_1", "fallback_2"]


@pytest.mark.asyncio
async def test_items_crud(client: httpx.AsyncClient):
    r = await client.post("/v1/items", json={"name": " Indigo jeans ", "description": JEANS_DESCRIPTION})
    assert r.status_code == 201
    created = r.json()
    assert created["name"] == "Indigo jeans"
    assert created["category"] == "Jeans"
    assert created["tags"] == ["denim"]

    r = await client.get("/v1/items")
    assert [it["id"] for it in r.json()] == [created["id"]]

    r = await client.delete(f"/v1/items/{created['id']}")
    assert r.status_code == 204
    r = await client.delete(f"/v1/items/{created['id']}")
    assert r.status_code == 404
    assert r.json()["detail"] == "item_not_found"


@pytest.mark.asyncio
async def test_capture_no_clothing(client: httpx.AsyncClient, provider, store, image_b64):
    for it in basic_wardrobe():
        await store.add_item(it)
    provider.replies["analyze_comprehensive"] = {
        "detection": {"isClothing": False, "confidence": 0.97, "detectedItem": "laptop", "reason": "electronics"},
    }
    r = await client.post("/v1/matches", json={"imageB64": image_b64})
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "no_clothing_detected"
    assert body["matches"] == []
    assert "rank_matches" not in provider.calls


@pytest.mark.asyncio
async def test_capture_bypass(client: httpx.AsyncClient, provider, store, image_b64):
    for it in basic_wardrobe():
        await store.add_item(it)
    provider.replies["describe_clothing"] = JEANS_DESCRIPTION
    provider.replies["rank_matches"] = ProviderUnavailable("timeout")
    r = await client.post("/v1/matches", json={"imageB64": image_b64, "bypassDetection": True})
    assert r.status_code == 200
    body = r.json()
    assert body["detection"]["detectedItem"] == "Manual override"
    assert [m["item"]["id"] for m in body["matches"]] == ["tee"]


@pytest.mark.asyncio
async def test_complementary_endpoint(client: httpx.AsyncClient, provider):
    provider.replies["rank_matches"] = ProviderUnavailable("vision_disabled")
    payload = {
        "query": JEANS_DESCRIPTION,
        "candidates": [
            {"id": "a", "name": "Oxford", "description": {"category": "Shirts", "itemType": "shirt"}},
            {"id": "b", "name": "Other jeans", "description": {"category": "Jeans", "itemType": "jeans"}},
        ],
    }
    r = await client.post("/v1/matches/complementary", json=payload)
    assert r.status_code == 200
    body = r.json()
    assert [m["item"]["id"] for m in body] == ["a"]
    assert body[0]["styleCategory"] == "Casual"


@pytest.mark.asyncio
async def test_outfit_ideas(client: httpx.AsyncClient, provider, store):
    r = await client.post("/v1/outfits/ideas", json={"occasion": "Travel"})
    assert r.status_code == 400
    assert r.json()["detail"] == "insufficient_items"

    for it in basic_wardrobe():
        await store.add_item(it)
    provider.replies["rank_matches"] = [
        {"itemId": "tee", "score": 0.8, "styleCategory": "Relaxed"},
        {"itemId": "jeans", "score": 0.75, "styleCategory": "Relaxed"},
    ]
    r = await client.post("/v1/outfits/ideas", json={"occasion": "Travel"})
    assert r.status_code == 200
    (outfit,) = r.json()
    assert outfit["styleCategory"] == "Relaxed"
    assert outfit["occasion"] == "Travel"
    assert [i["id"] for i in outfit["items"]] == ["tee", "jeans"]


@pytest.mark.asyncio
async def test_taxonomy(client: httpx.AsyncClient):
    r = await client.get("/v1/taxonomy")
    assert r.status_code == 200
    body = r.json()
    assert "T-Shirts" in body["categories"]
    assert body["occasions"][0] == "Work/Office"
    assert "sporty" in body["styles"]
