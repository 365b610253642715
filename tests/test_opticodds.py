import json

import httpx
import pytest

from courtside.core.config import load_settings
from courtside.core.errors import ConfigError, UpstreamError
from courtside.services.opticodds import OpticOddsClient


def make_client(handler, monkeypatch, **env):
    for k, v in env.items():
        monkeypatch.setenv(k, v)
    return OpticOddsClient(load_settings(), transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fixtures_request_shape_and_api_key_header(monkeypatch):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"data": [{"id": "fx1"}, {"id": "fx2"}]})

    async with make_client(handler, monkeypatch) as client:
        out = await client.fixtures_for_date("2026-10-18")

    assert [f["id"] for f in out] == ["fx1", "fx2"]
    req = seen[0]
    assert req.url.path == "/api/v3/fixtures"
    assert req.headers["X-Api-Key"] == "TEST_KEY"
    assert dict(req.url.params) == {"sport": "basketball", "league": "nba", "start_date": "2026-10-18"}


@pytest.mark.asyncio
async def test_fixtures_without_data_list_is_empty(monkeypatch):
    def handler(request):
        return httpx.Response(200, json={"data": {"oops": True}})

    async with make_client(handler, monkeypatch) as client:
        assert await client.fixtures_for_date("2026-10-18") == []


@pytest.mark.asyncio
async def test_odds_are_batched_by_five_with_main_line_filters(monkeypatch):
    seen = []

    def handler(request):
        ids = request.url.params.get_list("fixture_id")
        seen.append(request)
        return httpx.Response(200, json={"data": [{"id": i, "odds": [{"market": "Moneyline", "price": -110}]} for i in ids]})

    ids = [f"fx{i}" for i in range(12)]
    async with make_client(handler, monkeypatch) as client:
        out = await client.odds_for_fixtures(ids)

    assert len(seen) == 3
    assert [len(r.url.params.get_list("fixture_id")) for r in seen] == [5, 5, 2]
    params = seen[0].url.params
    assert seen[0].url.path == "/api/v3/fixtures/odds"
    assert params["sportsbook"] == "FanDuel"
    assert params["odds_format"] == "AMERICAN"
    assert params["is_main"] == "true"
    assert set(out) == set(ids)
    assert out["fx0"] == [{"market": "Moneyline", "price": -110}]


@pytest.mark.asyncio
async def test_odds_batch_size_comes_from_settings(monkeypatch):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"data": []})

    async with make_client(handler, monkeypatch, COURTSIDE_BATCH_SIZE="2") as client:
        assert await client.odds_for_fixtures(["a", "b", "c"]) == {}
    assert len(seen) == 2


@pytest.mark.asyncio
async def test_odds_record_without_list_gets_empty_quotes(monkeypatch):
    def handler(request):
        return httpx.Response(200, json={"data": [{"id": "a"}, {"id": "b", "odds": "n/a"}]})

    async with make_client(handler, monkeypatch) as client:
        assert await client.odds_for_fixtures(["a", "b"]) == {"a": [], "b": []}


@pytest.mark.asyncio
async def test_results_keyed_by_nested_fixture_id(monkeypatch):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json={"data": [{"fixture": {"id": "fx1"}, "scores": {}}, {"id": "fx2"}, {"scores": {}}]},
        )

    async with make_client(handler, monkeypatch) as client:
        out = await client.results_for_fixtures(["fx1", "fx2"])

    assert set(out) == {"fx1", "fx2"}
    params = seen[0].url.params
    assert seen[0].url.path == "/api/v3/fixtures/results"
    assert params.get_list("fixture_id") == ["fx1", "fx2"]
    assert (params["sport"], params["league"]) == ("basketball", "nba")


@pytest.mark.asyncio
async def test_empty_ids_make_no_requests(monkeypatch):
    def handler(request):
        raise AssertionError("no request expected")

    async with make_client(handler, monkeypatch) as client:
        assert await client.odds_for_fixtures([]) == {}
        assert await client.results_for_fixtures([]) == {}


@pytest.mark.asyncio
async def test_non_2xx_raises(monkeypatch):
    def handler(request):
        return httpx.Response(503, json={"message": "down"})

    async with make_client(handler, monkeypatch) as client:
        with pytest.raises(httpx.HTTPStatusError):
            await client.odds_for_fixtures(["a"])


@pytest.mark.asyncio
async def test_unparseable_body_raises_upstream_error(monkeypatch):
    def handler(request):
        return httpx.Response(200, content=b"<html>nope</html>")

    async with make_client(handler, monkeypatch) as client:
        with pytest.raises(UpstreamError) as exc:
            await client.results_for_fixtures(["a"])
    assert exc.value.path == "/fixtures/results"


@pytest.mark.asyncio
async def test_non_object_body_raises_upstream_error(monkeypatch):
    def handler(request):
        return httpx.Response(200, content=json.dumps([1, 2]).encode())

    async with make_client(handler, monkeypatch) as client:
        with pytest.raises(UpstreamError):
            await client.fixtures_for_date("2026-10-18")


def test_missing_api_key_refuses_to_build_client(monkeypatch):
    monkeypatch.delenv("OPTICODDS_API_KEY", raising=False)
    with pytest.raises(ConfigError):
        OpticOddsClient(load_settings())
