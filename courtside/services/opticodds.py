# courtside/services/opticodds.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from courtside.core.config import Settings
from courtside.core.errors import UpstreamError
from courtside.models.types import Fixture, OddsQuote, ResultRecord
from courtside.services.batching import envelope_records, fetch_batched, record_id, result_fixture_id

logger = logging.getLogger("courtside.opticodds")

HEADERS = {"User-Agent": "Mozilla/5.0", "Accept": "application/json"}

Params = List[Tuple[str, str]]


class OpticOddsClient:
    """
    Thin async client over the OpticOdds v3 fixtures / odds / results endpoints.

    The API key comes from Settings and is sent as X-Api-Key on every call.
    No retries: a non-2xx answer raises httpx.HTTPStatusError, a body that is
    not a JSON object raises UpstreamError.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            headers={**HEADERS, "X-Api-Key": settings.require_api_key()},
            timeout=settings.http_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "OpticOddsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_json(self, path: str, params: Params) -> Dict[str, Any]:
        r = await self._client.get(path, params=params)
        r.raise_for_status()
        try:
            body = r.json()
        except ValueError as e:
            raise UpstreamError(f"unparseable body from {path}: {e}", path=path) from e
        if not isinstance(body, dict):
            raise UpstreamError(f"expected a JSON object from {path}", path=path)
        return body

    # ---------- fixtures ----------

    async def fixtures_for_date(self, start_date: str) -> List[Fixture]:
        s = self._settings
        params: Params = [("sport", s.sport), ("league", s.league), ("start_date", start_date)]
        body = await self._get_json("/fixtures", params)
        fixtures = envelope_records(body)
        logger.info("fixtures %s/%s start_date=%s -> %d", s.sport, s.league, start_date, len(fixtures))
        return fixtures

    # ---------- odds ----------

    async def _odds_batch(self, ids: List[str]) -> Dict[str, Any]:
        s = self._settings
        params: Params = [("fixture_id", str(i)) for i in ids]
        params += [
            ("sportsbook", s.sportsbook),
            ("odds_format", s.odds_format),
            ("is_main", "true"),
        ]
        return await self._get_json("/fixtures/odds", params)

    async def odds_for_fixtures(self, fixture_ids: Sequence[str]) -> Dict[str, List[OddsQuote]]:
        records = await fetch_batched(fixture_ids, self._settings.batch_size, self._odds_batch, key=record_id)
        out: Dict[str, List[OddsQuote]] = {}
        for fid, rec in records.items():
            odds = rec.get("odds")
            out[fid] = [q for q in odds if isinstance(q, dict)] if isinstance(odds, list) else []
        logger.info("odds: %d fixtures requested -> %d with odds", len(fixture_ids), len(out))
        return out

    # ---------- results ----------

    async def _results_batch(self, ids: List[str]) -> Dict[str, Any]:
        s = self._settings
        params: Params = [("fixture_id", str(i)) for i in ids]
        params += [("sport", s.sport), ("league", s.league)]
        return await self._get_json("/fixtures/results", params)

    async def results_for_fixtures(self, fixture_ids: Sequence[str]) -> Dict[str, ResultRecord]:
        out = await fetch_batched(
            fixture_ids, self._settings.batch_size, self._results_batch, key=result_fixture_id
        )
        logger.info("results: %d fixtures requested -> %d results", len(fixture_ids), len(out))
        return out
