# courtside/services/batching.py
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, List, Optional, Sequence, TypeVar

logger = logging.getLogger("courtside.batching")

T = TypeVar("T")

RequestBuilder = Callable[[List[Any]], Awaitable[Any]]
KeyFn = Callable[[Dict[str, Any]], Optional[Hashable]]


def chunked(items: Sequence[T], size: int) -> List[List[T]]:
    """Contiguous groups of at most `size`, in input order."""
    if size < 1:
        raise ValueError("batch size must be >= 1")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def record_id(record: Dict[str, Any]) -> Optional[Hashable]:
    return record.get("id")


def result_fixture_id(record: Dict[str, Any]) -> Optional[Hashable]:
    """Results nest the fixture; prefer fixture.id, fall back to the record id."""
    fixture = record.get("fixture")
    if isinstance(fixture, dict) and fixture.get("id"):
        return fixture["id"]
    return record.get("id")


def envelope_records(payload: Any) -> List[Dict[str, Any]]:
    """
    Pull the `data` list out of an API envelope.
    Anything other than a list of records counts as zero records.
    """
    if not isinstance(payload, dict):
        return []
    data = payload.get("data")
    if not isinstance(data, list):
        return []
    return [r for r in data if isinstance(r, dict)]


async def fetch_batched(
    ids: Sequence[Any],
    batch_size: int,
    request_builder: RequestBuilder,
    key: KeyFn = record_id,
) -> Dict[Any, Dict[str, Any]]:
    """
    Issue one request per group of ids and merge every returned record by key.

    Groups are requested one after another, never in parallel, so the
    upstream API sees at most one in-flight call per fetcher. Errors raised
    by `request_builder` abort the whole fetch.
    """
    merged: Dict[Any, Dict[str, Any]] = {}
    if not ids:
        return merged

    groups = chunked(ids, batch_size)
    for n, group in enumerate(groups, start=1):
        payload = await request_builder(group)
        if not (isinstance(payload, dict) and isinstance(payload.get("data"), list)):
            logger.warning("batch %d/%d: response has no data list; treating as empty", n, len(groups))
        records = envelope_records(payload)
        for rec in records:
            k = key(rec)
            if k is None or k == "":
                continue
            merged[k] = rec
        logger.info("batch %d/%d ids=%d -> %d records", n, len(groups), len(group), len(records))

    return merged
