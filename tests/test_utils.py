import asyncio

import pytest

from doc_ingest.progress import ProgressChannel, ScrapePhase, emit
from doc_ingest.utils import RateLimiter, canonicalize_path, origin_of, resolve_location


def test_origin_of():
    assert origin_of("https://docs.example.com:8443/std/index.html") == "https://docs.example.com:8443"
    assert origin_of("std/index.html") == ""


def test_resolve_location():
    base = "https://docs.example.com/std/"
    assert resolve_location(base, "vec/index.html") == "https://docs.example.com/std/vec/index.html"
    assert resolve_location(base, "./vec/") == "https://docs.example.com/std/vec/"
    assert resolve_location(base, "/core/") == "https://docs.example.com/core/"
    assert resolve_location(base, "") == "https://docs.example.com/std/"


def test_canonicalize_path():
    assert canonicalize_path("a/./b//c/../d.html") == "a/b/d.html"
    assert canonicalize_path("../x") == "x"
    assert canonicalize_path("learn/") == "learn/"
    assert canonicalize_path("./") == ""


@pytest.mark.asyncio
async def test_rate_limiter_bounds_concurrency():
    limiter = RateLimiter(delay_seconds=0, max_concurrent=2)

    async def work():
        async with limiter.slot():
            await asyncio.sleep(0.01)

    await asyncio.gather(*(work() for _ in range(6)))

    assert limiter.peak_in_flight == 2
    assert limiter.in_flight == 0


@pytest.mark.asyncio
async def test_progress_channel_drops_when_full():
    channel = ProgressChannel(maxsize=2)
    for index in range(5):
        emit(channel, ScrapePhase.SCRAPING, current_index=index)

    assert channel.dropped == 3

    channel.close()
    events = [event async for event in channel]

    # One queued event made room for the end-of-stream marker.
    assert [e.current_index for e in events] == [1]
    assert channel.dropped == 4


@pytest.mark.asyncio
async def test_progress_channel_ignores_events_after_close():
    channel = ProgressChannel()
    channel.close()
    emit(channel, ScrapePhase.COMPLETED)

    assert [event async for event in channel] == []


def test_emit_without_channel_is_a_no_op():
    emit(None, ScrapePhase.STARTING)
