"""Tests for the exchange state machine."""

import asyncio

import pytest

from ifdkg.core.errors import (
    DeviceStatusError,
    InvariantViolation,
    MalformedResponse,
    TransportFailure,
)
from ifdkg.core.ironfish.consts import P1_LAST
from ifdkg.core.ironfish.generation import CURRENT, LEGACY
from ifdkg.core.ironfish.session import Session, SessionState

from fakes import ok, status

CONTEXT = b"\x00" * 12


def test_counted_paging(transport):
    """The final frame announces two pages, fetched with GET_RESULT 0 and 1."""
    t = transport([ok(), ok(), ok(b"\x02"), ok(b"A" * 10), ok(b"B" * 5)])
    session = Session(t, CURRENT)
    result = asyncio.run(session.exchange(0x63, 0x11, b"\x01" * 300, context=CONTEXT))

    assert result == b"A" * 10 + b"B" * 5
    assert [a.p1 for a in t.sent[:3]] == [0, 1, 2]
    assert all(a.cla == 0x63 and a.ins == 0x11 for a in t.sent[:3])
    assert t.sent[0].data == CONTEXT
    assert [(a.ins, a.p1, a.data) for a in t.sent[3:]] == [(0x1B, 0, b""), (0x1B, 1, b"")]
    assert session.state is SessionState.COMPLETE
    assert session.pages_fetched == 2
    assert session.chunk_index == session.chunk_count == 3
    assert session.result == result


def test_counted_paging_zero_pages(transport):
    t = transport([ok(), ok(b"\x00")])
    session = Session(t, CURRENT)
    assert asyncio.run(session.exchange(0x63, 0x1A, b"blob", context=CONTEXT)) == b""
    assert len(t.sent) == 2


def test_counted_paging_missing_count(transport):
    t = transport([ok(), ok()])
    session = Session(t, CURRENT)
    with pytest.raises(MalformedResponse, match="page count"):
        asyncio.run(session.exchange(0x63, 0x11, b"x", context=CONTEXT))
    assert session.state is SessionState.FAILED


@pytest.mark.parametrize("full_pages", [0, 1, 3])
def test_heuristic_paging(transport, full_pages):
    """k full frames followed by a short one take exactly k extra fetches."""
    full = [ok(bytes([i]) * 253) for i in range(full_pages)]
    t = transport(full + [ok(b"tail")])
    session = Session(t, LEGACY)
    result = asyncio.run(session.command(0x59, 0x1D, paged=True))

    assert result == b"".join(r.data for r in full) + b"tail"
    assert session.pages_fetched == full_pages
    assert len(t.sent) == full_pages + 1
    for fetch in t.sent[1:]:
        assert (fetch.cla, fetch.ins, fetch.p1, fetch.data) == (0x59, 0x1D, P1_LAST, b"")


def test_unpaged_command_returns_reply(transport):
    t = transport([ok(b"\x01\x02")])
    session = Session(t, CURRENT)
    assert asyncio.run(session.command(0x59, 0x00)) == b"\x01\x02"
    assert session.pages_fetched == 0


def test_fail_fast(transport):
    """A refused chunk ends the exchange; later chunks are never sent."""
    t = transport([ok(), status(0x6984, b"bad chunk"), ok(), ok(b"\x00")])
    session = Session(t, CURRENT)
    with pytest.raises(DeviceStatusError) as info:
        asyncio.run(session.exchange(0x63, 0x12, b"\x00" * 600, context=CONTEXT))

    assert info.value.code == 0x6984
    assert info.value.diagnostic == "bad chunk"
    assert len(t.sent) == 2
    assert session.state is SessionState.FAILED
    assert session.failure is info.value
    assert session.chunk_index == 2
    assert session.chunk_count == 4


def test_failed_page_fetch(transport):
    t = transport([ok(), ok(b"\x02"), ok(b"A"), status(0xB022)])
    session = Session(t, CURRENT)
    with pytest.raises(DeviceStatusError, match="Invalid dkg process status"):
        asyncio.run(session.exchange(0x63, 0x13, b"x", context=CONTEXT))
    assert session.state is SessionState.FAILED


def test_failed_page_fetch_legacy(transport):
    """A refused page fetch ends the exchange; nothing further is asked for."""
    t = transport([ok(b"\x01" * 253), status(0xB022), ok(b"tail")])
    session = Session(t, LEGACY)
    with pytest.raises(DeviceStatusError, match="Invalid dkg process status"):
        asyncio.run(session.command(0x59, 0x1D, paged=True))

    assert len(t.sent) == 2
    assert len(t.replies) == 1
    assert session.state is SessionState.FAILED
    assert session.result is None


def test_transport_failure(transport):
    t = transport([ok(), TransportFailure("reader removed")])
    session = Session(t, CURRENT)
    with pytest.raises(TransportFailure):
        asyncio.run(session.exchange(0x63, 0x11, b"x", context=CONTEXT))
    assert session.state is SessionState.FAILED


def test_new_exchange_after_failure(transport):
    t = transport([status(0xB00F), ok(), ok(b"\x01"), ok(b"page")])
    session = Session(t, CURRENT)
    with pytest.raises(DeviceStatusError):
        asyncio.run(session.exchange(0x63, 0x11, b"x", context=CONTEXT))

    result = asyncio.run(session.exchange(0x63, 0x11, b"x", context=CONTEXT))
    assert result == b"page"
    assert session.state is SessionState.COMPLETE
    assert session.failure is None


def test_cancelled_exchange_releases_session(transport):
    """A timed-out exchange fails the session instead of leaving it busy."""

    async def slow(apdu):
        await asyncio.sleep(10)
        return ok()

    session = Session(slow, CURRENT)

    async def with_timeout():
        await asyncio.wait_for(session.command(0x59, 0x00), 0.01)

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(with_timeout())
    assert session.state is SessionState.FAILED
    assert not session.busy
    assert isinstance(session.failure, asyncio.CancelledError)

    session._transmit = transport([ok(b"\x07")])
    assert asyncio.run(session.command(0x59, 0x00)) == b"\x07"
    assert session.state is SessionState.COMPLETE


def test_rejects_overlapping_exchange():
    """A second exchange started while one is in flight is refused."""
    nested: list[Exception] = []

    async def transmit(apdu):
        try:
            await session.command(0x59, 0x00)
        except InvariantViolation as exc:
            nested.append(exc)
        return ok(b"\x00")

    session = Session(transmit, CURRENT)
    asyncio.run(session.command(0x59, 0x00))

    assert len(nested) == 1
    assert "sending" in str(nested[0])
    assert session.state is SessionState.COMPLETE


def test_illegal_transition():
    session = Session(None, CURRENT)
    with pytest.raises(InvariantViolation, match="idle -> complete"):
        session._advance(SessionState.COMPLETE)
