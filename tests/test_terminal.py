"""Tests for message dispatch through the Ironfish terminal."""

import asyncio

import pytest

from ifdkg.core.base import Message
from ifdkg.core.ironfish import (
    CURRENT,
    LEGACY,
    GetVersionMessage,
    GetVersionResult,
    IdentityMessage,
    IronfishTerminal,
    RawAPDUMessage,
    RestoreKeysMessage,
    RestoreKeysResult,
)

from fakes import FakeAgent, ok, status


def test_dispatch_get_version(transport):
    agent = FakeAgent(transport([ok(b"\x00\x01\x02\x03\x00\x00\x00\x00\x01")]))
    terminal = IronfishTerminal(agent, CURRENT)
    result = asyncio.run(terminal.send(GetVersionMessage()))
    assert isinstance(result, GetVersionResult)
    assert str(result.version) == "1.2.3"


def test_dispatch_restore(transport):
    t = transport([ok(), ok(b"\x00")])
    terminal = IronfishTerminal(FakeAgent(t), CURRENT)
    result = asyncio.run(terminal.send(RestoreKeysMessage(encrypted_keys=b"\x01" * 8)))
    assert isinstance(result, RestoreKeysResult)


def test_generation_selects_cla(transport, identities):
    t = transport([ok(identities[0])])
    terminal = IronfishTerminal(FakeAgent(t), LEGACY)
    asyncio.run(terminal.send(IdentityMessage(index=0)))
    assert t.sent[0].cla == 0x59
    assert terminal.protocol.generation is LEGACY


def test_raw_apdu_returns_status(transport):
    """Raw commands hand back the status word instead of raising."""
    t = transport([status(0x6D00)])
    terminal = IronfishTerminal(FakeAgent(t))
    result = asyncio.run(terminal.send(RawAPDUMessage(cla=0x59, ins=0x7F)))
    assert result.sw == 0x6D00
    assert result.data == b""


def test_unsupported_message(transport):
    terminal = IronfishTerminal(FakeAgent(transport([])))
    with pytest.raises(ValueError, match="unsupported message"):
        asyncio.run(terminal.send(Message()))


def test_connect_and_disconnect(transport):
    agent = FakeAgent(transport([]))
    terminal = IronfishTerminal(agent)
    terminal.connect()
    assert agent.connected
    terminal.disconnect()
    assert not agent.connected


def test_supported_messages(transport):
    terminal = IronfishTerminal(FakeAgent(transport([])))
    assert GetVersionMessage in terminal.supported_messages
    assert RawAPDUMessage in terminal.supported_messages
