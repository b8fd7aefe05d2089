from __future__ import annotations

import pytest

from fakes import ScriptedTransport


@pytest.fixture
def transport():
    return ScriptedTransport


@pytest.fixture
def identities() -> list[bytes]:
    return [bytes([0x72]) + bytes([i]) * 128 for i in range(1, 4)]
