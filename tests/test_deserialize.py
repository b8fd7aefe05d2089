"""Tests for the reply layouts."""

import pytest

from ifdkg.core.errors import MalformedResponse
from ifdkg.core.ironfish.consts import KeyType
from ifdkg.core.ironfish.deserialize import (
    deserialize_identities,
    deserialize_identity,
    deserialize_keys,
    deserialize_opaque,
    deserialize_review_tx,
    deserialize_round1,
    deserialize_round2,
    deserialize_signature,
    deserialize_version,
    parse_identities,
)
from ifdkg.core.ironfish.serialize import serialize_round_packages


@pytest.mark.parametrize(
    "secret_len,public_len",
    [(0, 0), (1, 255), (256, 3), (4096, 1000), (65535, 65535)],
)
def test_round_packages_recovered(secret_len, public_len):
    secret = bytes(i % 256 for i in range(secret_len))
    public = bytes((i * 7) % 256 for i in range(public_len))
    packages = deserialize_round1(serialize_round_packages(secret, public))
    assert packages.secret_package == secret
    assert packages.public_package == public


def test_round2_shares_layout():
    packages = deserialize_round2(b"\x00\x01s\x00\x02pp")
    assert (packages.secret_package, packages.public_package) == (b"s", b"pp")


@pytest.mark.parametrize("data", [b"\x00\x05abc", b"\x00\x01a\x00\x03bc", b"\x00"])
def test_round_packages_truncated(data):
    with pytest.raises(MalformedResponse):
        deserialize_round1(data)


def test_round_packages_missing():
    with pytest.raises(MalformedResponse, match="missing round"):
        deserialize_round1(None)


def test_round_packages_empty_reply():
    """An empty reply is still too short for the two length fields."""
    with pytest.raises(MalformedResponse, match="secret package length"):
        deserialize_round1(b"")


def test_identity_length(identities):
    assert deserialize_identity(identities[0]) == identities[0]
    with pytest.raises(MalformedResponse):
        deserialize_identity(identities[0][:100])


def test_identities_split(identities):
    assert deserialize_identities(b"".join(identities)) == identities


def test_identities_empty():
    """No identities stored: zero pages of data decode to an empty list."""
    assert deserialize_identities(b"") == []
    assert parse_identities(b"") == []


def test_identities_missing():
    with pytest.raises(MalformedResponse, match="missing identities"):
        deserialize_identities(None)


def test_identities_not_a_multiple():
    with pytest.raises(MalformedResponse, match="not a multiple of 129"):
        deserialize_identities(bytes(130))


def test_parse_identities(identities):
    parsed = parse_identities(b"".join(identities[:2]))
    assert [p.version for p in parsed] == [0x72, 0x72]
    assert parsed[1].verification_key == bytes([2]) * 32
    assert parsed[1].to_bytes() == identities[1]


def test_signature_bare():
    assert deserialize_signature(b"\x01" * 64) == b"\x01" * 64


def test_signature_prefixed():
    assert deserialize_signature(b"\x00\x03abc") == b"abc"


def test_signature_trailing_bytes():
    with pytest.raises(MalformedResponse, match="trailing"):
        deserialize_signature(b"\x00\x01ab")


def test_opaque_requires_data():
    assert deserialize_opaque(b"\x01", "nonces") == b"\x01"
    assert deserialize_opaque(b"", "nonces") == b""
    with pytest.raises(MalformedResponse, match="missing nonces"):
        deserialize_opaque(None, "nonces")


def test_review_tx_hash():
    assert deserialize_review_tx(bytes(range(40))) == bytes(range(32))
    with pytest.raises(MalformedResponse):
        deserialize_review_tx(bytes(31))


def test_version_short():
    """Nine bytes: one byte per version field."""
    data = bytes([0, 1, 2, 3, 0]) + (0x33000004).to_bytes(4, "big")
    version = deserialize_version(data)
    assert (version.major, version.minor, version.patch) == (1, 2, 3)
    assert not version.test_mode
    assert not version.device_locked
    assert version.target_id == 0x33000004
    assert str(version) == "1.2.3"


def test_version_long():
    """Twelve bytes: two bytes per version field."""
    data = b"\x01\x00\x01\x01\x00\x00\x0A\x01" + (0x31100004).to_bytes(4, "big")
    version = deserialize_version(data)
    assert (version.major, version.minor, version.patch) == (1, 256, 10)
    assert version.test_mode
    assert version.device_locked


def test_version_bad_length():
    with pytest.raises(MalformedResponse):
        deserialize_version(bytes(5))


def test_keys_public_address():
    keys = deserialize_keys(b"\xAA" * 32, KeyType.PUBLIC_ADDRESS)
    assert keys.public_address == b"\xAA" * 32
    assert keys.view_key is None


def test_keys_view_key():
    data = b"\x01" * 64 + b"\x02" * 32 + b"\x03" * 32
    keys = deserialize_keys(data, KeyType.VIEW_KEY)
    assert (keys.view_key, keys.ivk, keys.ovk) == (b"\x01" * 64, b"\x02" * 32, b"\x03" * 32)


def test_keys_proof_generation_key():
    keys = deserialize_keys(b"\x04" * 32 + b"\x05" * 32, KeyType.PROOF_GENERATION_KEY)
    assert (keys.ak, keys.nsk) == (b"\x04" * 32, b"\x05" * 32)


def test_keys_short():
    with pytest.raises(MalformedResponse, match="ovk"):
        deserialize_keys(bytes(100), KeyType.VIEW_KEY)


def test_keys_unknown_type():
    with pytest.raises(MalformedResponse, match="unknown key type"):
        deserialize_keys(bytes(32), 7)
