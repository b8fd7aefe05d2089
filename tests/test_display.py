"""Tests for ceremony formatting."""

from ifdkg.app.ceremony import CeremonyInfo
from ifdkg.app.display import format_ceremony_info, format_keys, format_version
from ifdkg.core.ironfish import Keys, KeyType, RoundPackages, Version


def test_empty_info():
    assert format_ceremony_info(CeremonyInfo()) == ""


def test_long_packages_are_cut():
    info = CeremonyInfo(round1=RoundPackages(b"\x01" * 100, b"\x02"))
    text = format_ceremony_info(info)
    assert "(100 bytes)" in text
    assert "public  02" in text


def test_version_flags():
    text = format_version(Version(True, 1, 2, 3, True, 0x33000004))
    assert "1.2.3" in text
    assert "test mode, locked" in text


def test_keys_only_present_fields():
    text = format_keys(Keys(KeyType.PROOF_GENERATION_KEY, ak=b"\xAA" * 32, nsk=b"\xBB" * 32))
    assert "proof_generation_key" in text
    assert "ak" in text
    assert "view_key" not in text
