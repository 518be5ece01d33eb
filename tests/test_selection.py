"""Test deterministic image slot selection."""

import uuid
from pathlib import Path

import pytest

from app.services.selection import (
    pad_width,
    select_slot,
    slot_filename,
    slot_path,
    string_hash,
)


@pytest.mark.parametrize(
    "identifier,expected",
    [
        ("", 1),
        ("a", 98),
        ("abc", 355),
        ("hello", 323),
        # Accumulator ends at exactly -2**31
        ("polygenelubricants", 649),
    ],
)
def test_known_vectors(identifier, expected):
    """Regression vectors for the 32-bit wrapping hash with total=1000."""
    assert select_slot(identifier, 1000) == expected


def test_string_hash_wraps_to_signed_32_bit():
    """Hash values wrap like two's-complement 32-bit integers."""
    assert string_hash("") == 0
    assert string_hash("hello") == 99162322
    assert string_hash("polygenelubricants") == -(2**31)
    for text in ("a" * 50, "ogp-preview", str(uuid.uuid4())):
        assert -(2**31) <= string_hash(text) < 2**31


def test_string_hash_counts_utf16_code_units():
    """Characters outside the BMP hash as their surrogate pair."""
    # U+1F600 is the surrogate pair D83D DE00
    assert string_hash("\U0001f600") == string_hash("😀")
    assert string_hash("\U0001f600") == 0xD83D * 31 + 0xDE00


def test_select_slot_is_deterministic():
    """Same identifier and total always give the same slot."""
    for _ in range(20):
        identifier = str(uuid.uuid4())
        assert select_slot(identifier, 1000) == select_slot(identifier, 1000)


@pytest.mark.parametrize("total", [1, 2, 7, 1000, 65536])
def test_select_slot_range(total):
    """Selected slots always fall within [1, total]."""
    identifiers = ["", "a", "polygenelubricants", "日本語", "\U0001f600"]
    identifiers += [str(uuid.uuid4()) for _ in range(50)]
    for identifier in identifiers:
        assert 1 <= select_slot(identifier, total) <= total


def test_total_of_one_always_selects_one():
    assert select_slot("anything", 1) == 1


@pytest.mark.parametrize("total", [0, -1, -1000])
def test_select_slot_rejects_non_positive_total(total):
    """Non-positive totals fail fast instead of being clamped."""
    with pytest.raises(ValueError):
        select_slot("abc", total)


def test_pad_width():
    assert pad_width(9) == 1
    assert pad_width(1000) == 4
    assert pad_width(1001) == 4


def test_slot_filename_is_zero_padded():
    """Slot numbers are padded to the digit count of the total."""
    assert slot_filename(1, 1000) == "0001.png"
    assert slot_filename(42, 1000) == "0042.png"
    assert slot_filename(1000, 1000) == "1000.png"
    assert slot_filename(7, 99, "webp") == "07.webp"


def test_slot_path_joins_output_dir(tmp_path):
    assert slot_path(tmp_path, 5, 1000) == Path(tmp_path) / "0005.png"
