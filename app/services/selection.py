"""Deterministic mapping from request identifiers to numbered image slots."""

from pathlib import Path
from typing import Iterator

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _utf16_code_units(text: str) -> Iterator[int]:
    """Yield UTF-16 code units, so characters outside the BMP count as two."""
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def _require_positive(total: int) -> None:
    if total <= 0:
        raise ValueError(f"total must be a positive integer, got {total!r}")


def string_hash(text: str) -> int:
    """
    Fold a string into a signed 32-bit hash (``h = h * 31 + code``).

    Matches the classic Java ``String.hashCode`` with two's-complement wraparound.
    """
    acc = 0
    for code in _utf16_code_units(text):
        acc = (acc * 31 + code) & _INT32_MASK
    if acc & _INT32_SIGN:
        acc -= 1 << 32
    return acc


def select_slot(identifier: str, total: int) -> int:
    """
    Pick the image slot for an identifier.

    Args:
        identifier: Opaque request identifier (any string)
        total: Number of available slots

    Returns:
        Slot number in the range [1, total]; the same identifier always
        yields the same slot for a given total.

    Raises:
        ValueError: If total is not positive
    """
    _require_positive(total)
    return abs(string_hash(identifier)) % total + 1


def pad_width(total: int) -> int:
    """Digit count used to zero-pad slot numbers (4 for 1000)."""
    _require_positive(total)
    return len(str(total))


def slot_filename(slot: int, total: int, extension: str = "png") -> str:
    """File name for a slot, e.g. ``0001.png`` when total is 1000."""
    return f"{str(slot).zfill(pad_width(total))}.{extension}"


def slot_path(output_dir: Path, slot: int, total: int, extension: str = "png") -> Path:
    """Full path of a slot image inside output_dir."""
    return Path(output_dir) / slot_filename(slot, total, extension)
