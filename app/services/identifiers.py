"""Request identifier and decorative text generation."""

import random
import uuid
from typing import Callable

IdGenerator = Callable[[], str]

# Hiragana, katakana and a handful of kanji for the decorative preview text
JAPANESE_CHARS = (
    "あいうえおかきくけこさしすせそたちつてとなにぬねの"
    "はひふへほまみむめもやゆよらりるれろわをん"
    "アイウエオカキクケコサシスセソタチツテトナニヌネノ"
    "ハヒフヘホマミムメモヤユヨラリルレロワヲン"
    "日月火水木金土山川田東京大阪愛楽速静安新古"
)


def generate_id() -> str:
    """Return a fresh random identifier (UUID4 string)."""
    return str(uuid.uuid4())


def generate_random_japanese(length: int) -> str:
    """Return ``length`` random characters from JAPANESE_CHARS."""
    return "".join(random.choice(JAPANESE_CHARS) for _ in range(length))


def get_id_generator() -> IdGenerator:
    """Provide the identifier generator for dependency injection."""
    return generate_id
