import re
from typing import Sequence, Tuple

from bridge_engine.core.errors import InvalidKeyFormat

# Never part of a decimal integer, including negative ones.
SEPARATOR = ","

_INT_RE = re.compile(r"-?(0|[1-9][0-9]*)")


def encode(coords: Sequence[int]) -> str:
    """
    Canonical key for a coordinate vector.
    (1, 2, 5) -> "1,2,5"   (12,) -> "12"   () -> ""
    """
    return SEPARATOR.join(str(int(c)) for c in coords)


def decode(key: str) -> Tuple[int, ...]:
    """Inverse of encode. "1,2,5" -> (1, 2, 5), "" -> ()."""
    if key == "":
        return ()

    coords = []
    for part in key.split(SEPARATOR):
        if not _INT_RE.fullmatch(part):
            raise InvalidKeyFormat(f"invalid key format {key!r}: component {part!r} must be an int")
        coords.append(int(part))
    return tuple(coords)
