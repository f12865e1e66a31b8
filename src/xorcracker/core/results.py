from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


@dataclass(frozen=True, order=True)
class SingleByteResult:
    # sort_index comes first so dataclass ordering uses it automatically
    sort_index: tuple[float, int] = field(init=False, repr=False)

    # Higher is better
    score: float
    plaintext: bytes
    key: int

    # The ciphertext this was recovered from (lets find_best report which line won)
    ciphertext: bytes = field(default=b"", repr=False, compare=False)

    def __post_init__(self) -> None:
        # Ascending sort should yield best-first; smaller key wins ties.
        object.__setattr__(self, "sort_index", (-self.score, self.key))

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "key_hex": f"{self.key:02x}",
            "score": self.score,
            "plaintext": _text(self.plaintext),
        }


@dataclass(frozen=True, order=True)
class RepeatingKeyResult:
    sort_index: tuple[float, int] = field(init=False, repr=False)

    score: float
    plaintext: bytes
    key: bytes

    # Key length that was examined; len(key) may be a divisor of it.
    keysize: int = 0

    # 0.25 to 1.0; below 1.0 each key byte was recovered from too few bytes
    confidence: float = field(default=1.0, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sort_index", (-self.score, len(self.key)))

    @property
    def low_confidence(self) -> bool:
        return self.confidence < 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": _text(self.key),
            "key_hex": self.key.hex(),
            "keysize": self.keysize,
            "score": self.score,
            "confidence": self.confidence,
            "low_confidence": self.low_confidence,
            "plaintext": _text(self.plaintext),
        }


@dataclass(frozen=True, order=True)
class KeyLengthCandidate:
    # Normalized bit distance; lower is better
    distance: float
    length: int

    def to_dict(self) -> dict[str, Any]:
        return {"length": self.length, "distance": self.distance}
