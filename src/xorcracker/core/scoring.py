from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from importlib import resources
from pathlib import Path


def _as_bytes(text: bytes | str) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8")
    return bytes(text)


@dataclass(frozen=True)
class FrequencyModel:
    """
    Byte-level frequency profile of a reference corpus.

    weights[b] is the relative frequency of byte b in the corpus (count / corpus
    length), so bytes the corpus never contains weigh 0.0. Scores are therefore
    comparable between models built from corpora of different sizes.
    """

    weights: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.weights) != 256:
            raise ValueError(f"Expected 256 weights, got {len(self.weights)}.")

    @classmethod
    def build(cls, corpus: bytes | str) -> "FrequencyModel":
        data = _as_bytes(corpus)
        if not data:
            return cls(weights=(0.0,) * 256)

        counts = Counter(data)
        total = len(data)
        return cls(weights=tuple(counts.get(b, 0) / total for b in range(256)))

    @classmethod
    def from_file(cls, path: str | Path) -> "FrequencyModel":
        return cls.build(Path(path).read_bytes())

    @classmethod
    def from_package_data(cls, filename: str = "english_corpus.txt") -> "FrequencyModel":
        """Build a model from a corpus shipped in xorcracker.data."""
        data = resources.files("xorcracker.data").joinpath(filename).read_bytes()
        return cls.build(data)

    def weight(self, symbol: int) -> float:
        return self.weights[symbol]

    def score(self, text: bytes | str) -> float:
        """Average corpus frequency per byte of text. Higher is more plausible; 0.0 for empty text."""
        data = _as_bytes(text)
        if not data:
            return 0.0
        return sum(map(self.weights.__getitem__, data)) / len(data)


def build_model(corpus: bytes | str) -> FrequencyModel:
    return FrequencyModel.build(corpus)


def score(text: bytes | str, model: FrequencyModel) -> float:
    return model.score(text)
