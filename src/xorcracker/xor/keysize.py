from __future__ import annotations

import logging
from itertools import combinations

from xorcracker.core.results import KeyLengthCandidate
from xorcracker.core.utils import hamming_distance

logger = logging.getLogger(__name__)

DEFAULT_MIN_KEYSIZE = 2
DEFAULT_MAX_KEYSIZE = 40
DEFAULT_BLOCKS = 4


def normalized_distance(ciphertext: bytes, keysize: int, blocks: int = DEFAULT_BLOCKS) -> float:
    """
    Average bit distance between the first few keysize-byte blocks, per byte.

    Blocks encrypted under the same key fragment XOR to plaintext XOR plaintext,
    which has fewer set bits than unrelated ciphertext, so the true key length
    (and its multiples) come out low.
    """
    if keysize < 1:
        raise ValueError(f"Key size must be positive, got {keysize}.")
    n_blocks = min(blocks, len(ciphertext) // keysize)
    if n_blocks < 2:
        raise ValueError(f"Need at least two {keysize}-byte blocks, ciphertext has {len(ciphertext)} bytes.")

    chunks = [ciphertext[i * keysize:(i + 1) * keysize] for i in range(n_blocks)]
    pairs = list(combinations(chunks, 2))
    total = sum(hamming_distance(a, b) for a, b in pairs)
    return total / len(pairs) / keysize


def rank_keysizes(
    ciphertext: bytes,
    min_len: int = DEFAULT_MIN_KEYSIZE,
    max_len: int = DEFAULT_MAX_KEYSIZE,
    *,
    blocks: int = DEFAULT_BLOCKS,
) -> list[KeyLengthCandidate]:
    """
    Score key lengths in [min_len, max_len), capped so all `blocks` blocks fit.
    Best (lowest distance) first; equal distances prefer the shorter length.

    Lengths with only two or three blocks average so few pairs that they
    rank on noise, so they are only considered when nothing longer-sampled
    fits. Ciphertext shorter than 2 * min_len gives an empty list.
    """
    if min_len < 1:
        raise ValueError(f"min_len must be positive, got {min_len}.")
    if blocks < 2:
        raise ValueError(f"Need at least two blocks to compare, got {blocks}.")

    upper = min(max_len, len(ciphertext) // blocks + 1)
    if upper <= min_len:
        # never prune to empty while two blocks still fit
        upper = min(max_len, len(ciphertext) // 2 + 1)
    ranked = sorted(
        KeyLengthCandidate(distance=normalized_distance(ciphertext, k, blocks), length=k)
        for k in range(min_len, upper)
    )

    if ranked:
        logger.debug(
            "Key length ranking: %s",
            ", ".join(f"{c.length}:{c.distance:.3f}" for c in ranked[:8]),
        )
    else:
        logger.debug("No key length fits in %d bytes of ciphertext", len(ciphertext))
    return ranked


def best_keysizes(
    ciphertext: bytes,
    min_len: int = DEFAULT_MIN_KEYSIZE,
    max_len: int = DEFAULT_MAX_KEYSIZE,
    *,
    blocks: int = DEFAULT_BLOCKS,
) -> list[int]:
    return [c.length for c in rank_keysizes(ciphertext, min_len, max_len, blocks=blocks)]
