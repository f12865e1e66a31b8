from __future__ import annotations

import logging
import math
from operator import attrgetter
from typing import Iterable, Optional

from xorcracker.core.errors import DegenerateInput, NoSolutionFound
from xorcracker.core.results import RepeatingKeyResult
from xorcracker.core.scoring import FrequencyModel
from xorcracker.core.utils import reduce_repeating_key, repeating_key_xor, transpose
from xorcracker.xor.keysize import DEFAULT_MAX_KEYSIZE, DEFAULT_MIN_KEYSIZE, best_keysizes
from xorcracker.xor.single_byte import decrypt_single_byte_xor

logger = logging.getLogger(__name__)

DEFAULT_TOP_KEYSIZES = 4

# Ciphertext bytes behind each recovered key byte needed for full confidence
CONFIDENT_COLUMN_BYTES = 20


def column_confidence(n_bytes: int, key_len: int) -> float:
    """
    Downscale confidence when each key byte was picked from a short column.

    Column-wise maximization always finds some key that scores well, so with
    few bytes per column an over-long key can outscore the real one.
    """
    if key_len <= 0 or n_bytes <= 0:
        return 0.25

    scale = (n_bytes / key_len) / CONFIDENT_COLUMN_BYTES
    if scale < 0.25:
        scale = 0.25
    if scale > 1.0:
        scale = 1.0
    return scale


def break_with_keysize(
    ciphertext: bytes,
    keysize: int,
    model: FrequencyModel,
    *,
    require_text: bool = False,
) -> Optional[RepeatingKeyResult]:
    """
    Recover a keysize-byte key column by column. Returns None if any column
    has no acceptable single-byte key (the length is disqualified).
    """
    key = bytearray()
    for idx, column in enumerate(transpose(ciphertext, keysize)):
        res = decrypt_single_byte_xor(column, model, require_text=require_text)
        if res is None:
            logger.debug("keysize=%d disqualified: column %d has no candidate", keysize, idx)
            return None
        key.append(res.key)

    # ICEICE and ICE decrypt identically; report the shortest form
    full_key = reduce_repeating_key(bytes(key))
    pt = repeating_key_xor(ciphertext, full_key)
    s = model.score(pt)
    logger.debug("keysize=%d key=%r score=%.5f", keysize, full_key, s)
    return RepeatingKeyResult(
        score=s,
        plaintext=pt,
        key=full_key,
        keysize=keysize,
        confidence=column_confidence(len(ciphertext), len(full_key)),
    )


def break_repeating_key_xor(
    ciphertext: bytes,
    model: FrequencyModel,
    *,
    key_lengths: Optional[Iterable[int]] = None,
    top_n: int = DEFAULT_TOP_KEYSIZES,
    max_len: int = DEFAULT_MAX_KEYSIZE,
    require_text: bool = False,
) -> RepeatingKeyResult:
    """
    Break repeating-key XOR.

    Candidate lengths are the top_n estimates from best_keysizes(), unless the
    caller already knows them (key_lengths). Each length is broken by
    transposition; the decryption with the highest overall score wins, the
    earlier candidate winning ties. Short ciphertexts, where each key byte
    rests on only a few bytes, come back with result.low_confidence set.

    Raises DegenerateInput when no length can be proposed and NoSolutionFound
    when every length was disqualified.
    """
    if top_n < 1:
        raise ValueError(f"top_n must be at least 1, got {top_n}.")

    if key_lengths is not None:
        lengths = list(key_lengths)
        bad = [k for k in lengths if k < 1]
        if bad:
            raise ValueError(f"Key lengths must be positive, got {bad}.")
    else:
        lengths = best_keysizes(ciphertext, DEFAULT_MIN_KEYSIZE, max_len)[:top_n]

    if not lengths:
        raise DegenerateInput(
            f"Ciphertext of {len(ciphertext)} byte(s) is too short to estimate a key length."
        )

    results = [
        r
        for r in (break_with_keysize(ciphertext, k, model, require_text=require_text) for k in lengths)
        if r is not None and math.isfinite(r.score)
    ]
    if not results:
        raise NoSolutionFound(f"No candidate key length qualified (tried {lengths}).")

    best = max(results, key=attrgetter("score"))
    logger.info("Recovered %d-byte key %r (score %.5f)", len(best.key), best.key, best.score)
    if best.low_confidence:
        logger.warning(
            "Low confidence (%.2f): %d ciphertext bytes per key byte is too few to trust this key",
            best.confidence,
            len(ciphertext) // len(best.key),
        )
    return best
