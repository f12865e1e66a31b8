from __future__ import annotations

import logging
import math
from operator import attrgetter
from typing import Iterable, Iterator, Optional

from xorcracker.core.results import SingleByteResult
from xorcracker.core.scoring import FrequencyModel
from xorcracker.core.utils import is_valid_text, single_byte_xor

logger = logging.getLogger(__name__)


def _candidates(ciphertext: bytes, model: FrequencyModel, require_text: bool) -> Iterator[SingleByteResult]:
    """Yield one scored candidate per key byte, ascending; rejected keys are skipped."""
    for key in range(256):
        pt = single_byte_xor(ciphertext, key)
        if require_text and not is_valid_text(pt):
            continue
        s = model.score(pt)
        if not math.isfinite(s):
            continue
        yield SingleByteResult(score=s, plaintext=pt, key=key, ciphertext=ciphertext)


def decrypt_single_byte_xor(
    ciphertext: bytes,
    model: FrequencyModel,
    *,
    require_text: bool = False,
) -> Optional[SingleByteResult]:
    """
    Try all 256 single-byte keys and keep the best-scoring plaintext.

    Ties go to the smallest key (max() keeps the first maximal item and keys are
    tried in ascending order). With require_text=True, candidates that are not
    valid UTF-8 are dropped. Returns None for empty ciphertext or when every
    candidate was dropped.
    """
    if not ciphertext:
        return None
    return max(_candidates(ciphertext, model, require_text), key=attrgetter("score"), default=None)


def rank_single_byte_keys(
    ciphertext: bytes,
    model: FrequencyModel,
    *,
    top_n: int = 5,
    require_text: bool = False,
) -> list[SingleByteResult]:
    if not ciphertext:
        return []
    return sorted(_candidates(ciphertext, model, require_text))[:top_n]


def find_best(
    ciphertexts: Iterable[bytes],
    model: FrequencyModel,
    *,
    require_text: bool = False,
) -> Optional[SingleByteResult]:
    """
    Break every ciphertext independently and return the single best result.
    The winning ciphertext is available as result.ciphertext.
    """
    broken = (decrypt_single_byte_xor(ct, model, require_text=require_text) for ct in ciphertexts)
    best = max((r for r in broken if r is not None), key=attrgetter("score"), default=None)
    if best is not None:
        logger.debug("Best single-byte candidate: key=0x%02x score=%.5f", best.key, best.score)
    return best
