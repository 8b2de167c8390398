# shorsim/period.py
# Classical order finding: smallest r > 0 with a^r ≡ 1 (mod n).
# This exhaustive scan is the step a quantum computer replaces with QFT-based
# period finding; it stays O(n) on purpose.

from __future__ import annotations
import logging
from typing import Optional

from .modarith import gcd, modpow

log = logging.getLogger(__name__)

def find_period_classical(a: int, n: int, limit: Optional[int] = None) -> Optional[int]:
    """
    Return the multiplicative order of `a` modulo `n`, or None.

    None means either gcd(a, n) != 1 (no order exists) or no k <= limit
    satisfied a^k ≡ 1. `limit` defaults to n; no order can exceed it.
    """
    if gcd(a, n) != 1:
        return None
    bound = n if not limit else limit
    for k in range(1, bound + 1):
        if modpow(a, k, n) == 1:
            return k
    log.debug("period search for a=%d mod %d exceeded limit %d", a, n, bound)
    return None
