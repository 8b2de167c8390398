# shorsim/shor_pipeline.py
# Shor's factoring algorithm with the quantum step replaced by classical order finding
# - even N short-circuit
# - lucky gcd(a, N) short-circuit
# - period r of a mod N (exhaustive scan)
# - post-processing: r even, a^(r/2) != -1, gcd(a^(r/2) ± 1, N)

from __future__ import annotations
import logging, random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from . import config
from .modarith import gcd, modpow
from .period import find_period_classical

log = logging.getLogger(__name__)

BaseSupplier = Callable[[int], int]
PeriodFinder = Callable[[int, int, Optional[int]], Optional[int]]

# ---------- Outcomes ----------

class Discard(str, Enum):
    NO_PERIOD = "no-period"
    ODD_PERIOD = "odd-period"
    MINUS_ONE = "minus-one"
    TRIVIAL = "trivial-factors"

@dataclass
class Trial:
    a: int
    gcd: int
    period: Optional[int] = None
    discard: Optional[Discard] = None

@dataclass
class FactorResult:
    method: str
    p: int
    q: int
    steps: List[str]
    trials: List[Trial] = field(default_factory=list)

    @property
    def attempts(self) -> int:
        return len(self.trials)

class FactoringFailure(Exception):
    """No factor pair was produced for n."""

class RetryBudgetExhausted(FactoringFailure):
    def __init__(self, n: int, attempts: int, trials: List[Trial]):
        super().__init__(f"no usable base for {n} in {attempts} attempts")
        self.n = n
        self.attempts = attempts
        self.trials = trials

# ---------- Base suppliers ----------

def random_base_supplier(seed=None) -> BaseSupplier:
    """Uniform bases in [2, n-1] from a private RNG."""
    rand = random.Random(seed)
    return lambda n: rand.randrange(2, n)

def sequence_supplier(bases: Iterable[int]) -> BaseSupplier:
    """Hand out `bases` in order, ignoring n. Raises FactoringFailure once drained."""
    it = iter(bases)
    def supply(n: int) -> int:
        try:
            return next(it)
        except StopIteration:
            raise FactoringFailure(f"base sequence drained while factoring {n}") from None
    return supply

# ---------- Orchestration ----------

def _finish(n: int, f: int, method: str, steps: List[str], trials: List[Trial]) -> FactorResult:
    p, q = f, n // f
    if p > q: p, q = q, p
    steps.append(f"FOUND {method}: {p} × {q}")
    return FactorResult(method=method, p=p, q=q, steps=steps, trials=trials)

def _discard(trial: Trial, reason: Discard, msg: str, steps: List[str]) -> None:
    trial.discard = reason
    steps.append(msg)
    log.debug("a=%d discarded (%s)", trial.a, reason.value)

def shors_algorithm(
    n: int,
    max_attempts: Optional[int] = None,
    base_supplier: Optional[BaseSupplier] = None,
    period_finder: PeriodFinder = find_period_classical,
    period_limit: Optional[int] = None,
) -> FactorResult:
    """
    Factor composite n (> 2) with Shor's classical post-processing.

    Raises ValueError for n < 3 or a base outside [2, n-1], and
    RetryBudgetExhausted when `max_attempts` bases yield nothing.
    """
    if n < 3:
        raise ValueError("n must be >= 3")
    steps: List[str] = []
    trials: List[Trial] = []

    if n % 2 == 0:
        steps.append("n is even")
        return _finish(n, 2, "even", steps, trials)

    if max_attempts is None: max_attempts = config.MAX_ATTEMPTS
    if period_limit is None: period_limit = config.PERIOD_LIMIT or None
    if base_supplier is None: base_supplier = random_base_supplier(config.SEED)

    for _ in range(max_attempts):
        a = base_supplier(n)
        if not 2 <= a < n:
            raise ValueError(f"base {a} outside [2, {n - 1}]")
        steps.append(f"Trying a = {a}")
        log.debug("n=%d trying a=%d", n, a)

        d = gcd(a, n)
        trial = Trial(a=a, gcd=d)
        trials.append(trial)
        if 1 < d < n:
            steps.append(f"Found factor (GCD): {d}")
            return _finish(n, d, "gcd", steps, trials)

        r = period_finder(a, n, period_limit)
        trial.period = r
        if r is None:
            _discard(trial, Discard.NO_PERIOD, f"No period found for a = {a}", steps)
            continue
        steps.append(f"Found period r = {r}")

        if r % 2 == 1:
            _discard(trial, Discard.ODD_PERIOD, f"Period r = {r} is odd", steps)
            continue

        x = modpow(a, r // 2, n)
        if x == n - 1:
            _discard(trial, Discard.MINUS_ONE, f"a^(r/2) ≡ -1 (mod {n})", steps)
            continue

        found = [f for f in (gcd((x - 1) % n, n), gcd(x + 1, n)) if 1 < f < n]
        if not found:
            _discard(trial, Discard.TRIVIAL, "Found trivial factors", steps)
            continue
        for f in found:
            steps.append(f"Found factor (Shor's): {f}")
        return _finish(n, found[0], "period", steps, trials)

    log.info("n=%d: retry budget of %d exhausted", n, max_attempts)
    raise RetryBudgetExhausted(n, max_attempts, trials)

def factor(n: int, **options) -> Tuple[int, int]:
    """Return (p, q) with p * q == n and 1 < p <= q < n; see shors_algorithm."""
    res = shors_algorithm(n, **options)
    return res.p, res.q
