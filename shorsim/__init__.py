from .modarith import gcd, modpow, is_probable_prime
from .period import find_period_classical
from .shor_pipeline import (
    Discard,
    FactoringFailure,
    FactorResult,
    RetryBudgetExhausted,
    Trial,
    factor,
    random_base_supplier,
    sequence_supplier,
    shors_algorithm,
)
__all__ = [
    "gcd", "modpow", "is_probable_prime", "find_period_classical",
    "Discard", "FactoringFailure", "FactorResult", "RetryBudgetExhausted", "Trial",
    "factor", "random_base_supplier", "sequence_supplier", "shors_algorithm",
]
