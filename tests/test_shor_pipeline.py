import pytest
from shorsim import (
    Discard, FactoringFailure, RetryBudgetExhausted,
    factor, find_period_classical, random_base_supplier, sequence_supplier, shors_algorithm,
)

class CountingFinder:
    def __init__(self, inner=find_period_classical):
        self.inner = inner
        self.calls = []
    def __call__(self, a, n, limit=None):
        self.calls.append((a, n))
        return self.inner(a, n, limit)

# ---------- end to end ----------

def test_factor_15():
    assert set(factor(15)) == {3, 5}

def test_factor_21():
    assert set(factor(21)) == {3, 7}

def test_factor_4819():
    p, q = factor(4819, base_supplier=random_base_supplier(1234))
    assert {p, q} == {61, 79}

@pytest.mark.parametrize("n", [15, 21, 35, 91, 221, 4819])
def test_repeated_calls_always_multiply_back(n):
    for seed in range(10):
        p, q = factor(n, base_supplier=random_base_supplier(seed))
        assert p * q == n
        assert 1 < p <= q < n

# ---------- even short-circuit ----------

def test_even_skips_period_finding():
    finder = CountingFinder()
    supplier_calls = []
    res = shors_algorithm(4819 * 2, period_finder=finder,
                          base_supplier=lambda n: supplier_calls.append(n) or 3)
    assert (res.p, res.q) == (2, 4819)
    assert res.method == "even"
    assert finder.calls == [] and supplier_calls == []

def test_four_is_two_by_two():
    assert factor(4) == (2, 2)

@pytest.mark.parametrize("n", [-5, 0, 1, 2])
def test_rejects_n_below_three(n):
    with pytest.raises(ValueError):
        shors_algorithm(n)

# ---------- deterministic branches ----------

def test_lucky_gcd_skips_period_finding():
    finder = CountingFinder()
    res = shors_algorithm(21, base_supplier=sequence_supplier([7]), period_finder=finder)
    assert (res.p, res.q, res.method) == (3, 7, "gcd")
    assert finder.calls == []
    assert res.trials[0].gcd == 7

def test_odd_period_is_discarded():
    res = shors_algorithm(21, base_supplier=sequence_supplier([4, 2]))
    assert [t.discard for t in res.trials] == [Discard.ODD_PERIOD, None]
    assert res.trials[0].period == 3
    assert (res.p, res.q, res.method) == (3, 7, "period")
    assert res.attempts == 2

def test_minus_one_is_discarded():
    res = shors_algorithm(21, base_supplier=sequence_supplier([20, 2]))
    assert res.trials[0].period == 2
    assert res.trials[0].discard is Discard.MINUS_ONE
    assert {res.p, res.q} == {3, 7}

def test_no_period_is_discarded():
    res = shors_algorithm(21, base_supplier=sequence_supplier([2, 8]), period_limit=4, max_attempts=2)
    # order of 2 mod 21 is 6 (over the limit); order of 8 is 2
    assert res.trials[0].discard is Discard.NO_PERIOD
    assert res.trials[0].period is None
    assert res.trials[1].period == 2
    assert {res.p, res.q} == {3, 7}

def test_trivial_factors_are_discarded():
    # 4^3 ≡ 1 (mod 21): a bogus period of 6 yields gcd(0, 21) and gcd(2, 21)
    finder = lambda a, n, limit=None: 6 if a == 4 else find_period_classical(a, n, limit)
    res = shors_algorithm(21, base_supplier=sequence_supplier([4, 2]), period_finder=finder)
    assert res.trials[0].discard is Discard.TRIVIAL
    assert {res.p, res.q} == {3, 7}

def test_success_path_records_steps():
    res = shors_algorithm(15, base_supplier=sequence_supplier([7]))
    assert (res.p, res.q) == (3, 5)
    assert res.steps[0] == "Trying a = 7"
    assert "Found period r = 4" in res.steps
    assert res.steps[-1].startswith("FOUND period")

# ---------- failure ----------

def test_retry_budget_exhausted_carries_trials():
    with pytest.raises(RetryBudgetExhausted) as exc:
        shors_algorithm(21, base_supplier=sequence_supplier([4, 16, 20]), max_attempts=3)
    e = exc.value
    assert isinstance(e, FactoringFailure)
    assert e.n == 21 and e.attempts == 3
    assert [t.discard for t in e.trials] == [Discard.ODD_PERIOD, Discard.ODD_PERIOD, Discard.MINUS_ONE]

def test_prime_exhausts_budget():
    with pytest.raises(RetryBudgetExhausted):
        factor(7, max_attempts=5, base_supplier=random_base_supplier(0))

def test_zero_attempts_fails_immediately():
    with pytest.raises(RetryBudgetExhausted):
        factor(15, max_attempts=0)

def test_out_of_range_base_rejected():
    with pytest.raises(ValueError):
        shors_algorithm(15, base_supplier=sequence_supplier([15]))
    with pytest.raises(ValueError):
        shors_algorithm(15, base_supplier=sequence_supplier([1]))

def test_drained_sequence_is_a_factoring_failure():
    with pytest.raises(FactoringFailure):
        shors_algorithm(21, base_supplier=sequence_supplier([4]), max_attempts=5)
