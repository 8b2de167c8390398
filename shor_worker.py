import logging
from shorsim import shors_algorithm, random_base_supplier, RetryBudgetExhausted

log = logging.getLogger(__name__)

# ---- Public RQ job -----------------------------------------------------------

def shor_job(N, max_attempts=None, seed=None):
    """
    Run the full Shor pipeline for N inside an RQ worker.
    Returns: dict with factor, cofactor, attempts, algo, note
    """
    n = int(str(N).strip())
    if n < 3:
        return {"algo": "noop", "attempts": 0, "note": "N<3", "factor": None, "cofactor": None}
    try:
        res = shors_algorithm(n, max_attempts=max_attempts, base_supplier=random_base_supplier(seed))
    except RetryBudgetExhausted as e:
        log.info("shor_job N=%d exhausted after %d attempts", n, e.attempts)
        return {"algo": "shor", "attempts": e.attempts, "note": "retry budget exhausted",
                "factor": None, "cofactor": None}
    return {"algo": f"shor/{res.method}", "attempts": res.attempts, "note": res.steps[-1],
            "factor": int(res.p), "cofactor": int(res.q)}
