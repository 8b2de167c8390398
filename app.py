import logging, time
from flask import Flask, request, jsonify
from shor_api import shor_bp
from shorsim import shors_algorithm, random_base_supplier, is_probable_prime, RetryBudgetExhausted
from shorsim import config

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
log = logging.getLogger(__name__)

app = Flask(__name__)
app.register_blueprint(shor_bp)

def _error(msg: str, code: int = 400):
    d = jsonify({"status": "error", "error": msg}); d.status_code = code; return d

@app.post("/api/shor_factor")
def shor_factor_endpoint():
    t0 = time.time()
    data = request.get_json(force=True, silent=True) if request.is_json else request.form
    data = data or {}
    if not isinstance(data, dict):
        return _error("invalid body")
    try:
        n = int(str(data.get("n") or "").strip())
        max_attempts = int(data.get("max_attempts", config.MAX_ATTEMPTS))
    except (TypeError, ValueError):
        return _error("invalid n or max_attempts")
    seed = data.get("seed", config.SEED)
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, (int, str))):
        return _error("seed must be an integer or string")

    if n < 4:
        return _error("n must be a composite integer greater than 3")
    if not 1 <= max_attempts <= config.MAX_ATTEMPTS_CAP:
        return _error(f"max_attempts must be between 1 and {config.MAX_ATTEMPTS_CAP}")
    if is_probable_prime(n):
        return _error("n is prime")
    if n.bit_length() > config.SYNC_MAX_BITS:
        return _error(f"n exceeds {config.SYNC_MAX_BITS} bits; submit it to /api/shor/submit instead")

    try:
        res = shors_algorithm(n, max_attempts=max_attempts, base_supplier=random_base_supplier(seed))
    except RetryBudgetExhausted as e:
        log.info("shor_factor n=%d exhausted", n)
        d = jsonify({"status": "exhausted", "n": str(n), "attempts": e.attempts,
                     "discards": [t.discard.value if t.discard else None for t in e.trials]})
        d.headers["X-Compute-ms"] = str(int((time.time()-t0)*1000))
        return d

    d = jsonify({
        "status": "ok",
        "n": str(n),
        "p": str(res.p),
        "q": str(res.q),
        "method": res.method,
        "steps": res.steps,
        "attempts": res.attempts,
    })
    d.headers["X-Compute-ms"] = str(int((time.time()-t0)*1000))
    return d

@app.get("/api/health")
def api_health():
    return jsonify(ok=True)

if __name__ == "__main__":
    app.run("127.0.0.1", 8082, debug=True)
