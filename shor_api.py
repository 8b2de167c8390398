import time
from datetime import datetime
from flask import Blueprint, request, jsonify
from redis import Redis
from redis.exceptions import RedisError
from rq import Queue
from rq.job import Job
from rq.exceptions import InvalidJobOperation, NoSuchJobError
from shorsim import config

shor_bp = Blueprint("shor_bp", __name__)

# Redis / RQ
redis_conn = Redis.from_url(config.REDIS_URL)
shor_q = Queue(config.QUEUE_NAME, connection=redis_conn, default_timeout=config.JOB_TIMEOUT)

# ------------------ helpers ------------------
def _age_secs(dt: datetime | None) -> float | None:
    if not dt:
        return None
    return max(0.0, time.time() - dt.timestamp())

def _job_dict(job: Job) -> dict:
    d = {
        "job_id": job.id,
        "status": job.get_status(),
        "meta": job.meta or {},
        "enqueued_at": job.enqueued_at.isoformat() if job.enqueued_at else None,
        "started_at": job.started_at.isoformat() if job.started_at else None,
        "ended_at": job.ended_at.isoformat() if job.ended_at else None,
        "age_sec": _age_secs(job.enqueued_at),
    }
    if job.is_finished:
        d["result"] = job.return_value()
    if job.is_failed:
        d["exc_info"] = (job.exc_info or "")[-1024:]
    return d

def _job_ips(job_ids) -> set:
    ips = set()
    for job in Job.fetch_many(list(job_ids), connection=redis_conn):
        if job is not None:
            ips.add((job.meta or {}).get("ip"))
    return ips

def ip_can_start(ip: str) -> bool:
    """Allow only one active (queued or started) job per IP."""
    active = list(shor_q.started_job_registry.get_job_ids()) + list(shor_q.get_job_ids())
    return ip not in _job_ips(active)

def _client_ip() -> str:
    xff = request.headers.get("X-Forwarded-For", "")
    return xff.split(",")[0].strip() if xff else (request.remote_addr or "")

# ------------------ API ------------------
@shor_bp.get("/api/queue/health")
def health():
    ok, msg = True, "ok"
    try:
        redis_conn.ping()
    except RedisError as e:
        ok, msg = False, f"redis error: {e.__class__.__name__}"
    return jsonify({"ok": ok, "msg": msg, "queue": shor_q.name, "time": int(time.time())})

@shor_bp.get("/api/queue")
def queue_info():
    ids = shor_q.get_job_ids()
    head = []
    for jid in ids[:10]:
        try:
            job = Job.fetch(jid, connection=redis_conn)
        except NoSuchJobError:
            continue
        head.append({"job_id": jid, "age_sec": _age_secs(job.enqueued_at), "bits": (job.meta or {}).get("bits")})
    return jsonify({"queue": shor_q.name, "size": len(ids), "head": head})

@shor_bp.post("/api/shor/submit")
def shor_submit():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "JSON body must be an object."}), 400
    nstr = str(data.get("N", "")).strip()
    if not nstr.isdigit():
        return jsonify({"error": "Provide N as a positive integer string."}), 400
    N = int(nstr)
    if N < 3:
        return jsonify({"error": "N must be >= 3."}), 400
    bits = N.bit_length()
    if bits > config.QUEUE_MAX_BITS:
        return jsonify({"error": f"Max {config.QUEUE_MAX_BITS} bits; the classical period scan is O(N)."}), 400
    try:
        max_attempts = int(data.get("max_attempts", config.MAX_ATTEMPTS))
    except (TypeError, ValueError):
        return jsonify({"error": "max_attempts must be an integer."}), 400
    if not 1 <= max_attempts <= config.MAX_ATTEMPTS_CAP:
        return jsonify({"error": f"max_attempts must be between 1 and {config.MAX_ATTEMPTS_CAP}."}), 400

    ip = _client_ip()
    if not ip_can_start(ip):
        return jsonify({"error": "One active job per IP. Wait or cancel the running job."}), 429

    job = shor_q.enqueue("shor_worker.shor_job", N, max_attempts,
                         meta={"bits": bits, "max_attempts": max_attempts, "ip": ip, "submitted": time.time()})
    ids = shor_q.get_job_ids()
    pos = ids.index(job.id) + 1 if job.id in ids else 1
    note = "Warning: inputs above 32 bits scan billions of exponents and may not finish." if bits > 32 else ""
    return jsonify({"job_id": job.id, "status": job.get_status(), "bits": bits, "queue_position": pos, "note": note})

@shor_bp.get("/api/job/<job_id>")
def job_status(job_id):
    try:
        job = Job.fetch(job_id, connection=redis_conn)
    except NoSuchJobError:
        return jsonify({"error": "unknown job"}), 404
    return jsonify(_job_dict(job))

@shor_bp.post("/api/job/<job_id>/abort")
def job_abort(job_id):
    try:
        job = Job.fetch(job_id, connection=redis_conn)
    except NoSuchJobError:
        return jsonify({"error": "unknown job"}), 404
    try:
        if job.get_status() == "started":
            from rq.command import send_stop_job_command
            send_stop_job_command(redis_conn, job_id)
        else:
            job.cancel()
    except InvalidJobOperation as e:
        return jsonify({"error": f"cancel failed: {e}", "status": job.get_status()}), 400
    return jsonify({"ok": True, "job_id": job_id, "status": job.get_status()})
