# shorsim/config.py
# Environment-driven defaults; explicit function arguments always win.
import os

MAX_ATTEMPTS    = int(os.getenv("SHOR_MAX_ATTEMPTS", "32"))
MAX_ATTEMPTS_CAP = int(os.getenv("SHOR_MAX_ATTEMPTS_CAP", "64"))  # ceiling for client-supplied max_attempts
PERIOD_LIMIT    = int(os.getenv("SHOR_PERIOD_LIMIT", "0"))     # 0 -> scan up to N
SEED            = os.getenv("SHOR_SEED") or None

SYNC_MAX_BITS   = int(os.getenv("SHOR_SYNC_MAX_BITS", "16"))   # /api/shor_factor answers inline; period scan <= 2**16
QUEUE_MAX_BITS  = int(os.getenv("SHOR_QUEUE_MAX_BITS", "40"))  # larger N are refused outright

REDIS_URL       = os.getenv("REDIS_URL", "redis://localhost:6379/0")
QUEUE_NAME      = os.getenv("SHOR_QUEUE", "shor")
JOB_TIMEOUT     = int(os.getenv("SHOR_JOB_TIMEOUT", str(60*60*12)))  # 12h
