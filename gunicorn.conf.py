"""
LedgerDash - Gunicorn WSGI Server Configuration
===============================================

Features:
- Worker count scaled from CPU cores (override with WEB_CONCURRENCY)
- Worker restart cycles to bound memory growth
- Request timeout and graceful shutdown window
- Request size limits
- Access and error logs on stdout/stderr
"""

import multiprocessing
import os
import logging

IS_PRODUCTION = os.getenv("PRODUCTION") == "true"

logging.basicConfig(
    level=logging.INFO if IS_PRODUCTION else logging.DEBUG,
    format='[%(asctime)s] %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# =============================================================================
# SERVER BINDING
# =============================================================================

PORT = int(os.getenv("PORT", 8000))
bind = [f"0.0.0.0:{PORT}"]
wsgi_app = "ledgerdash.wsgi:application"


# =============================================================================
# WORKER CONFIGURATION
# =============================================================================

def calculate_workers():
    cpu_count = multiprocessing.cpu_count()
    return min((cpu_count * 2) + 1, 9)


workers = int(os.getenv("WEB_CONCURRENCY", calculate_workers()))
worker_class = "gthread"
threads = int(os.getenv("GUNICORN_THREADS", 4))

max_requests = int(os.getenv("GUNICORN_MAX_REQUESTS", 1000))
max_requests_jitter = int(os.getenv("GUNICORN_MAX_REQUESTS_JITTER", 100))


# =============================================================================
# TIMEOUT & RESOURCE LIMITS
# =============================================================================

timeout = 60
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", 10))
keepalive = 5

limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190


# =============================================================================
# PROXY & LOGGING
# =============================================================================

forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "*")
if IS_PRODUCTION:
    secure_scheme_headers = {
        "X-FORWARDED-PROTO": "https",
    }

accesslog = "-"
errorlog = "-"
loglevel = "info" if IS_PRODUCTION else "debug"
capture_output = True

access_log_format = (
    '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s '
    '"%(f)s" "%(a)s" response_time=%(D)s_us request_id=%({x-request-id}o)s'
)

proc_name = "ledgerdash"
preload_app = True


# =============================================================================
# HOOKS
# =============================================================================

def when_ready(server):
    logger.info(f"Gunicorn ready at {server.address} with {workers} workers")


def post_fork(server, worker):
    """Pre-warm the database connection so the first request is not slow."""
    try:
        from django.db import connection
        connection.ensure_connection()
        logger.info(f"Worker {worker.pid}: database connection pre-warmed")
    except Exception as e:
        logger.warning(f"Worker {worker.pid}: failed to pre-warm database connection: {e}")


def on_exit(server):
    logger.info("Gunicorn shutting down gracefully...")
