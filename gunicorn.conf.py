"""
Gunicorn configuration for StudentStay production deployment.

Usage:
    gunicorn studentstay.main:app -c gunicorn.conf.py
"""

import multiprocessing
import os

bind = os.getenv("BIND", "0.0.0.0:8000")

# CPU cores * 2 + 1
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))

# Uvicorn's ASGI worker for FastAPI
worker_class = "uvicorn.workers.UvicornWorker"

# Request timeout (seconds); all requests are short database round trips
timeout = 30
keepalive = 5

accesslog = "-"  # stdout
errorlog = "-"   # stderr
loglevel = "info"
