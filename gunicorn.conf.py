"""
Gunicorn configuration for the LTOS API.

Run with:  gunicorn -c gunicorn.conf.py
Env vars that override defaults:
  PORT       — TCP port to bind
  LOG_LEVEL  — gunicorn log level (default: info)

The snapshot lives in a single process-wide container, so this runs one
worker: several workers would each hold their own copy and overwrite
each other's saves.
"""
import os

wsgi_app = "ltos.main:app"

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

workers = 1

# Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5
timeout = 60

# stdout only; application logs share the stream (see ltos/core/logging_config.py).
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
