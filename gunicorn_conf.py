"""Gunicorn settings for the Hearty API: `gunicorn -c gunicorn_conf.py`."""

import os

wsgi_app = "app.main:app"
proc_name = "hearty-api"
worker_class = "uvicorn.workers.UvicornWorker"

bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("WEB_CONCURRENCY", 2))
timeout = int(os.getenv("GUNICORN_TIMEOUT", 30))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", 30))
keepalive = int(os.getenv("GUNICORN_KEEPALIVE", 5))

# Behind the platform's reverse proxy
forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "127.0.0.1")

# Same variable as the loguru setup in app.utils.logger
loglevel = os.getenv("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
