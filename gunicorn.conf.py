import os

# gunicorn -c gunicorn.conf.py keyword_finder.app:app

bind = f"0.0.0.0:{os.getenv('PORT', 9999)}"
workers = int(os.getenv("NUM_WORKERS", 4))
worker_class = "uvicorn.workers.UvicornWorker"

# Recycle workers so a pathological request can't pin one forever
max_requests = 1000
max_requests_jitter = 100
timeout = 30
graceful_timeout = 30

# The app writes its own audit log
loglevel = os.getenv("LOG_LEVEL", "info").lower()
errorlog = "-"

proc_name = "find-keywords-in-text"
