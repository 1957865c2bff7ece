# gunicorn.conf.py
import os
import logging
import sys
import multiprocessing

# Run with: gunicorn app:app

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = os.getenv('LOG_LEVEL', 'info').lower()

# Get PORT from environment or use default
port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# Each worker keeps its own chapter cache, so fewer workers share more hits
cores = multiprocessing.cpu_count()
workers = min(cores + 1, 4)
threads = 4  # Chapter and suggestion fetches are I/O bound


def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} workers x {threads} threads on port {port}")


timeout = 60
keepalive = 30
worker_class = "gthread"

# Process naming
proc_name = "bible_search"
default_proc_name = "bible_search"

# Graceful server restart
graceful_timeout = 30
