# gunicorn_config.py
import os

# Bind to 0.0.0.0 to accept connections from the platform's proxy
port = os.environ.get("PORT", "10000")
bind = f"0.0.0.0:{port}"

# Number of worker processes
workers = int(os.environ.get("WEB_CONCURRENCY", 3))

# Presentation responses are streamed for the whole model completion, which
# pins a worker thread; gthread keeps other requests moving meanwhile.
worker_class = 'gthread'
threads = int(os.environ.get("GUNICORN_THREADS", 4))

# Logging to stdout/stderr so the platform can capture logs
accesslog = '-'
errorlog = '-'
loglevel = 'info'

# Image generation plus download/upload and long completions both need headroom
timeout = 120
keepalive = 5

print(f"Gunicorn config: Binding to {bind}, Workers: {workers}, Threads: {threads}")
