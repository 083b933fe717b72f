import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Application entry point: ``gunicorn -c gunicorn.conf.py``
wsgi_app = "app:create_app()"

# Logs to stdout/stderr; the app itself emits JSON lines
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Proxy headers are trusted by the app only when USE_PROXYFIX is set
forwarded_allow_ips = "*"
proxy_protocol = False
