# Bind & workers
bind = "0.0.0.0:8000"
# The in-memory stores live per process: keep one worker unless the
# sqlalchemy user store and the Redis ledger are configured.
workers = 1  # override with env GUNICORN_WORKERS
threads = 8
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"  # override with env LOG_LEVEL

# Respect proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False

wsgi_app = "tokenauth.factory:create_app()"
