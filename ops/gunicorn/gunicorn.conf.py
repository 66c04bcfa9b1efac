# Gunicorn config for the CMS

# Bind to localhost; Nginx proxies to this
bind = "127.0.0.1:5000"

# Documents are written without locking, so serve one request at a time.
# FLASK_SECRET_KEY must still be set for sessions to survive restarts.
workers = 1
threads = 1
worker_class = "sync"

timeout = 30
graceful_timeout = 30
keepalive = 15

# Logging
accesslog = "-"  # stdout
errorlog = "-"    # stderr
loglevel = "info"

# App entrypoint
wsgi_app = "wsgi:app"
