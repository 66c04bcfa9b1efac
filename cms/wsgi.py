"""WSGI entrypoint for production servers (gunicorn/uwsgi).

Usage (from the cms/ directory):
  gunicorn -c ../ops/gunicorn/gunicorn.conf.py wsgi:app
"""

from app import create_app

app = create_app()
