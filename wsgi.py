# wsgi.py
# Entry point for the Gunicorn server (see gunicorn_config.py).

from presentai import create_app

app = create_app()
