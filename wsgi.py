"""
WSGI entry point for production deployment
Used by Gunicorn, uWSGI, and other WSGI servers
"""
from portal import create_app

application = app = create_app()
