"""
WSGI config for the smart inbox project.

It exposes the WSGI callable as a module-level variable named ``application``.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

from smartinbox.structlog_config import configure_logging

configure_logging(level=os.getenv("LOG_LEVEL", "INFO"))

# Set the default settings module for the 'django' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'smartinbox.settings')

application = get_wsgi_application()
