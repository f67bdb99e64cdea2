"""
ASGI config for the smart inbox project.

The API is plain request/response, so the ASGI entrypoint is Django's own
HTTP application without any WebSocket routing.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

from smartinbox.structlog_config import configure_logging

configure_logging(level=os.getenv("LOG_LEVEL", "INFO"))

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "smartinbox.settings")

application = get_asgi_application()
