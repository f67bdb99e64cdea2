import time
import uuid

import structlog

logger = structlog.get_logger('core.requests')


class RequestLogMiddleware:
    """Bind a request id into the log context and log every response."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.headers.get('X-Request-ID') or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, path=request.path)
        start = time.monotonic()
        response = self.get_response(request)
        logger.info(
            'http_request',
            method=request.method,
            status=response.status_code,
            duration_ms=round((time.monotonic() - start) * 1000, 1),
        )
        response['X-Request-ID'] = request_id
        return response
