import uuid
from threading import local

_thread_locals = local()

REQUEST_ID_HEADER = "HTTP_X_REQUEST_ID"


def get_current_request_id():
    """Returns the request_id for the current request."""
    return getattr(_thread_locals, 'request_id', None)


class RequestIDMiddleware:
    """
    Tags each request with an id, reusing the caller's X-Request-ID when given.
    The id lives in thread-local storage so log records and Celery tasks
    published during the request can carry it.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.META.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        _thread_locals.request_id = request_id
        try:
            response = self.get_response(request)
        finally:
            _thread_locals.request_id = None
        response['X-Request-ID'] = request_id
        return response
