import logging

from .middleware import get_current_request_id


class RequestIDFilter(logging.Filter):
    """
    Stamps every log record with the id of the request (or Celery task)
    that produced it, "-" outside of one.
    """
    def filter(self, record):
        record.request_id = get_current_request_id() or "-"
        return True
