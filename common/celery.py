from celery.signals import before_task_publish, task_postrun, task_prerun

from .middleware import _thread_locals, get_current_request_id


@before_task_publish.connect
def propagate_request_id(sender=None, headers=None, **kwargs):
    """
    Injects the current request_id into the task headers before it's sent.
    This runs on the producer (web worker) side.
    """
    request_id = get_current_request_id()
    if request_id and headers is not None:
        headers['request_id'] = request_id


@task_prerun.connect
def load_request_id(sender=None, task_id=None, task=None, **kwargs):
    """
    Loads the request_id from the task headers into thread-local storage.
    Eagerly executed tasks run inside the request and keep its id.
    """
    request_id = task.request.get('request_id') if task else None
    if request_id:
        _thread_locals.request_id = request_id


@task_postrun.connect
def clear_request_id(sender=None, task=None, **kwargs):
    if task is not None and not task.request.is_eager:
        _thread_locals.request_id = None


def setup_celery_signals():
    """
    Importing this module registers the handlers above; battlex.celery calls
    this so the import is explicit.
    """
    return None
