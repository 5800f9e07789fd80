import os

from celery import Celery

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "battlex.settings")

app = Celery("battlex")

# - namespace='CELERY' means all celery-related configuration keys
#   should have a `CELERY_` prefix.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Load task modules from all registered Django app configs.
app.autodiscover_tasks()

# --- Setup request_id propagation for Celery ---
from common.celery import setup_celery_signals
setup_celery_signals()
# --- End Celery Signal Setup ---
