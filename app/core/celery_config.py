from celery import Celery

from app.core.config import CELERY_TASK_ALWAYS_EAGER, get_redis_url


def make_celery(app_name: str = "event_registration") -> Celery:
    redis_url = get_redis_url()
    celery = Celery(app_name, broker=redis_url, backend=redis_url, include=["app.tasks"])
    celery.conf.task_serializer = "json"
    celery.conf.result_serializer = "json"
    celery.conf.accept_content = ["json"]
    celery.conf.result_persistent = False
    celery.conf.task_track_started = True
    celery.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
    celery.conf.task_ignore_result = True
    return celery


celery_app = make_celery()
