from celery import Celery
from celery.schedules import crontab

from .config import get_settings
from .logging import configure_logging

settings = get_settings()
configure_logging()

REBUILD_STATS_TASK = "domain_search.services.stats.rebuild_domain_stats_task"

celery_app = Celery(
    "domain_search",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
)

celery_app.conf.update(
    task_routes={REBUILD_STATS_TASK: {"queue": "maintenance"}},
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    imports=("domain_search.services.stats",),
    beat_schedule={
        # Bulk loads trigger their own rebuild; this catches anything written since
        "rebuild-domain-stats-nightly": {
            "task": REBUILD_STATS_TASK,
            "schedule": crontab(hour=4, minute=0),
        },
    },
)
