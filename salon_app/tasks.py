from datetime import date, datetime

from celery.utils.log import get_task_logger
from sqlmodel import Session

from salon_app.celery_app import celery_app
from salon_app.db import engine
from salon_app.routes.availability import staff_ranking

logger = get_task_logger(__name__)


@celery_app.task(name="tasks.availability_snapshot")
def availability_snapshot(day: str, now: str) -> list[dict]:
    # day: "YYYY-MM-DD", now: "HH:MM"
    target = date.fromisoformat(day)
    clock = datetime.strptime(now, "%H:%M").time()
    with Session(engine) as session:
        ranking = staff_ranking(session, target, clock)
    logger.info(
        "availability snapshot %s %s: %s",
        day,
        now,
        ", ".join(f"{r['employee']['name']}={r['status']}" for r in ranking) or "(không ai trong ca)",
    )
    return ranking
