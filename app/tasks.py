import logging

from app.core.celery_config import celery_app

logger = logging.getLogger(__name__)


def send_to_channel(user_id: int, message: str) -> None:
    """
    Integration point for the external delivery channel (push, e-mail, SMS).

    Delivery itself lives outside this service: a deployment that pushes
    messages replaces this function with its channel client. The default only
    logs, since the outbox row is already the durable, readable record.
    """
    logger.info("Delivering notification to user %s: %s", user_id, message)


@celery_app.task(bind=True)
def deliver_notification_task(self, notification_id: int, user_id: int, message: str) -> int:
    """Deliver a committed notification outside the request cycle."""
    send_to_channel(user_id, message)
    return notification_id


def enqueue_notification_delivery(notification_id: int, user_id: int, message: str) -> None:
    """Queue delivery; a broker failure is logged and never undoes the registration."""
    try:
        deliver_notification_task.delay(notification_id, user_id, message)
    except Exception:
        logger.exception("Could not enqueue delivery of notification %s", notification_id)
