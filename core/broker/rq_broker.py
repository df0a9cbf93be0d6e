"""Redis-backed broker built on django-rq.

Each subscriber queue is an RQ queue of the same name. A delivery is an RQ
job running ``consume_message`` for that queue; delayed deliveries go
through rq-scheduler, so ``manage.py rqscheduler`` must be running next to
the consumer workers.
"""

from datetime import timedelta

import django_rq
import structlog
from redis.exceptions import RedisError

from core.broker.base import Broker, Message
from core.exceptions import PublishError

logger = structlog.get_logger(__name__)

CONSUME_JOB = "core.jobs.consumer_jobs.consume_message"


class RQBroker(Broker):
    """Broker that enqueues one RQ job per bound queue."""

    def deliver(self, queue_name: str, message: Message, delay: timedelta | None) -> None:
        """Enqueue the consume job, through the scheduler when delayed.

        Raises:
            PublishError: If Redis is unreachable or rejects the job.
        """
        payload = message.to_dict()
        try:
            if delay:
                scheduler = django_rq.get_scheduler(queue_name)
                scheduler.enqueue_in(delay, CONSUME_JOB, queue_name, payload)
            else:
                queue = django_rq.get_queue(queue_name)
                queue.enqueue(CONSUME_JOB, queue_name, payload)
        except RedisError as e:
            logger.error(
                "message_publish_failed",
                message_id=message.message_id,
                queue=queue_name,
                error=str(e),
            )
            raise PublishError(message.exchange, message.routing_key, cause=e) from e

    def ping(self) -> bool:
        """Ping the Redis server behind the default queue."""
        return bool(django_rq.get_connection("default").ping())
