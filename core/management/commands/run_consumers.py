"""Run the channel consumers as pools of RQ workers.

Every subscriber queue gets its own pool, so a slow provider on one channel
never holds up messages of another. The pool size bounds how many messages
a queue processes concurrently, so it plays the part of the consumer
prefetch. With more than one queue each pool runs in a child process.
Delayed retries are moved onto the queues by ``rqscheduler``, which must
run alongside the pools.
"""

import multiprocessing

import django_rq
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from rq.worker_pool import WorkerPool

from core.broker import QUEUE_NAMES
from core.constants import DEFAULT_CONSUMER_PREFETCH


def run_consumer_pool(queue_name: str, num_workers: int, burst: bool) -> None:
    """Run one worker pool on ``queue_name`` until stopped."""
    pool = WorkerPool(
        [queue_name],
        connection=django_rq.get_connection(queue_name),
        num_workers=num_workers,
    )
    pool.start(burst=burst)


class Command(BaseCommand):
    """Start consuming notification messages."""

    help = "Start one RQ worker pool per notification subscriber queue"

    def add_arguments(self, parser):
        """Register the queue and pool options."""
        parser.add_argument(
            "queues",
            nargs="*",
            help="Subscriber queues to consume (default: all of them)",
        )
        parser.add_argument(
            "--workers",
            type=int,
            default=None,
            help="Worker processes per queue (default: NOTIFICATION_CONSUMER_PREFETCH)",
        )
        parser.add_argument(
            "--burst",
            action="store_true",
            help="Exit once the queues are empty",
        )

    def handle(self, *args, **options):
        """Validate the queues and run one worker pool per queue."""
        queue_names = options["queues"] or list(QUEUE_NAMES)
        unknown = sorted(set(queue_names) - set(QUEUE_NAMES))
        if unknown:
            raise CommandError(
                f"Unknown queue(s): {', '.join(unknown)}. "
                f"Known queues: {', '.join(QUEUE_NAMES)}"
            )

        num_workers = options["workers"] or getattr(
            settings, "NOTIFICATION_CONSUMER_PREFETCH", DEFAULT_CONSUMER_PREFETCH
        )
        if num_workers < 1:
            raise CommandError("--workers must be at least 1")

        queue_names = list(dict.fromkeys(queue_names))
        burst = options["burst"]
        self.stdout.write(
            self.style.SUCCESS(
                f"Starting {len(queue_names)} consumer pool(s) of {num_workers} "
                f"worker(s) on: {', '.join(queue_names)}"
            )
        )

        if len(queue_names) == 1:
            run_consumer_pool(queue_names[0], num_workers, burst)
            return

        # RQ workers fork; the pools inherit the configured Django process.
        context = multiprocessing.get_context("fork")
        processes = [
            context.Process(
                target=run_consumer_pool,
                args=(queue_name, num_workers, burst),
                name=f"consumers-{queue_name}",
            )
            for queue_name in queue_names
        ]
        for process in processes:
            process.start()

        try:
            for process in processes:
                process.join()
        except KeyboardInterrupt:
            self.stdout.write("Waiting for consumer pools to shut down...")
            for process in processes:
                process.join()

        failed = [process.name for process in processes if process.exitcode]
        if failed:
            raise CommandError(f"Consumer pool(s) exited with errors: {', '.join(failed)}")
