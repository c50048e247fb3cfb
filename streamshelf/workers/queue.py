"""
Queue Configuration - rq queues on Redis with retry support
"""
from redis import Redis
from rq import Queue, Retry
from streamshelf.core.settings import settings
from streamshelf.core.worker_settings import worker_settings

# Redis connection (lazy: nothing connects until a job is enqueued)
redis_conn = Redis.from_url(settings.redis_url)

# Default queue
queue = Queue(settings.rq_queue_name, connection=redis_conn)

# Provider status polling
sync_queue = Queue(worker_settings.rq_queue_sync, connection=redis_conn)


def get_retry_config(max_retries: int = 3) -> Retry:
    """
    Default retry configuration with backoff.
    Intervals come from SYNC_RETRY_INTERVALS (30s, 60s, 120s by default).
    """
    return Retry(max=max_retries, interval=list(worker_settings.sync_retry_intervals))


RETRY_SYNC = get_retry_config(worker_settings.sync_max_retries)


def enqueue_sync(func, *args, job_timeout=None, **kwargs):
    """Enqueue job to the status sync queue with retry"""
    return sync_queue.enqueue(
        func, *args,
        job_timeout=job_timeout or worker_settings.sync_job_timeout,
        retry=RETRY_SYNC,
        **kwargs
    )
