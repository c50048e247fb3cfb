from rq import Worker
from streamshelf.core.logging import setup_logging
from streamshelf.core.settings import settings
from streamshelf.workers.queue import queue, sync_queue, redis_conn

if __name__ == "__main__":
    setup_logging(level=settings.log_level, structured=settings.log_structured)
    w = Worker([sync_queue, queue], connection=redis_conn)
    w.work()
