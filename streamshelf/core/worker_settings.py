"""
Worker Settings - Status sync job and scheduler tuning
"""
from __future__ import annotations
import os
from dataclasses import dataclass

def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else int(v)

def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v

def _env_intervals(name: str, default: str) -> list[int]:
    raw = _env_str(name, default)
    return [int(part) for part in raw.split(",") if part.strip()]

@dataclass(frozen=True)
class WorkerSettings:
    # Status sync job
    sync_job_timeout: int = _env_int("SYNC_JOB_TIMEOUT", 120)
    sync_max_retries: int = _env_int("SYNC_MAX_RETRIES", 3)
    sync_retry_intervals: tuple[int, ...] = tuple(_env_intervals("SYNC_RETRY_INTERVALS", "30,60,120"))

    # Scheduler
    poll_interval_seconds: int = _env_int("POLL_INTERVAL_SECONDS", 60)
    poll_batch_size: int = _env_int("POLL_BATCH_SIZE", 50)

    # Queue
    rq_queue_sync: str = _env_str("RQ_QUEUE_SYNC", "sync")

worker_settings = WorkerSettings()
