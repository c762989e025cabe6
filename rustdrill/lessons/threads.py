"""Lessons on sharing state between threads."""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass


@dataclass
class JobStatus:
    """How many jobs a worker has completed."""

    jobs_completed: int = 0


def run_jobs(jobs: int = 10, job_delay: float = 0.25, poll_delay: float = 0.5) -> JobStatus:
    """Complete jobs on a worker thread while the caller polls for progress."""
    status = JobStatus()
    lock = threading.Lock()

    def work() -> None:
        for _ in range(jobs):
            time.sleep(job_delay)
            with lock:
                status.jobs_completed += 1

    worker = threading.Thread(target=work, daemon=True)
    worker.start()
    while True:
        with lock:
            if status.jobs_completed >= jobs:
                break
        print("waiting... ")
        time.sleep(poll_delay)
    worker.join()
    return status


def offset_sums(numbers: Sequence[int] = tuple(range(100)), workers: int = 8) -> list[int]:
    """Sum every workers-th number from each offset, one thread per offset."""

    def sum_from(offset: int) -> int:
        total = sum(numbers[offset::workers])
        print(f"Sum of offset {offset} is {total}")
        return total

    offsets = range(max(workers, 0))
    if not offsets:
        return []
    with ThreadPoolExecutor(max_workers=len(offsets)) as pool:
        return list(pool.map(sum_from, offsets))