"""
FastAPI dependencies.
"""

from typing import Annotated

from fastapi import Depends, Request

from cloud_queue.core import JobQueue


def get_job_queue(request: Request) -> JobQueue:
    """Return the queue owned by the running application."""
    return request.app.state.job_queue


JobQueueDep = Annotated[JobQueue, Depends(get_job_queue)]
