"""
Cloud Stream Queue

An in-memory, two-lane priority work queue served over HTTP. Producers enqueue
jobs, workers dequeue the next eligible job and conclude it as OK or FAILED.
"""

__version__ = "1.0.0"
