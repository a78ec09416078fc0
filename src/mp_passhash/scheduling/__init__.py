"""Scheduling – bounded worker pool for CPU-heavy hashing calls."""
from mp_passhash.scheduling.limiter import QueueLimiter
from mp_passhash.scheduling.pool import HashingPool

__all__ = ["HashingPool", "QueueLimiter"]
