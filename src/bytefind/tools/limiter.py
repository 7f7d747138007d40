"""
Synchronization primitives for the search pipeline.

ConcurrencyLimiter caps how many tasks may hold a resource class at once
(directory listings, file reads). WaitGroup counts outstanding walker tasks so
the coordinator can tell when a traversal whose size is unknown up front has
finished.
"""

import threading
from typing import Optional


class ConcurrencyLimiter:
    """
    Counting semaphore with scoped acquire/release.
    
    Use it as a context manager so the token is returned on every exit path,
    including exceptions. Ordering between waiters is not fair.
    """
    
    def __init__(self, capacity: int):
        """
        Initialize the limiter.
        
        Args:
            capacity: Maximum number of concurrent holders
        """
        if capacity <= 0:
            raise ValueError(f"Limiter capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._semaphore = threading.Semaphore(capacity)
        self._lock = threading.Lock()
        self._in_use = 0
        self._peak = 0
    
    def acquire(self) -> None:
        """Block until a token is free, then take it."""
        self._semaphore.acquire()
        with self._lock:
            self._in_use += 1
            if self._in_use > self._peak:
                self._peak = self._in_use
    
    def release(self) -> None:
        """Return a token; never blocks."""
        with self._lock:
            if self._in_use == 0:
                raise ValueError("ConcurrencyLimiter released more times than acquired")
            self._in_use -= 1
        self._semaphore.release()
    
    @property
    def in_use(self) -> int:
        """Number of tokens currently held."""
        with self._lock:
            return self._in_use
    
    @property
    def peak(self) -> int:
        """Highest number of tokens held at the same time."""
        with self._lock:
            return self._peak
    
    def __enter__(self) -> 'ConcurrencyLimiter':
        self.acquire()
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
    
    def __repr__(self) -> str:
        return f"ConcurrencyLimiter(capacity={self.capacity}, in_use={self.in_use})"


class WaitGroup:
    """
    Counter of outstanding tasks that can be waited on until it reaches zero.
    
    A task must be registered with add() before it is scheduled, never after,
    otherwise wait() can observe zero while work is still pending.
    """
    
    def __init__(self):
        self._cond = threading.Condition()
        self._count = 0
    
    def add(self, n: int = 1) -> None:
        """Register n pending units."""
        with self._cond:
            if self._count + n < 0:
                raise ValueError("WaitGroup counter cannot go negative")
            self._count += n
            if self._count == 0:
                self._cond.notify_all()
    
    def done(self) -> None:
        """Signal that one pending unit has completed."""
        self.add(-1)
    
    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the counter reaches zero.
        
        Args:
            timeout: Seconds to wait, or None to wait indefinitely
            
        Returns:
            True if the counter reached zero, False on timeout
        """
        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout=timeout)
    
    @property
    def count(self) -> int:
        """Number of pending units."""
        with self._cond:
            return self._count
