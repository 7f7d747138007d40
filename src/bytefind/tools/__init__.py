"""
Search tools for bytefind.

This module contains the concurrency primitives, the filesystem adapter, and
the walker/scanner/coordinator pipeline that performs the search.
"""

from .limiter import ConcurrencyLimiter, WaitGroup
from .fs import FileSystem, LocalFileSystem
from .scanner import Scanner
from .walker import Walker
from .coordinator import SearchCoordinator, run_search

__all__ = [
    'ConcurrencyLimiter',
    'WaitGroup',
    'FileSystem',
    'LocalFileSystem',
    'Scanner',
    'Walker',
    'SearchCoordinator',
    'run_search'
]
