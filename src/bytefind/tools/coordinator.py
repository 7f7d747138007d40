"""
Search coordinator for bytefind.

The coordinator launches one walker per root on a thread pool, tracks the
dynamically growing set of walks with a WaitGroup, and merges every walker's
events into a single stream consumed by the calling thread.

Visit and match events share one queue with capacity 1, so producers block
until the consumer keeps up. A closing thread waits for the WaitGroup to reach
zero and then enqueues an end marker; every event is enqueued before its
walker signals completion, so the marker is always the last item.
"""

import logging
import os
import queue
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Iterable, Iterator, Optional, Union

from ..models.config import SearchConfig
from ..models.events import MatchEvent, VisitEvent
from ..models.search_results import SearchSummary
from .fs import FileSystem, LocalFileSystem
from .limiter import ConcurrencyLimiter, WaitGroup
from .scanner import Scanner
from .walker import Event, Walker


logger = logging.getLogger(__name__)

_END = object()


def _encode_query(query: Union[bytes, str]) -> bytes:
    if isinstance(query, str):
        return os.fsencode(query)
    return bytes(query)


def _log_failure(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error("Walker task failed", exc_info=exc)


class SearchCoordinator:
    """
    Runs a literal byte search over one or more directory trees.
    
    The two limiters are created once per coordinator, so concurrent runs on
    the same coordinator share the same caps.
    """
    
    def __init__(self, config: Optional[SearchConfig] = None, fs: Optional[FileSystem] = None):
        """
        Initialize the coordinator.
        
        Args:
            config: Search configuration (defaults apply when omitted)
            fs: Filesystem adapter (the local filesystem when omitted)
        """
        self.config = config or SearchConfig()
        self.fs = fs or LocalFileSystem()
        limits = self.config.limits
        self.dir_limiter = ConcurrencyLimiter(limits.max_dir_listings)
        self.file_limiter = ConcurrencyLimiter(limits.max_file_reads)
        self.scanner = Scanner(self.fs, self.file_limiter)
    
    def stream(self, query: Union[bytes, str], roots: Iterable[str]) -> Iterator[Event]:
        """
        Search roots and yield events as walkers produce them.
        
        For each file the VisitEvent comes before its MatchEvent. No order is
        promised between files. Closing the iterator early stops the walkers.
        
        Args:
            query: Literal bytes (or a string, encoded like a filename) to find
            roots: Directories to search; an empty list means the current directory
            
        Yields:
            VisitEvent and MatchEvent objects
        """
        query = _encode_query(query)
        roots = list(roots) or ['.']
        events: "queue.Queue[object]" = queue.Queue(maxsize=1)
        tracker = WaitGroup()
        stop = threading.Event()
        
        with ThreadPoolExecutor(max_workers=self.config.limits.get_worker_count(),
                                thread_name_prefix='bytefind-walker') as pool:
            def spawn(directory: str) -> None:
                pool.submit(walker.walk, directory).add_done_callback(_log_failure)
            
            walker = Walker(
                query=query,
                fs=self.fs,
                scanner=self.scanner,
                dir_limiter=self.dir_limiter,
                tracker=tracker,
                spawn=spawn,
                emit=events.put,
                recursive=self.config.recursive,
                stop=stop
            )
            
            tracker.add(len(roots))
            closer = threading.Thread(
                target=self._close_when_done,
                args=(tracker, events),
                name='bytefind-closer',
                daemon=True
            )
            closer.start()
            
            finished = False
            try:
                for index, root in enumerate(roots):
                    logger.debug(f"Walking root: {root}")
                    try:
                        spawn(root)
                    except BaseException:
                        # Roots that were never scheduled will not call done()
                        tracker.add(index - len(roots))
                        raise
                
                while True:
                    event = events.get()
                    if event is _END:
                        finished = True
                        break
                    yield event
            finally:
                if not finished:
                    stop.set()
                    while events.get() is not _END:
                        pass
    
    @staticmethod
    def _close_when_done(tracker: WaitGroup, events: "queue.Queue[object]") -> None:
        tracker.wait()
        events.put(_END)
    
    def run(
        self,
        query: Union[bytes, str],
        roots: Iterable[str],
        on_match: Optional[Callable[[str], None]] = None
    ) -> SearchSummary:
        """
        Search roots and count the results.
        
        Args:
            query: Literal bytes (or a string) to find
            roots: Directories to search
            on_match: Called with each matching path as soon as it is received
            
        Returns:
            SearchSummary with match and file counts and elapsed time
        """
        started = time.perf_counter_ns()
        nmatches = 0
        nfiles = 0
        
        for event in self.stream(query, roots):
            if isinstance(event, VisitEvent):
                nfiles += 1
            elif isinstance(event, MatchEvent):
                if on_match is not None:
                    on_match(event.path)
                nmatches += 1
        
        summary = SearchSummary(
            nmatches=nmatches,
            nfiles=nfiles,
            elapsed_ns=time.perf_counter_ns() - started
        )
        logger.info(f"Search finished: {nmatches} matches in {nfiles} files")
        return summary


def run_search(
    query: Union[bytes, str],
    roots: Iterable[str],
    recursive: Optional[bool] = None,
    on_match: Optional[Callable[[str], None]] = None,
    config: Optional[SearchConfig] = None
) -> SearchSummary:
    """
    Convenience function to run a search.
    
    Args:
        query: Literal bytes (or a string) to find
        roots: Directories to search
        recursive: Descend into subdirectories; overrides config.recursive when given
        on_match: Called with each matching path
        config: Base configuration (defaults when omitted)
        
    Returns:
        SearchSummary for the run
    """
    config = config or SearchConfig()
    if recursive is not None:
        config = config.model_copy(update={'recursive': recursive})
    return SearchCoordinator(config).run(query, roots, on_match=on_match)
