"""
Directory walker for bytefind.

A Walker processes one directory per call to walk(): it lists the directory
under the listing limiter, schedules a child walk for every subdirectory when
the search is recursive, and scans every regular file, emitting a VisitEvent
for each scanned file and a MatchEvent for each file containing the query.
"""

import logging
import os
import threading
from typing import Callable, Optional, Union

from ..models.events import MatchEvent, VisitEvent
from .fs import FileSystem
from .limiter import ConcurrencyLimiter, WaitGroup
from .scanner import Scanner


logger = logging.getLogger(__name__)

Event = Union[VisitEvent, MatchEvent]


class Walker:
    """
    Walks directories and reports scanned and matching files.
    
    One Walker instance is shared by every task of a search run; walk() keeps
    no per-call state on the instance.
    """
    
    def __init__(
        self,
        query: bytes,
        fs: FileSystem,
        scanner: Scanner,
        dir_limiter: ConcurrencyLimiter,
        tracker: WaitGroup,
        spawn: Callable[[str], None],
        emit: Callable[[Event], None],
        recursive: bool = False,
        stop: Optional[threading.Event] = None
    ):
        """
        Initialize the walker.
        
        Args:
            query: Literal bytes to search for
            fs: Filesystem adapter used for listings
            scanner: Scanner used for file contents
            dir_limiter: Limiter held around each directory listing
            tracker: Completion tracker for outstanding walks
            spawn: Schedules walk() for a directory already registered with tracker
            emit: Delivers events to the consumer; may block
            recursive: Whether to descend into subdirectories
            stop: When set, remaining entries are skipped
        """
        self.query = query
        self.fs = fs
        self.scanner = scanner
        self.dir_limiter = dir_limiter
        self.tracker = tracker
        self.spawn = spawn
        self.emit = emit
        self.recursive = recursive
        self.stop = stop or threading.Event()
    
    def walk(self, directory: str) -> None:
        """
        Process a single directory and signal its completion to the tracker.
        
        The caller must have registered this walk with the tracker already.
        
        Args:
            directory: Directory to process
        """
        try:
            if self.stop.is_set():
                return
            
            with self.dir_limiter:
                entries = self.fs.list_entries(directory)
            logger.debug(f"Listed {len(entries)} entries in {directory}")
            
            for entry in entries:
                if self.stop.is_set():
                    return
                
                path = os.path.normpath(os.path.join(directory, entry.name))
                if entry.is_dir:
                    if self.recursive:
                        self._spawn_child(path)
                    continue
                
                if not entry.is_file:
                    logger.debug(f"Skipping special file {path}")
                    continue
                
                self.emit(VisitEvent(path))
                if self.scanner.contains(self.query, path):
                    self.emit(MatchEvent(path))
        finally:
            self.tracker.done()
    
    def _spawn_child(self, path: str) -> None:
        """Register a child walk with the tracker, then schedule it."""
        self.tracker.add(1)
        try:
            self.spawn(path)
        except BaseException:
            self.tracker.done()
            raise
