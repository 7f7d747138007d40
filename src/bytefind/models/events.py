"""
Event and directory entry types exchanged between walkers and the coordinator.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """
    A single entry produced by a directory listing.
    
    is_file marks entries whose content gets scanned. Entries that are
    neither (FIFOs, sockets, devices) are skipped by the walker.
    """
    name: str
    is_dir: bool
    is_file: bool


@dataclass(frozen=True, slots=True)
class VisitEvent:
    """One non-directory entry was examined, whether it matched or not."""
    path: str


@dataclass(frozen=True, slots=True)
class MatchEvent:
    """A file whose content contains the query."""
    path: str
