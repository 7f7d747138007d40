"""
Data models for bytefind.

This module contains the core data structures used throughout the system.
"""

from .config import LimitsConfig, SearchConfig
from .events import DirectoryEntry, MatchEvent, VisitEvent
from .search_results import SearchSummary, format_duration

__all__ = [
    'LimitsConfig',
    'SearchConfig',
    'DirectoryEntry',
    'MatchEvent',
    'VisitEvent',
    'SearchSummary',
    'format_duration'
]
