"""
Search results data models for bytefind.

This module defines the summary produced at the end of a search run and the
human-readable rendering of its elapsed wall time.
"""

from typing import Dict, Any
from pydantic import BaseModel, Field, model_validator


_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND


def _fraction(value: int, digits: int) -> str:
    """Render value / 10**digits with trailing zeros trimmed."""
    whole, frac = divmod(value, 10 ** digits)
    frac_text = str(frac).rjust(digits, '0').rstrip('0')
    return f"{whole}.{frac_text}" if frac_text else str(whole)


def format_duration(nanoseconds: int) -> str:
    """
    Format an elapsed time in the compact style used by the summary line.
    
    Examples: ``0s``, ``850ns``, ``1.5µs``, ``12.345ms``, ``2.1s``,
    ``1m2.5s``, ``1h0m0s``.
    
    Args:
        nanoseconds: Elapsed time in integer nanoseconds
        
    Returns:
        Human-readable duration string
    """
    if nanoseconds == 0:
        return "0s"
    
    sign = "-" if nanoseconds < 0 else ""
    n = abs(nanoseconds)
    
    if n < _MICROSECOND:
        return f"{sign}{n}ns"
    if n < _MILLISECOND:
        return f"{sign}{_fraction(n, 3)}µs"
    if n < _SECOND:
        return f"{sign}{_fraction(n, 6)}ms"
    
    total_seconds, frac = divmod(n, _SECOND)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    seconds_text = _fraction(seconds * _SECOND + frac, 9)
    
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds_text}s"
    if minutes:
        return f"{sign}{minutes}m{seconds_text}s"
    return f"{sign}{seconds_text}s"


class SearchSummary(BaseModel):
    """
    Counters reported at the end of a search run.
    
    Attributes:
        nmatches: Number of files whose content contains the query
        nfiles: Number of files examined
        elapsed_ns: Wall time of the run in nanoseconds
    """
    
    nmatches: int = Field(0, ge=0, description="Number of matching files")
    nfiles: int = Field(0, ge=0, description="Number of files examined")
    elapsed_ns: int = Field(0, ge=0, description="Elapsed wall time in nanoseconds")
    
    @model_validator(mode='after')
    def validate_counts(self):
        """Every match is also a visited file."""
        if self.nmatches > self.nfiles:
            raise ValueError("nmatches cannot exceed nfiles")
        return self
    
    @property
    def elapsed_seconds(self) -> float:
        """Elapsed wall time in seconds."""
        return self.elapsed_ns / _SECOND
    
    def get_elapsed_human_readable(self) -> str:
        """Get the elapsed time in human-readable format."""
        return format_duration(self.elapsed_ns)
    
    def summary_lines(self) -> list[str]:
        """Lines printed after the match paths."""
        return [
            f"Found {self.nmatches} matches in {self.nfiles} files",
            f"Took {self.get_elapsed_human_readable()}"
        ]
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert summary to dictionary representation."""
        data = self.model_dump()
        data['elapsed'] = self.get_elapsed_human_readable()
        return data
    
    def __str__(self) -> str:
        return "\n".join(self.summary_lines())
