"""
Unit tests for search result models.

Tests SearchSummary validation and rendering, and the duration formatter used
by the summary line.
"""

import pytest
from pydantic import ValidationError

from bytefind.models.search_results import SearchSummary, format_duration


class TestFormatDuration:
    """Test cases for format_duration."""
    
    @pytest.mark.parametrize("nanoseconds, expected", [
        (0, "0s"),
        (1, "1ns"),
        (850, "850ns"),
        (1_000, "1µs"),
        (1_500, "1.5µs"),
        (12_345_000, "12.345ms"),
        (12_345_678, "12.345678ms"),
        (1_000_000_000, "1s"),
        (2_100_000_000, "2.1s"),
        (62_500_000_000, "1m2.5s"),
        (3_600_000_000_000, "1h0m0s"),
        (3_723_000_000_001, "1h2m3.000000001s"),
    ])
    def test_formats(self, nanoseconds, expected):
        assert format_duration(nanoseconds) == expected
    
    def test_negative(self):
        assert format_duration(-1_500) == "-1.5µs"


class TestSearchSummary:
    """Test cases for SearchSummary."""
    
    def test_summary_lines(self):
        summary = SearchSummary(nmatches=1, nfiles=2, elapsed_ns=12_345_000)
        assert summary.summary_lines() == [
            "Found 1 matches in 2 files",
            "Took 12.345ms"
        ]
        assert str(summary) == "Found 1 matches in 2 files\nTook 12.345ms"
    
    def test_defaults(self):
        summary = SearchSummary()
        assert summary.nmatches == 0
        assert summary.nfiles == 0
        assert summary.summary_lines()[1] == "Took 0s"
    
    def test_matches_cannot_exceed_files(self):
        with pytest.raises(ValidationError):
            SearchSummary(nmatches=3, nfiles=2)
    
    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            SearchSummary(nfiles=-1)
    
    def test_to_dict(self):
        data = SearchSummary(nmatches=2, nfiles=5, elapsed_ns=2_100_000_000).to_dict()
        assert data == {
            'nmatches': 2,
            'nfiles': 5,
            'elapsed_ns': 2_100_000_000,
            'elapsed': '2.1s'
        }
    
    def test_elapsed_seconds(self):
        assert SearchSummary(elapsed_ns=1_500_000_000).elapsed_seconds == 1.5
