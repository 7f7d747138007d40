"""
bytefind - Core Package

Searches for a literal byte string across one or more directory trees using a
bounded pool of concurrent directory walkers and file scanners.
"""

__version__ = "0.1.0"
__author__ = "bytefind Team"
