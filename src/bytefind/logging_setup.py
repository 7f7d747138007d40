"""
Diagnostic logging for the bytefind command line.

Library modules log through logging.getLogger(__name__); this module attaches
the single stderr handler that turns those records into one-line diagnostics
prefixed with the program tag.
"""

import logging
import sys
from typing import Optional, TextIO


PROGRAM_TAG = "bytefind"
DIAGNOSTIC_FORMAT = f"{PROGRAM_TAG}: %(message)s"

_HANDLER_MARKER = "_bytefind_diagnostics"


def configure_logging(level: str = "warning", stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Route bytefind log records to standard error.
    
    Calling this again replaces the handler installed by a previous call.
    
    Args:
        level: Minimum level name (debug, info, warning, error)
        stream: Destination stream, standard error when omitted
        
    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PROGRAM_TAG)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
    
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(DIAGNOSTIC_FORMAT))
    setattr(handler, _HANDLER_MARKER, True)
    
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    return logger
