"""
Configuration data models for bytefind.

This module defines the data structures for the search configuration: the
recursion policy, the concurrency limits that bound directory listings and
file reads, and the diagnostic log level.
"""

from typing import Dict, List, Optional, Any
from pydantic import BaseModel, Field, ValidationError, field_validator


LOG_LEVELS = ['debug', 'info', 'warning', 'error']


class LimitsConfig(BaseModel):
    """
    Configuration for concurrency limits.
    
    Attributes:
        max_dir_listings: Maximum directory listings in progress at once
        max_file_reads: Maximum file reads in progress at once
        max_workers: Size of the worker pool (defaults to the sum of both limits)
    """
    
    max_dir_listings: int = Field(20, gt=0, description="Maximum concurrent directory listings")
    max_file_reads: int = Field(180, gt=0, description="Maximum concurrent file reads")
    max_workers: Optional[int] = Field(None, gt=0, description="Worker pool size")
    
    def get_worker_count(self) -> int:
        """Get the effective worker pool size."""
        if self.max_workers is not None:
            return self.max_workers
        return self.max_dir_listings + self.max_file_reads
    
    def get_max_open_descriptors(self) -> int:
        """Upper bound on descriptors held by listings and reads together."""
        return self.max_dir_listings + self.max_file_reads
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class SearchConfig(BaseModel):
    """
    Main configuration for a search run.
    
    Attributes:
        recursive: Whether walkers descend into subdirectories
        limits: Concurrency limits for listings, reads and workers
        log_level: Minimum level of diagnostics written to standard error
    """
    
    recursive: bool = Field(False, description="Search directories recursively")
    limits: LimitsConfig = Field(default_factory=LimitsConfig, description="Concurrency limits")
    log_level: str = Field("warning", description="Diagnostic log level")
    
    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v) -> str:
        """Normalize and validate the log level name."""
        if not isinstance(v, str):
            raise ValueError(f"Log level must be a string, got {type(v).__name__}")
        level = v.strip().lower()
        if level == 'warn':
            level = 'warning'
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}")
        return level
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'recursive': self.recursive,
            'limits': self.limits.to_dict(),
            'log_level': self.log_level
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchConfig':
        """Create configuration from dictionary."""
        return cls(**data)
    
    def __str__(self) -> str:
        """String representation of configuration."""
        return (f"SearchConfig(recursive={self.recursive}, "
                f"dir_listings={self.limits.max_dir_listings}, "
                f"file_reads={self.limits.max_file_reads}, "
                f"workers={self.limits.get_worker_count()})")


KNOWN_KEYS = {
    '': {'recursive', 'limits', 'log_level'},
    'limits': {'max_dir_listings', 'max_file_reads', 'max_workers'}
}


def find_unknown_keys(config_data: Dict[str, Any]) -> List[str]:
    """
    List configuration keys that no model field consumes.
    
    Args:
        config_data: Raw configuration dictionary
        
    Returns:
        Dotted names of the unrecognized keys
    """
    unknown = [key for key in config_data if key not in KNOWN_KEYS['']]
    limits = config_data.get('limits')
    if isinstance(limits, dict):
        unknown.extend(f"limits.{key}" for key in limits if key not in KNOWN_KEYS['limits'])
    return unknown


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a configuration dictionary and return the normalized data.
    
    Unknown keys are dropped; callers that care about them should check
    find_unknown_keys first.
    
    Args:
        config_data: Raw configuration data
        
    Returns:
        Normalized configuration dictionary
        
    Raises:
        ValueError: If the configuration is invalid
    """
    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(config_data).__name__}")
    
    data = {key: value for key, value in config_data.items() if key in KNOWN_KEYS['']}
    limits = data.get('limits')
    if limits is not None:
        if not isinstance(limits, dict):
            raise ValueError("'limits' must be a mapping")
        data['limits'] = {key: value for key, value in limits.items() if key in KNOWN_KEYS['limits']}
    
    try:
        return SearchConfig(**data).to_dict()
    except ValidationError as e:
        raise ValueError(str(e)) from e
