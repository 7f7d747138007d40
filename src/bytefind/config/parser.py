"""
YAML configuration parser for bytefind.

This module loads, parses, and validates YAML configuration files. A file is
only read when a path is given explicitly; otherwise the built-in defaults are
used. No environment variables are consulted.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from ..models.config import SearchConfig, find_unknown_keys, validate_config_dict


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of configuration parsing operation.
    
    Attributes:
        config: The parsed and validated configuration
        warnings: List of non-fatal warnings
        config_path: Path to the configuration file used
        is_default: Whether default configuration was used
    """
    config: SearchConfig
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


class ConfigParser:
    """
    YAML configuration parser with validation and error handling.
    
    Loads YAML configuration files, validates their contents and converts them
    to SearchConfig objects.
    """
    
    def __init__(self, strict_mode: bool = False):
        """
        Initialize the configuration parser.
        
        Args:
            strict_mode: If True, treat warnings as errors
        """
        self.strict_mode = strict_mode
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
    
    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load and parse configuration from file or use defaults.
        
        Args:
            config_path: Path to configuration file. If None, defaults are used.
            
        Returns:
            ConfigParseResult containing parsed configuration and metadata
            
        Raises:
            ConfigurationError: If configuration is invalid or file cannot be read
        """
        if config_path is None:
            self.logger.debug("No configuration file given, using defaults")
            return ConfigParseResult(
                config=SearchConfig(),
                warnings=[],
                config_path=None,
                is_default=True
            )
        
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")
        
        config_data = self._load_yaml_file(config_path)
        
        warnings = [f"Unknown configuration key: {key}" for key in find_unknown_keys(config_data)]
        if self.strict_mode and warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")
        
        validated_data = self._validate_config_data(config_data)
        search_config = SearchConfig.from_dict(validated_data)
        warnings.extend(self._get_parser_warnings(search_config))
        
        if self.strict_mode and warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")
        
        for warning in warnings:
            self.logger.warning(warning)
        self.logger.info(f"Configuration loaded successfully from {config_path}")
        
        return ConfigParseResult(
            config=search_config,
            warnings=warnings,
            config_path=config_path,
            is_default=False
        )
    
    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.
        
        Args:
            file_path: Path to YAML file
            
        Returns:
            Parsed YAML data as dictionary
            
        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
            
            if not content.strip():
                self.logger.warning(f"Configuration file is empty: {file_path}")
                return {}
            
            data = yaml.safe_load(content)
            
            # Comment-only documents parse to None
            if data is None:
                return {}
            
            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")
            
            return data
            
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e
    
    def _validate_config_data(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate configuration data structure and values.
        
        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            return validate_config_dict(config_data)
        except ValueError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e
    
    def _get_parser_warnings(self, config: SearchConfig) -> List[str]:
        """
        Get warnings about settings that are legal but likely to cause trouble.
        
        Args:
            config: The parsed configuration
            
        Returns:
            List of warning messages
        """
        warnings = []
        limits = config.limits
        
        if limits.get_max_open_descriptors() > 1000:
            warnings.append(
                f"Concurrency limits allow {limits.get_max_open_descriptors()} open descriptors, "
                "which may exceed the process file limit"
            )
        
        if limits.max_workers is not None and limits.max_workers < 2:
            warnings.append("A single worker serializes the whole traversal")
        
        return warnings
    
    def save_config(self, config: SearchConfig, output_path: Union[str, Path]) -> None:
        """
        Save configuration to YAML file.
        
        Raises:
            ConfigurationError: If file cannot be written
        """
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(self._generate_yaml_with_comments(config.to_dict()))
            self.logger.info(f"Configuration saved to {output_path}")
        except OSError as e:
            raise ConfigurationError(f"Cannot write configuration file {output_path}: {e}") from e
    
    def _generate_yaml_with_comments(self, config_dict: Dict[str, Any]) -> str:
        """Generate YAML content with explanatory comments."""
        lines = [
            "# bytefind configuration",
            "",
            "# Descend into subdirectories (same as -r)",
            yaml.dump({'recursive': config_dict['recursive']}, default_flow_style=False).rstrip(),
            "",
            "# Concurrency limits",
            yaml.dump({'limits': config_dict['limits']}, default_flow_style=False).rstrip(),
            "",
            "# Diagnostics written to standard error: debug, info, warning or error",
            yaml.dump({'log_level': config_dict['log_level']}, default_flow_style=False).rstrip(),
            ""
        ]
        return "\n".join(lines)
    
    def validate_config_file(self, config_path: Union[str, Path]) -> List[str]:
        """
        Validate a configuration file without loading it.
        
        Args:
            config_path: Path to configuration file
            
        Returns:
            List of validation errors (empty if valid)
        """
        try:
            config_path = Path(config_path)
            if not config_path.exists():
                return [f"Configuration file not found: {config_path}"]
            
            config_data = self._load_yaml_file(config_path)
            self._validate_config_data(config_data)
            return []
            
        except ConfigurationError as e:
            return [str(e)]
    
    def get_config_template(self) -> str:
        """Get the default configuration as a commented YAML template."""
        return self._generate_yaml_with_comments(SearchConfig().to_dict())


def load_config(config_path: Optional[Union[str, Path]] = None, strict_mode: bool = False) -> ConfigParseResult:
    """
    Convenience function to load configuration.
    
    Args:
        config_path: Path to configuration file (optional)
        strict_mode: Whether to treat warnings as errors
        
    Returns:
        ConfigParseResult containing parsed configuration
        
    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser(strict_mode=strict_mode)
    return parser.load_config(config_path)


def validate_config_file(config_path: Union[str, Path]) -> List[str]:
    """Convenience function to validate a configuration file."""
    parser = ConfigParser()
    return parser.validate_config_file(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Create a template configuration file.
    
    Args:
        output_path: Where to save the template
        
    Raises:
        ConfigurationError: If template cannot be created
    """
    parser = ConfigParser()
    template_content = parser.get_config_template()
    
    try:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template_content)
            
    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
