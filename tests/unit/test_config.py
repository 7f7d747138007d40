"""
Unit tests for configuration models.

Tests defaults, validation and dictionary conversion of LimitsConfig and
SearchConfig, and the validate_config_dict helper.
"""

import pytest
from pydantic import ValidationError

from bytefind.models.config import (
    LimitsConfig,
    SearchConfig,
    find_unknown_keys,
    validate_config_dict
)


class TestLimitsConfig:
    """Test cases for LimitsConfig."""
    
    def test_defaults(self):
        limits = LimitsConfig()
        assert limits.max_dir_listings == 20
        assert limits.max_file_reads == 180
        assert limits.max_workers is None
        assert limits.get_worker_count() == 200
        assert limits.get_max_open_descriptors() == 200
    
    def test_explicit_workers(self):
        assert LimitsConfig(max_workers=8).get_worker_count() == 8
    
    @pytest.mark.parametrize("field", ['max_dir_listings', 'max_file_reads', 'max_workers'])
    def test_non_positive_rejected(self, field):
        with pytest.raises(ValidationError):
            LimitsConfig(**{field: 0})


class TestSearchConfig:
    """Test cases for SearchConfig."""
    
    def test_defaults(self):
        config = SearchConfig()
        assert config.recursive is False
        assert config.log_level == 'warning'
        assert config.limits == LimitsConfig()
    
    def test_log_level_normalized(self):
        assert SearchConfig(log_level=' DEBUG ').log_level == 'debug'
        assert SearchConfig(log_level='warn').log_level == 'warning'
    
    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="Invalid log level"):
            SearchConfig(log_level='chatty')
    
    def test_round_trip_dict(self):
        config = SearchConfig(recursive=True, limits={'max_file_reads': 10})
        restored = SearchConfig.from_dict(config.to_dict())
        assert restored == config
        assert restored.limits.max_file_reads == 10
        assert restored.limits.max_dir_listings == 20
    
    def test_str(self):
        assert "workers=200" in str(SearchConfig())


class TestValidateConfigDict:
    """Test cases for validate_config_dict and find_unknown_keys."""
    
    def test_valid(self):
        data = validate_config_dict({'recursive': True, 'limits': {'max_dir_listings': 4}})
        assert data['recursive'] is True
        assert data['limits']['max_dir_listings'] == 4
        assert data['limits']['max_file_reads'] == 180
    
    def test_unknown_keys_dropped(self):
        data = validate_config_dict({'colour': 'red', 'limits': {'speed': 9}})
        assert 'colour' not in data
        assert 'speed' not in data['limits']
    
    def test_find_unknown_keys(self):
        unknown = find_unknown_keys({'colour': 'red', 'limits': {'speed': 9, 'max_workers': 2}})
        assert unknown == ['colour', 'limits.speed']
    
    def test_not_a_mapping(self):
        with pytest.raises(ValueError, match="mapping"):
            validate_config_dict(['recursive'])
    
    def test_limits_not_a_mapping(self):
        with pytest.raises(ValueError, match="'limits' must be a mapping"):
            validate_config_dict({'limits': 5})
    
    def test_invalid_value(self):
        with pytest.raises(ValueError):
            validate_config_dict({'limits': {'max_file_reads': -3}})
