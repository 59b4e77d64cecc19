"""
Unit Tests for Configuration Constants

Tests the configuration constants and enumerations.
"""

import pytest

from object_cache.core.config.constants import (
    CACHE_MISS,
    DEFAULT_GLOBAL_GROUPS,
    DEFAULT_GROUP,
    DEFAULT_NON_PERSISTENT_GROUPS,
    KEY_GROUP_SEPARATOR,
    REDIS_STATUS_OK,
    CacheBackend,
    CacheTier,
    Stage,
)


@pytest.mark.unit
class TestStageEnum:
    """Test logging stage identifiers."""

    def test_stage_values_are_unique(self):
        values = [stage.value for stage in Stage]
        assert len(values) == len(set(values))

    def test_stage_is_string_enum(self):
        assert Stage.FLUSH == "3.0_FLUSH"


@pytest.mark.unit
class TestCacheEnums:
    """Test tier and backend enumerations."""

    def test_tiers(self):
        assert {tier.value for tier in CacheTier} == {"local", "remote"}

    def test_backends_match_settings_literal(self):
        assert {backend.value for backend in CacheBackend} == {"redis", "none"}


@pytest.mark.unit
class TestKeyConstants:
    """Test key format and group constants."""

    def test_key_format(self):
        assert DEFAULT_GROUP == "default"
        assert KEY_GROUP_SEPARATOR == ":"

    def test_group_defaults_do_not_overlap(self):
        assert not set(DEFAULT_GLOBAL_GROUPS) & set(DEFAULT_NON_PERSISTENT_GROUPS)

    def test_miss_sentinel_and_status(self):
        assert CACHE_MISS is False
        assert REDIS_STATUS_OK == "OK"
