"""Tests for settings, weight configuration, exceptions and logging."""

import io
import json

import pytest
import structlog

from aeo_audit.config import Settings, get_settings
from aeo_audit.exceptions import (
    AnalyzerError,
    AuditError,
    InvalidInputError,
    WeightConfigurationError,
)
from aeo_audit.logging import audit_context, get_logger, setup_logging
from aeo_audit.scoring.models import Category
from aeo_audit.scoring.weights import WeightConfig


class TestWeightConfig:
    """Tests for WeightConfig validation."""

    def test_defaults(self):
        """Test default weights sum to 100."""
        weights = WeightConfig()

        assert weights.as_dict() == {
            "discoverability": 20,
            "structured_data": 25,
            "llm_formatting": 25,
            "accessibility": 15,
            "readability": 15,
        }
        assert sum(weights.as_dict().values()) == 100

    def test_weight_for_category(self):
        """Test weight lookup by report category."""
        weights = WeightConfig()

        assert weights.weight_for(Category.STRUCTURED_DATA) == 25
        assert weights.weight_for(Category.READABILITY) == 15

    def test_bad_total_rejected(self):
        """Test weights that do not sum to 100 raise."""
        with pytest.raises(WeightConfigurationError) as exc_info:
            WeightConfig(discoverability=30)

        assert "got 110" in exc_info.value.message
        assert exc_info.value.details["weights"]["discoverability"] == 30

    def test_negative_weight_rejected(self):
        """Test negative weights raise even when the total is 100."""
        with pytest.raises(WeightConfigurationError, match="non-negative"):
            WeightConfig(discoverability=-5, readability=40)

    def test_zero_weight_allowed(self):
        """Test a category can be switched off with weight 0."""
        weights = WeightConfig(discoverability=0, readability=35)

        assert weights.discoverability == 0


class TestSettings:
    """Tests for Settings."""

    def test_test_environment(self):
        """Test the suite runs with AEO_ENV=test."""
        settings = get_settings()

        assert settings.is_test is True
        assert settings.is_production is False

    def test_weights_from_environment(self, monkeypatch):
        """Test category weights are read from AEO_* variables."""
        monkeypatch.setenv("AEO_WEIGHT_DISCOVERABILITY", "30")
        monkeypatch.setenv("AEO_WEIGHT_READABILITY", "5")

        weights = Settings().weight_config()

        assert weights.discoverability == 30
        assert weights.readability == 5

    def test_invalid_weights_from_environment(self, monkeypatch):
        """Test a bad weight mix fails when the configuration is built."""
        monkeypatch.setenv("AEO_WEIGHT_ACCESSIBILITY", "50")

        with pytest.raises(WeightConfigurationError):
            Settings().weight_config()

    def test_get_settings_cached(self):
        """Test get_settings returns one instance."""
        assert get_settings() is get_settings()


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_all_derive_from_audit_error(self):
        """Test every engine error can be caught as AuditError."""
        errors = [
            InvalidInputError("bad", field="url"),
            WeightConfigurationError("bad"),
            AnalyzerError("readability", "boom"),
        ]

        assert all(isinstance(e, AuditError) for e in errors)

    def test_analyzer_error(self):
        """Test AnalyzerError carries its category."""
        error = AnalyzerError("accessibility", "analysis timed out")

        assert error.category == "accessibility"
        assert error.code == "analyzer_error"
        assert str(error) == "accessibility: analysis timed out"


class TestLogging:
    """Tests for structlog setup."""

    def test_setup_logging(self):
        """Test logging configures without error and yields a logger."""
        try:
            setup_logging()
            logger = get_logger("aeo_audit.test")
            logger.info("test_event", value=1)

            assert structlog.is_configured()
        finally:
            structlog.reset_defaults()

    def test_audit_context_binds_url(self):
        """Test log lines inside an audit carry the audited URL."""
        stream = io.StringIO()
        try:
            setup_logging(Settings(env="production"), stream=stream)
            logger = get_logger("aeo_audit.test")
            with audit_context("https://example.com/page"):
                logger.info("inside_audit")
            logger.info("outside_audit")

            inside, outside = (json.loads(line) for line in stream.getvalue().splitlines())
            assert inside["event"] == "inside_audit"
            assert inside["audit_url"] == "https://example.com/page"
            assert "audit_url" not in outside
        finally:
            structlog.reset_defaults()
