"""Tests for configuration models and logging setup."""

from decimal import Decimal

import pytest
import structlog
from pydantic import ValidationError

from ecg_export.core.config import DEFAULT_UPLOAD_ENDPOINT, Config, SamplingConfig, UploadConfig
from ecg_export.core.logging import configure_logging, get_logger, setup_logging


def test_defaults():
    config = Config()
    assert config.sampling.window == 5.0
    assert config.export.sample_rate == 500.0
    assert config.export.directory_name == "ECGExports"
    assert config.upload.endpoint == DEFAULT_UPLOAD_ENDPOINT
    assert config.upload.field_name == "file"
    assert config.payment.amount == Decimal("4.99")
    assert config.log_level == "INFO"


def test_create_default_with_endpoint():
    config = Config.create_default("https://sink.example.test/upload")
    assert config.upload.endpoint == "https://sink.example.test/upload"


def test_round_trip_through_dict():
    config = Config.create_default()
    assert Config.from_dict(config.to_dict()) == config


@pytest.mark.parametrize("kwargs", [{"window": 0}, {"window": -1.0}])
def test_sampling_window_must_be_positive(kwargs):
    with pytest.raises(ValidationError):
        SamplingConfig(**kwargs)


def test_endpoint_must_be_http():
    with pytest.raises(ValidationError):
        UploadConfig(endpoint="ftp://example.test/upload")


def test_log_level_is_validated_on_assignment():
    config = Config()
    with pytest.raises(ValidationError):
        config.log_level = "VERBOSE"


def test_logging_setup_produces_usable_logger():
    configure_logging("DEBUG", json_output=True)
    logger = get_logger("ecg_export.tests")
    logger.info("configured", value=1)
    structlog.reset_defaults()


def test_setup_logging_applies_config(monkeypatch):
    calls = []
    monkeypatch.setattr("ecg_export.core.logging.configure_logging",
                        lambda level, json_output: calls.append((level, json_output)))

    setup_logging(Config(log_level="WARNING", json_logs=True))
    assert calls == [("WARNING", True)]
