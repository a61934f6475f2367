"""Configuration exports."""

from sarifbridge.config.loader import DEFAULT_CONFIG_PATH, load_app_config
from sarifbridge.config.models import (
    AppConfig,
    BitbucketCredentials,
    BitbucketTarget,
    DeliveryConfig,
    ReportPolicy,
)

__all__ = [
    "AppConfig",
    "BitbucketCredentials",
    "BitbucketTarget",
    "DEFAULT_CONFIG_PATH",
    "DeliveryConfig",
    "ReportPolicy",
    "load_app_config",
]
