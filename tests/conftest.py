"""Root test configuration."""

import logging

import pytest
import structlog

from servicelink.matching import MatchingConfig, ServiceSource, build_normalized_record


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def incident_records():
    """Three PagerDuty services."""
    return [
        build_normalized_record(
            "Authentication Service", "Platform Team", "P001", ServiceSource.INCIDENT
        ),
        build_normalized_record("Payment Gateway", "Payments Team", "P002", ServiceSource.INCIDENT),
        build_normalized_record(
            "Notification Worker", "Messaging Team", "P003", ServiceSource.INCIDENT
        ),
    ]


@pytest.fixture
def catalog_records():
    """Three Backstage components, one per PagerDuty service."""
    return [
        build_normalized_record(
            "authentication-service",
            "platform-team",
            "component:default/authentication-service",
            ServiceSource.CATALOG,
        ),
        build_normalized_record(
            "payment-gateway",
            "payments-team",
            "component:default/payment-gateway",
            ServiceSource.CATALOG,
        ),
        build_normalized_record(
            "notification-worker",
            "messaging-team",
            "component:default/notification-worker",
            ServiceSource.CATALOG,
        ),
    ]


@pytest.fixture
def default_config():
    """Matching config with the default threshold."""
    return MatchingConfig(threshold=80)
