"""
Pytest fixtures for the Technicians Business tests.

Provides a fixed AppConfig, a small hand-made record set, and TestClients
for an anonymous visitor, an admin and a read-only user. Every ``app``
fixture builds a fresh app, so each test starts from an untouched store.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient  # noqa: E402

import api.app as app_module  # noqa: E402
from api.app import create_app  # noqa: E402
from records.models import Record  # noqa: E402
from utils.config import AppConfig  # noqa: E402

ADMIN_COOKIES = {"auth": "true", "user": "admin"}
VIEWER_COOKIES = {"auth": "true", "user": "viewer"}


def make_config(**overrides) -> AppConfig:
    """AppConfig with deterministic test values, independent of the environment."""
    cfg = AppConfig()
    cfg.admin_users = ["admin"]
    cfg.readonly_users = ["viewer"]
    cfg.login_password = "secret"
    cfg.session_max_age = 3600
    cfg.seed_path = None
    cfg.chart_cache_ttl = 60.0
    cfg.rate_limit_login = 10
    cfg.rate_limit_default = 1000
    cfg.trusted_proxies = set()
    cfg.cors_origins = ["*"]
    cfg.log_format = "text"
    for key, value in overrides.items():
        setattr(cfg, key, value)
    return cfg


def make_record(record_id: int, **fields) -> Record:
    return Record(id=record_id, **fields)


@pytest.fixture(autouse=True)
def reset_rate_counters():
    """Clear rate-limit counters between tests for isolation."""
    app_module._rate_counters.clear()
    yield
    app_module._rate_counters.clear()


@pytest.fixture
def config() -> AppConfig:
    return make_config()


@pytest.fixture
def sample_records() -> list[Record]:
    """Five records covering two months, three services and a loss."""
    return [
        make_record(1, name="Anna", date="2024-01-01", place="Warsaw",
                    service_type="A", income=100, cost=40, hours=2,
                    status="Done", confirms=["room", "office"]),
        make_record(2, name="Piotr", date="2024-01-01", place="Krakow",
                    service_type="B", income=50, cost=10, hours=1,
                    status="Done", confirms=["room"]),
        make_record(3, name="Anna", date="2024-01-02", place="Warsaw",
                    service_type="A", income=20, cost=None, hours=None,
                    notes="Follow-up visit"),
        make_record(4, name="Ewa", date="2024-02-01", place="Poznan",
                    service_type="A", income=300, cost=100, hours=4,
                    status="Invoiced"),
        make_record(5, name="Piotr", date="2024-02-03", place="Krakow",
                    service_type="C", income=30, cost=80, hours=1.5,
                    notes="Warranty, ran at a loss", confirms=["office"]),
    ]


@pytest.fixture
def app(config, sample_records):
    return create_app(config=config, records_seed=sample_records)


@pytest.fixture
def client(app):
    """Anonymous visitor; redirects are not followed."""
    return TestClient(app, raise_server_exceptions=False, follow_redirects=False)


@pytest.fixture
def admin_client(app):
    return TestClient(
        app, raise_server_exceptions=False, follow_redirects=False,
        cookies=ADMIN_COOKIES,
    )


@pytest.fixture
def viewer_client(app):
    return TestClient(
        app, raise_server_exceptions=False, follow_redirects=False,
        cookies=VIEWER_COOKIES,
    )
