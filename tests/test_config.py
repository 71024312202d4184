"""Tests for AppConfig and how it reaches the app."""

import time
from dataclasses import FrozenInstanceError

import pytest

from skillshare.app import create_app
from skillshare.config import AppConfig
from skillshare.testing import TestClient


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.static_dir == "public"
        assert config.max_wait is None
        assert config.log_level == "info"

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(FrozenInstanceError):
            config.port = 1  # type: ignore[misc]


class TestMaxWait:
    async def test_max_wait_caps_requested_wait(self) -> None:
        app = create_app(AppConfig(static_dir=None, max_wait=0))
        async with TestClient(app) as client:
            start = time.monotonic()
            response = await client.get(
                "/talks", headers={"If-None-Match": '"0"', "Prefer": "wait=30"}
            )
            assert response.status == 304
            assert time.monotonic() - start < 1.0
