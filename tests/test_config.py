"""Tests for glint.config — AppConfig frozen dataclass."""

import pytest

from glint.config import AppConfig


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()

        assert cfg.host == "127.0.0.1"
        assert cfg.port == 8000
        assert cfg.debug is False
        assert cfg.workers == 1
        assert cfg.log_level == "info"
        assert cfg.autoescape is True
        assert cfg.push_interval == 1.0
        assert cfg.update_prefix == "/update"
        assert cfg.stream_prefix == "/sse"

    def test_override(self) -> None:
        cfg = AppConfig(host="0.0.0.0", port=3000, debug=True, push_interval=0.25)

        assert cfg.host == "0.0.0.0"
        assert cfg.port == 3000
        assert cfg.debug is True
        assert cfg.push_interval == 0.25

    def test_frozen(self) -> None:
        cfg = AppConfig()

        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]

    @pytest.mark.parametrize("interval", [0, -1.0])
    def test_push_interval_must_be_positive(self, interval: float) -> None:
        with pytest.raises(ValueError, match="push_interval"):
            AppConfig(push_interval=interval)
