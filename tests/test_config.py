"""Tests for ContextVar-based scan configuration."""

from threading import Thread

import pytest

from delimit import (
    ConfigError,
    RegionReplacer,
    ScanConfig,
    WindowOverflowError,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from delimit.config import DEFAULT_READ_SIZE
from delimit.delimiters import Delimiter

PARENS = [Delimiter(b"(", b")")]


class TestScanConfigDataclass:
    """ScanConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ScanConfig()
        assert config.read_size == DEFAULT_READ_SIZE == 4096
        assert config.max_window is None

    def test_immutability(self) -> None:
        config = ScanConfig()
        with pytest.raises(AttributeError):
            config.read_size = 1  # type: ignore[misc]

    def test_custom_values(self) -> None:
        config = ScanConfig(read_size=64, max_window=1024)
        assert config.read_size == 64
        assert config.max_window == 1024

    def test_max_window_must_be_positive(self) -> None:
        with pytest.raises(ConfigError, match="max_window"):
            ScanConfig(max_window=0)


class TestFromDict:
    """ScanConfig.from_dict filtering."""

    def test_known_keys(self) -> None:
        config = ScanConfig.from_dict({"read_size": 512, "max_window": 2048})
        assert config == ScanConfig(read_size=512, max_window=2048)

    def test_unknown_keys_ignored(self) -> None:
        config = ScanConfig.from_dict({"read_size": 512, "verbose": True})
        assert config.read_size == 512

    def test_empty_dict_gives_defaults(self) -> None:
        assert ScanConfig.from_dict({}) == ScanConfig()

    def test_invalid_values_still_validated(self) -> None:
        with pytest.raises(ConfigError):
            ScanConfig.from_dict({"read_size": 0})


class TestContextVarFunctions:
    """get/set/reset and the context manager."""

    def test_default_config(self) -> None:
        reset_scan_config()
        assert get_scan_config() == ScanConfig()

    def test_set_and_reset(self) -> None:
        try:
            set_scan_config(ScanConfig(read_size=7))
            assert get_scan_config().read_size == 7
        finally:
            reset_scan_config()
        assert get_scan_config().read_size == DEFAULT_READ_SIZE

    def test_context_manager_restores(self) -> None:
        with scan_config_context(ScanConfig(read_size=3)):
            assert get_scan_config().read_size == 3
        assert get_scan_config().read_size == DEFAULT_READ_SIZE

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with scan_config_context(ScanConfig(read_size=3)):
                raise RuntimeError("boom")
        assert get_scan_config().read_size == DEFAULT_READ_SIZE

    def test_thread_isolation(self) -> None:
        """Each thread sees the config it set; the caller's is untouched."""
        results: dict[int, int] = {}

        def worker(thread_id: int, read_size: int) -> None:
            set_scan_config(ScanConfig(read_size=read_size))
            results[thread_id] = get_scan_config().read_size

        threads = [Thread(target=worker, args=(i, 10 + i)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {0: 10, 1: 11, 2: 12, 3: 13}
        assert get_scan_config().read_size == DEFAULT_READ_SIZE


class TestEngineConfig:
    """How engines pick up configuration."""

    def test_engine_captures_context_at_construction(self) -> None:
        with scan_config_context(ScanConfig(max_window=2)):
            engine = RegionReplacer.from_bytes(b"(abc)", PARENS)

        with pytest.raises(WindowOverflowError):
            engine.replace(b"X", lambda chunk, at_end: None)

    def test_explicit_config_overrides_context(self) -> None:
        out: list[bytes] = []
        with scan_config_context(ScanConfig(max_window=2)):
            engine = RegionReplacer.from_bytes(b"(abc)", PARENS, config=ScanConfig())
            engine.replace(b"X", lambda chunk, at_end: out.append(chunk))
        assert b"".join(out) == b"X"
