import pytest

from chord_grid import ServiceConfig
from chord_grid.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


class TestServiceConfig:
    def test_defaults(self):
        config = ServiceConfig()
        assert config.base_url == DEFAULT_BASE_URL
        assert config.chord_model == "chord-cnn-lstm"
        assert config.beat_model == "auto"
        assert config.timeout == DEFAULT_TIMEOUT

    @pytest.mark.parametrize("base_url", ["http://host:8080", "http://host:8080/"])
    def test_endpoint_joins_slashes(self, base_url):
        config = ServiceConfig(base_url=base_url)
        assert config.endpoint("/api/detect-beats") == "http://host:8080/api/detect-beats"
        assert config.endpoint("api/detect-beats") == "http://host:8080/api/detect-beats"

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_rejects_non_positive_timeout(self, timeout):
        with pytest.raises(ValueError, match="timeout"):
            ServiceConfig(timeout=timeout)


class TestFromEnv:
    def test_empty_environment(self):
        assert ServiceConfig.from_env({}) == ServiceConfig()

    def test_overrides(self):
        config = ServiceConfig.from_env(
            {
                "CHORD_GRID_BASE_URL": "http://localhost:5000",
                "CHORD_GRID_CHORD_MODEL": "btc-sl",
                "CHORD_GRID_BEAT_MODEL": "beat-transformer",
                "CHORD_GRID_TIMEOUT": "30",
                "UNRELATED": "x",
            }
        )
        assert config == ServiceConfig("http://localhost:5000", "btc-sl", "beat-transformer", 30.0)

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("CHORD_GRID_TIMEOUT", "12.5")
        assert ServiceConfig.from_env().timeout == 12.5

    def test_invalid_timeout(self):
        with pytest.raises(ValueError):
            ServiceConfig.from_env({"CHORD_GRID_TIMEOUT": "soon"})
