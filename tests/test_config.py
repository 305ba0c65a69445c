"""Tests for facet sampling configuration."""

import pytest

from secure_facets.config import (
    DEFAULT_SAMPLE_SIZE,
    ENV_MODE,
    ENV_RANDOM_SEED,
    ENV_SAMPLE_SIZE,
    FacetMode,
    SampleConfiguration,
)
from secure_facets.exceptions import ConfigurationError, FacetsError


class TestSampleConfiguration:
    """Tests for direct construction and validation."""

    def test_defaults(self):
        config = SampleConfiguration()

        assert config.sample_size == DEFAULT_SAMPLE_SIZE
        assert config.mode is FacetMode.STATISTICAL
        assert isinstance(config.random_seed, int)

    def test_generated_seed_is_logged(self, caplog):
        """A directly built configuration logs the seed it picked."""
        with caplog.at_level("INFO", logger="secure_facets"):
            config = SampleConfiguration(sample_size=10)

        assert f"No random seed configured, using {config.random_seed}" in caplog.text

    def test_explicit_seed_not_logged(self, caplog):
        with caplog.at_level("INFO", logger="secure_facets"):
            config = SampleConfiguration(random_seed=0)

        assert config.random_seed == 0
        assert "No random seed configured" not in caplog.text

    @pytest.mark.parametrize("sample_size", [0, -5])
    def test_non_positive_sample_size_rejected(self, sample_size):
        with pytest.raises(ConfigurationError) as exc_info:
            SampleConfiguration(sample_size=sample_size, random_seed=1)

        assert exc_info.value.field == "sample_size"
        assert isinstance(exc_info.value, FacetsError)
        assert exc_info.value.details["value"] == str(sample_size)

    def test_non_integer_sample_size_rejected(self):
        with pytest.raises(ConfigurationError):
            SampleConfiguration(sample_size=True, random_seed=1)

    def test_to_dict(self):
        config = SampleConfiguration(sample_size=10, random_seed=3, mode=FacetMode.SECURE)
        assert config.to_dict() == {"mode": "secure", "sample_size": 10, "random_seed": 3}


class TestFacetMode:
    def test_parse_case_insensitive(self):
        assert FacetMode.parse(" Statistical ") is FacetMode.STATISTICAL

    def test_parse_unknown(self):
        with pytest.raises(ConfigurationError, match="mode"):
            FacetMode.parse("approximate")


class TestFromDict:
    def test_all_values(self):
        config = SampleConfiguration.from_dict(
            {"mode": "insecure", "sample_size": "250", "random_seed": -7}
        )

        assert config.mode is FacetMode.INSECURE
        assert config.sample_size == 250
        assert config.random_seed == -7

    def test_missing_seed_is_generated(self, caplog):
        with caplog.at_level("INFO", logger="secure_facets"):
            config = SampleConfiguration.from_dict({"sample_size": 10})

        assert isinstance(config.random_seed, int)
        assert "No random seed configured" in caplog.text

    def test_unparsable_value(self):
        with pytest.raises(ConfigurationError, match="random_seed"):
            SampleConfiguration.from_dict({"random_seed": "abc"})


class TestFromEnv:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_MODE, "secure")
        monkeypatch.setenv(ENV_SAMPLE_SIZE, "500")
        monkeypatch.setenv(ENV_RANDOM_SEED, "42")

        config = SampleConfiguration.from_env()

        assert config == SampleConfiguration(
            sample_size=500, random_seed=42, mode=FacetMode.SECURE
        )

    def test_defaults_when_unset(self, monkeypatch):
        monkeypatch.delenv(ENV_MODE, raising=False)
        monkeypatch.delenv(ENV_SAMPLE_SIZE, raising=False)
        monkeypatch.setenv(ENV_RANDOM_SEED, "1")

        config = SampleConfiguration.from_env()

        assert config.sample_size == DEFAULT_SAMPLE_SIZE
        assert config.mode is FacetMode.STATISTICAL

    def test_invalid_sample_size(self, monkeypatch):
        monkeypatch.setenv(ENV_SAMPLE_SIZE, "0")

        with pytest.raises(ConfigurationError, match="sample_size"):
            SampleConfiguration.from_env()


class TestFromYaml:
    def test_reads_facets_section(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text(
            "facets:\n  mode: statistical\n  sample_size: 200\n  random_seed: 9\n"
        )

        config = SampleConfiguration.from_yaml(settings)

        assert config == SampleConfiguration(sample_size=200, random_seed=9)

    def test_missing_file_gives_defaults(self, tmp_path):
        config = SampleConfiguration.from_yaml(tmp_path / "absent.yaml")
        assert config.sample_size == DEFAULT_SAMPLE_SIZE

    def test_missing_section_gives_defaults(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("identity:\n  user_id: alice\n")

        assert SampleConfiguration.from_yaml(settings).sample_size == DEFAULT_SAMPLE_SIZE

    def test_invalid_yaml(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("facets: [unclosed\n")

        with pytest.raises(ConfigurationError, match="invalid YAML"):
            SampleConfiguration.from_yaml(settings)

    def test_section_must_be_mapping(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("facets:\n  - 1\n  - 2\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            SampleConfiguration.from_yaml(settings)
