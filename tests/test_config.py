import pytest

from config import CONFIG_ENV_VAR, ConfigurationManager, get_config
from invoice_fields.extractors import DEFAULT_SCORING_WEIGHTS, load_scoring_weights
from invoice_fields.utils.exceptions import ConfigurationError


def write_config(tmp_path, body):
    path = tmp_path / "settings.yaml"
    path.write_text(body, encoding="utf-8")
    return str(path)


def test_default_settings():
    assert get_config("extraction.date.header_lines") == 15
    assert get_config("extraction.tax.max_rate_percent") == 50
    assert get_config("evaluation.partial_match_threshold") == 0.8
    assert get_config("no.such.key", "fallback") == "fallback"


def test_singleton():
    assert ConfigurationManager() is ConfigurationManager()


def test_custom_file_layers_over_defaults(tmp_path):
    ConfigurationManager(write_config(tmp_path, "extraction:\n  date:\n    header_lines: 3\n"))
    assert get_config("extraction.date.header_lines") == 3
    assert get_config("extraction.date.max_year") == 2100
    assert get_config("extraction.tax.max_rate_percent") == 50


def test_custom_file_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, write_config(tmp_path, "processing:\n  text_cache:\n    ttl_seconds: 5\n"))
    assert get_config("processing.text_cache.ttl_seconds") == 5
    assert get_config("processing.text_cache.max_entries") == 256


def test_get_section_is_a_copy():
    section = ConfigurationManager().get_section("extraction.scoring")
    section['strong_label'] = 0
    assert get_config("extraction.scoring.strong_label") == 10.0
    assert ConfigurationManager().get_section("extraction.date.header_lines") == {}


def test_default_weights_match_settings():
    assert load_scoring_weights() == DEFAULT_SCORING_WEIGHTS


def test_weight_override(tmp_path):
    ConfigurationManager(write_config(
        tmp_path, "extraction:\n  scoring:\n    leading_total: 7\n    unknown_weight: 3\n"
    ))
    weights = load_scoring_weights()
    assert weights['leading_total'] == 7.0
    assert weights['strong_label'] == 10.0
    assert 'unknown_weight' not in weights


def test_non_numeric_weight(tmp_path):
    ConfigurationManager(write_config(tmp_path, "extraction:\n  scoring:\n    strong_label: high\n"))
    with pytest.raises(ConfigurationError) as excinfo:
        load_scoring_weights()
    assert excinfo.value.details['key'] == "extraction.scoring.strong_label"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigurationManager(str(tmp_path / "absent.yaml"))


def test_relative_paths_resolved():
    assert get_config("paths.output_dir").endswith("outputs")
    assert get_config("paths.output_dir") != "outputs"
