"""
Tests for YAML configuration, named tunings and logging setup.
"""
import logging

import pytest

from fretshapes.config import get_tuning, load_config, tuning_names
from fretshapes.errors import ConfigError
from fretshapes.fretboard import STANDARD_GUITAR
from fretshapes.logging_config import setup_logging


class TestLoadConfig:
    """Test loading the packaged and custom config files."""

    def test_packaged_defaults(self):
        config = load_config()
        assert "standard" in tuning_names(config)
        assert config["search"]["default_tuning"] == "standard"

    def test_custom_file(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("tunings:\n  fifths: [C3, G3, D4, A4]\n")
        fretboard = get_tuning("fifths", load_config(path))
        assert str(fretboard) == "C3 G3 D4 A4"

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")


class TestGetTuning:
    """Test building fretboards from named tunings."""

    def test_standard(self):
        assert get_tuning("standard") == STANDARD_GUITAR

    def test_default(self):
        assert get_tuning() == STANDARD_GUITAR

    def test_bass(self):
        assert get_tuning("bass").num_strings == 4

    def test_seven_string(self):
        assert str(get_tuning("seven_string").get_string(0)) == "B2"

    def test_unknown(self):
        with pytest.raises(ConfigError):
            get_tuning("banjo")

    def test_invalid_pitch(self):
        config = {"tunings": {"broken": ["E3", "X9"]}}
        with pytest.raises(ConfigError):
            get_tuning("broken", config)


class TestSetupLogging:
    """Test module log levels."""

    def test_override_level(self):
        setup_logging("DEBUG")
        assert logging.getLogger("fretshapes.search").level == logging.DEBUG
        setup_logging("WARNING")
        assert logging.getLogger("fretshapes.search").level == logging.WARNING

    def test_single_shared_handler(self):
        setup_logging()
        setup_logging("INFO")
        assert len(logging.getLogger("fretshapes").handlers) == 1
        assert logging.getLogger("fretshapes.search").handlers == []

    def test_module_defaults_without_override(self):
        setup_logging()
        assert logging.getLogger("fretshapes.cli").level == logging.INFO
        assert logging.getLogger("fretshapes.search").level == logging.WARNING

    def test_config_levels_are_applied(self):
        setup_logging(levels={"fretshapes.search": "debug"})
        assert logging.getLogger("fretshapes.search").level == logging.DEBUG
        assert logging.getLogger("fretshapes.cli").level == logging.INFO

    def test_packaged_config_keeps_cli_at_info(self):
        setup_logging(levels=load_config()["logging"]["levels"])
        assert logging.getLogger("fretshapes.cli").level == logging.INFO

    def test_override_wins_over_config_levels(self):
        setup_logging("ERROR", levels={"fretshapes.search": "DEBUG"})
        assert logging.getLogger("fretshapes.search").level == logging.ERROR
        assert logging.getLogger("fretshapes.cli").level == logging.ERROR

    def test_unknown_level(self):
        with pytest.raises(ConfigError):
            setup_logging("LOUD")
