"""Tests for the YAML grind configuration."""

from pathlib import Path

import pytest

from wndb_grinder import ConfigError, Flags, GrindConfig, load_config
from wndb_grinder.formatter import OEWN_HEADER, PRINCETON_HEADER


class TestDefaults:
    def test_defaults(self):
        config = GrindConfig()
        assert config.source is None
        assert config.output == Path("wndb")
        assert config.flags == Flags.NONE
        assert config.header_text == OEWN_HEADER
        assert config.upper_case_first
        assert not config.verbose

    def test_empty_yaml(self):
        assert load_config("") == GrindConfig()


class TestLoadConfig:
    def test_from_dict(self):
        config = load_config({
            "source": "/data/english-wordnet.xml",
            "compat": ["pointer", "lexid"],
            "reindex": False,
        })
        assert config.source == Path("/data/english-wordnet.xml")
        assert config.flags == Flags.POINTER_COMPAT | Flags.LEXID_COMPAT | Flags.NO_REINDEX

    def test_from_yaml_string(self):
        config = load_config("source: wn.xml\nheader: princeton\nlexicon: oewn\n")
        assert config.source == Path("wn.xml")
        assert config.lexicon == "oewn"
        assert config.header_text == PRINCETON_HEADER

    def test_from_file_resolves_relative_paths(self, tmp_path):
        """Relative paths are taken from the configuration file's directory."""
        path = tmp_path / "grind.yaml"
        path.write_text(
            "source: data/wn.xml\n"
            "output: out\n"
            "legacy_order: /srv/order.txt\n"
            "compat: verbframe\n"
            "upper_case_first: false\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.source == tmp_path / "data" / "wn.xml"
        assert config.output == tmp_path / "out"
        assert config.legacy_order == Path("/srv/order.txt")
        assert config.compat == ("verbframe",)
        assert config.flags == Flags.VERBFRAME_COMPAT
        assert not config.upper_case_first

    def test_from_str_path(self, tmp_path):
        path = tmp_path / "grind.yaml"
        path.write_text("verbose: true\n", encoding="utf-8")
        assert load_config(str(path)).verbose

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")


class TestInvalidConfig:
    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown configuration keys: colour"):
            load_config({"colour": "blue"})

    def test_unknown_compat(self):
        with pytest.raises(ConfigError, match="Unknown compat flag"):
            load_config({"compat": ["frames"]})

    def test_compat_not_a_list(self):
        with pytest.raises(ConfigError, match="compat"):
            load_config({"compat": 3})

    def test_unknown_header(self):
        with pytest.raises(ConfigError, match="header"):
            load_config({"header": "gpl"})

    def test_not_a_bool(self):
        with pytest.raises(ConfigError, match="reindex"):
            load_config('reindex: "no"\n')

    def test_not_a_path(self):
        with pytest.raises(ConfigError, match="source"):
            load_config({"source": 12})

    def test_lexicon_not_a_string(self):
        with pytest.raises(ConfigError, match="lexicon"):
            load_config({"lexicon": 3})

    def test_invalid_yaml(self):
        """YAML syntax errors report the line."""
        with pytest.raises(ConfigError, match="Invalid YAML") as exc:
            load_config("header: oewn\nsource: [unclosed\n")
        assert exc.value.line is not None

    def test_root_not_mapping(self):
        with pytest.raises(ConfigError, match="mapping"):
            load_config("- a\n- b\n")
