"""Tests for the wndb-grind command line."""

from pathlib import Path

import pytest

from wndb_grinder.cli import create_parser, main

FIXTURES = Path(__file__).parent / "fixtures"
SOURCE = str(FIXTURES / "minimal.xml")


class TestParser:
    def test_grind_arguments(self):
        args = create_parser().parse_args([
            "grind", "-s", "wn.xml", "-o", "out",
            "--compat", "pointer", "--compat", "lexid", "--no-reindex",
        ])
        assert args.command == "grind"
        assert args.source == Path("wn.xml")
        assert args.output == Path("out")
        assert args.compat == ["pointer", "lexid"]
        assert args.no_reindex

    def test_unknown_compat_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["grind", "--compat", "frames"])

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out


class TestGrindCommand:
    def test_grind(self, tmp_path, capsys):
        out = tmp_path / "wndb"
        assert main(["grind", "-s", SOURCE, "-o", str(out)]) == 0
        assert (out / "data.noun").exists()
        assert (out / "index.sense").read_text(encoding="utf-8").count("\n") == 4
        assert "data.noun" in capsys.readouterr().out

    def test_grind_from_config(self, tmp_path):
        """Configuration files supply the source and output."""
        config = tmp_path / "grind.yaml"
        config.write_text(
            f"source: {SOURCE}\noutput: db\ncompat: [pointer]\n", encoding="utf-8",
        )
        assert main(["grind", "-c", str(config)]) == 0
        assert (tmp_path / "db" / "data.verb").exists()

    def test_missing_source(self, capsys):
        assert main(["grind"]) == 1
        assert "No source" in capsys.readouterr().err

    def test_source_not_found(self, tmp_path, capsys):
        assert main(["grind", "-s", str(tmp_path / "none.xml"), "-o", str(tmp_path)]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_bad_config(self, tmp_path, capsys):
        config = tmp_path / "grind.yaml"
        config.write_text("colour: blue\n", encoding="utf-8")
        assert main(["grind", "-c", str(config)]) == 1
        assert "[CONFIG ERROR]" in capsys.readouterr().err


class TestOffsetsCommand:
    def test_offsets(self, tmp_path):
        assert main(["offsets", "-s", SOURCE, "-o", str(tmp_path)]) == 0
        lines = (tmp_path / "offsets.map").read_text(encoding="utf-8").splitlines()
        assert lines == [
            "oewn-00000001-n 1740",
            "oewn-00000002-n 1806",
            "oewn-00000003-v 1740",
        ]


class TestLineCommand:
    def test_line(self, capsys):
        assert main(["line", "oewn-00000002-n", "-s", SOURCE, "--header", "princeton"]) == 0
        assert capsys.readouterr().out == (
            "00001806 06 n 02 car 0 auto 0 001 @ 00001740 n 0000 | a motor vehicle  \n"
        )

    def test_unknown_synset(self, capsys):
        assert main(["line", "oewn-missing", "-s", SOURCE]) == 1
        assert "No synset" in capsys.readouterr().err
