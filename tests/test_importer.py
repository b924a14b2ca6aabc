"""Tests for building models from WN-LMF resources."""

from pathlib import Path

import pytest

from wndb_grinder import DataImportError, Grinder, build_model, load_lmf
from wndb_grinder.importer import sense_key_from_id

FIXTURES = Path(__file__).parent / "fixtures"


def _resource(*lexicons):
    return {"lmf_version": "1.1", "lexicons": list(lexicons)}


def _lexicon(lexicon_id="oewn"):
    return {
        "id": lexicon_id,
        "entries": [
            {
                "id": f"{lexicon_id}-fast-a",
                "lemma": {"writtenForm": "fast", "partOfSpeech": "s"},
                "forms": [{"writtenForm": "faster"}],
                "senses": [
                    {
                        "id": f"{lexicon_id}-fast__5.00.00.quick.00",
                        "synset": f"{lexicon_id}-00000002-s",
                        "adjposition": "ip",
                        "counts": [{"value": 7}],
                        "relations": [
                            {"relType": "antonym", "target": f"{lexicon_id}-slow__3.00.00.."},
                        ],
                    },
                ],
            },
            {
                "id": f"{lexicon_id}-slow-a",
                "lemma": {"writtenForm": "slow", "partOfSpeech": "a"},
                "senses": [
                    {
                        "id": f"{lexicon_id}-slow__3.00.00..",
                        "synset": f"{lexicon_id}-00000001-a",
                        "meta": {"identifier": "slow%3:00:00::"},
                    },
                ],
            },
        ],
        "synsets": [
            {
                "id": f"{lexicon_id}-00000002-s",
                "partOfSpeech": "s",
                "lexfile": "adj.all",
                "definitions": [{"text": "acting quickly"}],
                "examples": [{"text": "a fast car"}],
                "relations": [{"relType": "similar", "target": f"{lexicon_id}-00000001-a"}],
            },
            {
                "id": f"{lexicon_id}-00000001-a",
                "partOfSpeech": "a",
                "lexfile": "adj.all",
                "members": [f"{lexicon_id}-slow__3.00.00.."],
                "definitions": [{"text": "not moving quickly"}],
            },
        ],
    }


class TestSenseKeyFromId:
    def test_plain(self):
        assert sense_key_from_id("oewn-car__1.06.00..", "oewn") == "car%1:06:00::"

    def test_satellite(self):
        assert sense_key_from_id("oewn-fast__5.00.00.quick.00", "oewn") == (
            "fast%5:00:00:quick:00"
        )

    def test_escapes(self):
        """Escaped characters are restored in the lemma."""
        assert sense_key_from_id("oewn-o-ap-clock__4.02.00..", "oewn") == "o'clock%4:02:00::"
        assert sense_key_from_id("oewn-ice-sp-cream__1.13.00..", "oewn") == (
            "ice_cream%1:13:00::"
        )

    def test_not_a_sense_key_id(self):
        assert sense_key_from_id("oewn-car-n-1", "oewn") == "car-n-1"


class TestBuildModel:
    def test_synsets_sorted_by_id(self):
        model = build_model(_resource(_lexicon()))
        assert [s.synset_id for s in model.synsets] == ["oewn-00000001-a", "oewn-00000002-s"]

    def test_members_from_entries(self):
        """Without a members list, members follow the entries."""
        model = build_model(_resource(_lexicon()))
        assert model.synsets_by_id["oewn-00000002-s"].members == ("fast",)
        assert model.synsets_by_id["oewn-00000001-a"].members == ("slow",)

    def test_senses(self):
        model = build_model(_resource(_lexicon()))
        fast = model.senses_by_id["fast%5:00:00:quick:00"]
        assert fast.type == "s"
        assert fast.partition == "a"
        assert fast.adj_position == "ip"
        assert fast.tag_count == 7
        assert fast.relations == {"antonym": ("slow%3:00:00::",)}

    def test_identifier_meta_is_sense_key(self):
        model = build_model(_resource(_lexicon()))
        assert "slow%3:00:00::" in model.senses_by_id
        assert model.senses_by_id["slow%3:00:00::"].tag_count is None

    def test_synset_content(self):
        model = build_model(_resource(_lexicon()))
        fast = model.synsets_by_id["oewn-00000002-s"]
        assert fast.lexfile == "adj.all"
        assert fast.definitions == ("acting quickly",)
        assert fast.examples == ("a fast car",)
        assert fast.relations == {"similar": ("oewn-00000001-a",)}

    def test_forms(self):
        model = build_model(_resource(_lexicon()))
        assert [lex.forms for lex in model.lexes] == [("faster",), ()]

    def test_select_lexicon(self):
        model = build_model(_resource(_lexicon("a"), _lexicon("b")), "b")
        assert model.synsets[0].synset_id == "b-00000001-a"

    def test_unknown_lexicon(self):
        with pytest.raises(DataImportError, match="Lexicon not found"):
            build_model(_resource(_lexicon()), "pwn")

    def test_no_lexicon(self):
        with pytest.raises(DataImportError):
            build_model(_resource())

    def test_model_grinds(self, tmp_path):
        """An imported model grinds into a full database."""
        model = build_model(_resource(_lexicon()))
        counts = Grinder(model).grind(tmp_path)
        assert counts["data.adj"] == 2
        assert counts["index.adj"] == 2
        assert (tmp_path / "adj.exc").read_text(encoding="utf-8") == "faster fast\n"


class TestLoadLmf:
    def test_load(self, expected_lines):
        """The XML fixture grinds to the same lines as the hand-built model."""
        model = load_lmf(FIXTURES / "minimal.xml")
        grinder = Grinder(model, header="")
        assert grinder.line("oewn-00000001-n") == expected_lines["ss-vehicle"]
        assert grinder.line("oewn-00000002-n") == expected_lines["ss-car"]
        assert grinder.line("oewn-00000003-v") == expected_lines["ss-drive"]

    def test_frames(self):
        model = load_lmf(FIXTURES / "minimal.xml")
        assert [vf.frame_id for vf in model.verb_frames] == ["via", "vtai"]
        assert model.senses_by_id["drive%2:38:00::"].verb_frames == ("via", "vtai")

    def test_sense_to_synset_relation_skipped(self):
        model = load_lmf(FIXTURES / "minimal.xml")
        assert model.senses_by_id["auto%1:06:00::"].relations == {}

    def test_no_progress_bar(self, monkeypatch):
        """Loading never draws a progress bar on stderr."""
        import wn.lmf

        calls = []
        real_load = wn.lmf.load

        def load(source, **kwargs):
            calls.append(kwargs)
            return real_load(source, **kwargs)

        monkeypatch.setattr(wn.lmf, "load", load)
        load_lmf(FIXTURES / "minimal.xml")
        assert calls == [{"progress_handler": None}]

    def test_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            load_lmf("/nonexistent/path.xml")

    def test_invalid_xml(self, tmp_path):
        """Malformed XML raises DataImportError."""
        path = tmp_path / "broken.xml"
        path.write_text("<not valid xml", encoding="utf-8")
        with pytest.raises(DataImportError):
            load_lmf(path)
