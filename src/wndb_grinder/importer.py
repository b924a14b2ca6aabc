"""Build a grinder model from a WN-LMF lexical resource."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from wndb_grinder.exceptions import DataImportError
from wndb_grinder.models import LexicalUnit, Model, Sense, Synset, VerbFrame

logger = logging.getLogger(__name__)

# Escapes used in OEWN sense ids, applied to the lemma part of the key.
SENSE_ID_ESCAPES = (
    ("-ap-", "'"),
    ("-sl-", "/"),
    ("-ex-", "!"),
    ("-cm-", ","),
    ("-cl-", ":"),
    ("-pl-", "+"),
    ("-lb-", "("),
    ("-rb-", ")"),
    ("-sp-", "_"),
)


def load_lmf(source: str | Path, lexicon_id: str | None = None) -> Model:
    """Load a WN-LMF XML file and build the model of one of its lexicons."""
    import wn.lmf

    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"File not found: {source}")

    try:
        resource = wn.lmf.load(str(source), progress_handler=None)
    except Exception as e:
        raise DataImportError(f"Failed to parse XML: {e}") from e

    return build_model(resource, lexicon_id)  # type: ignore[arg-type]


def build_model(resource: dict, lexicon_id: str | None = None) -> Model:
    """Build the model of a lexicon of a loaded LexicalResource dict."""
    lexicons = resource.get("lexicons", [])
    if not lexicons:
        raise DataImportError("Resource has no lexicon")
    if lexicon_id is None:
        lex = lexicons[0]
    else:
        matches = [lx for lx in lexicons if lx.get("id") == lexicon_id]
        if not matches:
            raise DataImportError(f"Lexicon not found: {lexicon_id}")
        lex = matches[0]
    model = _ModelBuilder(lex).build()
    logger.info("Loaded %s: %r", lex.get("id"), model)
    return model


def sense_key_from_id(sense_id: str, lexicon_id: str) -> str:
    """Recover a sense key from an OEWN-style sense id.

    >>> sense_key_from_id("oewn-car__1.06.00..", "oewn")
    'car%1:06:00::'
    """
    prefix = f"{lexicon_id}-"
    if sense_id.startswith(prefix):
        sense_id = sense_id[len(prefix):]
    lemma, sep, tail = sense_id.partition("__")
    if not sep:
        return sense_id
    tail = tail.replace(".", ":")
    for escaped, char in SENSE_ID_ESCAPES:
        lemma = lemma.replace(escaped, char)
        tail = tail.replace(escaped, char)
    return f"{lemma}%{tail}"


def _meta(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _tag_count(sense: dict) -> int | None:
    counts = sense.get("counts") or []
    if not counts:
        return None
    return int(counts[0].get("value", 0))


class _ModelBuilder:
    """Helper class to build the model of one lexicon."""

    def __init__(self, lex: dict) -> None:
        self.lex = lex
        self.lexicon_id: str = lex.get("id", "")
        self.synset_pos: dict[str, str] = {
            ss["id"]: ss.get("partOfSpeech", "") for ss in lex.get("synsets", [])
        }
        self.sense_keys: dict[str, str] = {}
        self.sense_lemmas: dict[str, str] = {}
        self.frames_of: dict[str, list[str]] = {}

    def build(self) -> Model:
        self._index_senses()
        self._index_frames()
        lexes, senses = self._build_entries()
        synsets = self._build_synsets()
        verb_frames = [
            VerbFrame(f["id"], f.get("subcategorizationFrame", ""))
            for f in self.lex.get("frames", [])
            if f.get("id")
        ]
        return Model(synsets, senses, lexes, verb_frames)

    def _index_senses(self) -> None:
        for entry in self.lex.get("entries", []):
            lemma = entry["lemma"]["writtenForm"]
            for sense in entry.get("senses", []):
                meta = _meta(sense.get("meta"))
                key = meta.get("identifier") or sense_key_from_id(sense["id"], self.lexicon_id)
                self.sense_keys[sense["id"]] = key
                self.sense_lemmas[sense["id"]] = lemma

    def _index_frames(self) -> None:
        frames = list(self.lex.get("frames", []))
        for entry in self.lex.get("entries", []):
            frames.extend(entry.get("frames", []))
        for frame in frames:
            frame_id = frame.get("id")
            if not frame_id:
                continue
            for sense_id in frame.get("senses", []):
                self.frames_of.setdefault(sense_id, []).append(frame_id)

    def _build_entries(self) -> tuple[list[LexicalUnit], list[Sense]]:
        lexes = []
        senses = []
        for entry in self.lex.get("entries", []):
            lemma = entry["lemma"]["writtenForm"]
            pos = entry["lemma"].get("partOfSpeech", "")
            keys = []
            for rank, sense in enumerate(entry.get("senses", [])):
                synset_id = sense["synset"]
                key = self.sense_keys[sense["id"]]
                keys.append(key)
                frame_ids = list(sense.get("subcat") or [])
                for frame_id in self.frames_of.get(sense["id"], []):
                    if frame_id not in frame_ids:
                        frame_ids.append(frame_id)
                senses.append(Sense(
                    sense_key=key,
                    lemma=lemma,
                    pos=pos,
                    type=self.synset_pos.get(synset_id) or pos,
                    lex_index=rank,
                    synset_id=synset_id,
                    adj_position=sense.get("adjposition") or None,
                    tag_count=_tag_count(sense),
                    verb_frames=tuple(frame_ids),
                    relations=self._sense_relations(sense),
                ))
            forms = tuple(f["writtenForm"] for f in entry.get("forms", []))
            lexes.append(LexicalUnit(lemma, pos, tuple(keys), forms))
        return lexes, senses

    def _sense_relations(self, sense: dict) -> dict[str, tuple[str, ...]]:
        relations: dict[str, list[str]] = {}
        for rel in sense.get("relations", []):
            # Sense to synset relations have no WNDB pointer
            target_key = self.sense_keys.get(rel["target"])
            if target_key is None:
                continue
            relations.setdefault(rel["relType"], []).append(target_key)
        return {kind: tuple(targets) for kind, targets in relations.items()}

    def _build_synsets(self) -> list[Synset]:
        synsets = []
        members_of: dict[str, list[str]] = {}
        for entry in self.lex.get("entries", []):
            for sense in entry.get("senses", []):
                members_of.setdefault(sense["synset"], []).append(
                    entry["lemma"]["writtenForm"]
                )
        for ss in sorted(self.lex.get("synsets", []), key=lambda s: s["id"]):
            member_ids = ss.get("members") or []
            if member_ids:
                members = [self.sense_lemmas[m] for m in member_ids if m in self.sense_lemmas]
            else:
                members = members_of.get(ss["id"], [])
            relations: dict[str, list[str]] = {}
            for rel in ss.get("relations", []):
                relations.setdefault(rel["relType"], []).append(rel["target"])
            synsets.append(Synset(
                synset_id=ss["id"],
                type=ss.get("partOfSpeech", ""),
                lexfile=ss.get("lexfile") or None,
                members=tuple(members),
                definitions=tuple(d.get("text", "") for d in ss.get("definitions", [])),
                examples=tuple(e.get("text", "") for e in ss.get("examples", [])),
                relations={kind: tuple(targets) for kind, targets in relations.items()},
            ))
        return synsets