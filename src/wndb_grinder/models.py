"""Read-only lexical model consumed by the grinder."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from wndb_grinder.exceptions import MalformedInput

# ---------------------------------------------------------------------------
# Parts of speech
# ---------------------------------------------------------------------------

# Data and index files exist for these partitions only.
PARTITIONS = ("n", "v", "a", "r")

PARTITION_NAMES: Mapping[str, str] = MappingProxyType({
    "n": "noun",
    "v": "verb",
    "a": "adj",
    "r": "adv",
})

# Synset type (ss_type) digit of a sense key.
SS_TYPE_DIGITS: Mapping[str, str] = MappingProxyType({
    "1": "n",
    "2": "v",
    "3": "a",
    "4": "r",
    "5": "s",
})


def partition_of(pos: str) -> str:
    """Partition a part of speech is filed under (satellites go with adjectives)."""
    return "a" if pos == "s" else pos


def parse_lex_id(sense_key: str) -> int:
    """Extract the lex id (third field) of ``lemma%ss_type:lex_filenum:lex_id:...``."""
    _, sep, tail = sense_key.rpartition("%")
    fields = tail.split(":")
    if not sep or len(fields) < 3 or not fields[2].isdigit():
        raise MalformedInput(
            f"Cannot parse lex id from sense key {sense_key!r}",
            subject=sense_key, value=sense_key,
        )
    return int(fields[2])


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LexicalUnit:
    """A lemma and part of speech with its ordered senses."""

    lemma: str
    pos: str
    sense_keys: tuple[str, ...]
    forms: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Sense:
    """A lexical unit's membership in one synset.

    ``lex_index`` is the 0-based rank of the sense within its lexical unit.
    ``relations`` maps a relation kind to the ordered target sense keys.
    ``lex_id`` defaults to the value encoded in the sense key.
    """

    sense_key: str
    lemma: str
    pos: str
    type: str
    lex_index: int
    synset_id: str
    adj_position: str | None = None
    tag_count: int | None = None
    verb_frames: tuple[str, ...] = ()
    verb_templates: tuple[int, ...] = ()
    relations: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    lex_id: int | None = None

    def __post_init__(self) -> None:
        if self.lex_id is None:
            object.__setattr__(self, "lex_id", parse_lex_id(self.sense_key))

    @property
    def partition(self) -> str:
        return partition_of(self.type)

    @property
    def is_tagged(self) -> bool:
        return self.tag_count is not None and self.tag_count > 0


@dataclass(frozen=True, slots=True)
class Synset:
    """A set of member lemmas sharing one meaning."""

    synset_id: str
    type: str
    lexfile: str | None
    members: tuple[str, ...]
    definitions: tuple[str, ...]
    examples: tuple[str, ...] = ()
    relations: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    @property
    def pos(self) -> str:
        return partition_of(self.type)


@dataclass(frozen=True, slots=True)
class VerbFrame:
    """A named syntactic frame such as ``vtai`` / ``Somebody ----s something``."""

    frame_id: str
    frame: str


@dataclass(frozen=True, slots=True)
class VerbTemplate:
    """A numbered verb sentence template."""

    template_id: int
    template: str


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

class Model:
    """Read-only view of a lexical database, keyed by id and lemma."""

    def __init__(
        self,
        synsets: Iterable[Synset],
        senses: Iterable[Sense],
        lexes: Iterable[LexicalUnit],
        verb_frames: Iterable[VerbFrame] = (),
        verb_templates: Iterable[VerbTemplate] = (),
    ) -> None:
        self.synsets: tuple[Synset, ...] = tuple(synsets)
        self.senses: tuple[Sense, ...] = tuple(senses)
        self.lexes: tuple[LexicalUnit, ...] = tuple(lexes)
        self.verb_frames: tuple[VerbFrame, ...] = tuple(verb_frames)
        self.verb_templates: tuple[VerbTemplate, ...] = tuple(verb_templates)

        self.synsets_by_id: Mapping[str, Synset] = MappingProxyType(
            {s.synset_id: s for s in self.synsets}
        )
        self.senses_by_id: Mapping[str, Sense] = MappingProxyType(
            {s.sense_key: s for s in self.senses}
        )
        by_lemma: dict[str, list[LexicalUnit]] = {}
        for lex in self.lexes:
            by_lemma.setdefault(lex.lemma.lower(), []).append(lex)
        self.lexes_by_lemma: Mapping[str, tuple[LexicalUnit, ...]] = MappingProxyType(
            {k: tuple(v) for k, v in by_lemma.items()}
        )

    def __repr__(self) -> str:
        return (
            f"Model(synsets={len(self.synsets)}, senses={len(self.senses)}, "
            f"lexes={len(self.lexes)})"
        )

    def find_sense_of(self, synset: Synset, lemma: str) -> Sense | None:
        """Sense of ``lemma`` whose synset is ``synset``, if any."""
        for lex in self.lexes_by_lemma.get(lemma.lower(), ()):
            if lex.lemma != lemma:
                continue
            for key in lex.sense_keys:
                sense = self.senses_by_id.get(key)
                if sense is not None and sense.synset_id == synset.synset_id:
                    return sense
        return None

    def senses_of(self, synset: Synset) -> list[Sense]:
        """Senses of the synset's members, in member order."""
        senses = []
        for lemma in synset.members:
            sense = self.find_sense_of(synset, lemma)
            if sense is None:
                raise MalformedInput(
                    f"No sense of member {lemma!r} in synset {synset.synset_id}",
                    subject=synset.synset_id, value=lemma,
                )
            senses.append(sense)
        return senses

    def member_number(self, synset: Synset, lemma: str) -> int:
        """1-based position of ``lemma`` among the synset's members."""
        try:
            return synset.members.index(lemma) + 1
        except ValueError:
            raise MalformedInput(
                f"{lemma!r} is not a member of synset {synset.synset_id}",
                subject=synset.synset_id, value=lemma,
            ) from None

    def synsets_of(self, pos: str) -> list[Synset]:
        """Synsets filed under a partition, in model order."""
        return [s for s in self.synsets if s.pos == pos]
