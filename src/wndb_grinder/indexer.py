"""Word index (``index.<pos>``) and sense index (``index.sense``) builders."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TextIO

from wndb_grinder.coder import code_relation
from wndb_grinder.exceptions import MalformedInput
from wndb_grinder.flags import Flags
from wndb_grinder.formatter import OEWN_HEADER, format_offset, join_with_count
from wndb_grinder.models import Model, Sense
from wndb_grinder.ordering import (
    SenseOrderer,
    group_by_lemma_and_pos,
    group_by_sense_key,
)
from wndb_grinder.outcome import Fatal, Recoverable

logger = logging.getLogger(__name__)


def report_incompats(incompats: Counter[str]) -> None:
    """Log one warning per incompatibility cause."""
    for cause, count in sorted(incompats.items()):
        logger.warning("Incompatibilities '%s': %d", cause, count)


def _lookup_offset(offsets: Mapping[str, int], sense: Sense) -> int:
    try:
        return offsets[sense.synset_id]
    except KeyError:
        raise MalformedInput(
            f"Sense {sense.sense_key} targets synset {sense.synset_id} with no offset",
            subject=sense.sense_key, value=sense.synset_id,
        ) from None


# ---------------------------------------------------------------------------
# Word index
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class IndexEntry:
    """Aggregate of the senses sharing an index key and partition."""

    key: str
    pos: str
    synset_ids: tuple[str, ...]
    pointers: tuple[str, ...]
    tagged_count: int


class WordIndexer:
    """Build the per-partition word index."""

    def __init__(
        self,
        model: Model,
        offsets: Mapping[str, int],
        flags: Flags = Flags.NONE,
        orderer: SenseOrderer | None = None,
    ) -> None:
        self.model = model
        self.offsets = offsets
        self.flags = flags
        self.orderer = orderer or SenseOrderer()

    def entries(
        self, pos: str, incompats: Counter[str] | None = None,
    ) -> Iterator[IndexEntry]:
        """Index entries of a partition, sorted by key.

        Incompatibilities met while coding pointers are added to ``incompats``.
        """
        if incompats is None:
            incompats = Counter()
        groups = group_by_lemma_and_pos(self.model.senses)
        for (key, group_pos), senses in groups.items():
            if group_pos != pos:
                continue
            ordered = self.orderer.sort(senses)
            synset_ids = tuple(dict.fromkeys(s.synset_id for s in ordered))
            pointers: set[str] = set()
            for synset_id in synset_ids:
                self._collect_synset_pointers(synset_id, pos, pointers, incompats)
            for sense in ordered:
                self._collect_sense_pointers(sense, pos, pointers, incompats)
            tagged = sum(1 for s in ordered if s.is_tagged)
            yield IndexEntry(key, pos, synset_ids, tuple(sorted(pointers)), tagged)

    def _collect_synset_pointers(
        self,
        synset_id: str,
        pos: str,
        pointers: set[str],
        incompats: Counter[str],
    ) -> None:
        synset = self.model.synsets_by_id.get(synset_id)
        if synset is None:
            raise MalformedInput(
                f"Missing synset {synset_id}", subject=synset_id, value=synset_id,
            )
        for kind in synset.relations:
            outcome = code_relation(kind, pos, self.flags.pointer_compat)
            if isinstance(outcome, Recoverable):
                incompats[outcome.cause] += 1
            elif isinstance(outcome, Fatal):
                raise MalformedInput(
                    f"Synset {synset_id}: {outcome.error}",
                    subject=synset_id, value=kind,
                ) from outcome.error
            else:
                pointers.add(outcome.value)

    def _collect_sense_pointers(
        self,
        sense: Sense,
        pos: str,
        pointers: set[str],
        incompats: Counter[str],
    ) -> None:
        for kind in sense.relations:
            outcome = code_relation(kind, pos, self.flags.pointer_compat)
            if isinstance(outcome, Recoverable):
                incompats[outcome.cause] += 1
            elif isinstance(outcome, Fatal):
                logger.debug("Discarded relation '%s' of %s", kind, sense.sense_key)
            else:
                pointers.add(outcome.value)

    def format_entry(self, entry: IndexEntry) -> str:
        n_senses = len(entry.synset_ids)
        offsets = " ".join(
            format_offset(self.offsets[synset_id]) for synset_id in entry.synset_ids
        )
        pointers = join_with_count(entry.pointers, "d")
        return (
            f"{entry.key} {entry.pos} {n_senses} {pointers} "
            f"{n_senses} {entry.tagged_count} {offsets}  "
        )

    def make(
        self, stream: TextIO, pos: str, header: str = OEWN_HEADER,
    ) -> tuple[int, Counter[str]]:
        """Write the header and index lines of a partition.

        Returns the number of entries and the incompatibility counts.
        """
        incompats: Counter[str] = Counter()
        stream.write(header)
        count = 0
        for entry in self.entries(pos, incompats):
            stream.write(self.format_entry(entry) + "\n")
            count += 1
        report_incompats(incompats)
        return count, incompats


# ---------------------------------------------------------------------------
# Sense index
# ---------------------------------------------------------------------------

class SenseIndexer:
    """Build the sense index, one line per sense key."""

    def __init__(
        self,
        model: Model,
        offsets: Mapping[str, int],
        flags: Flags = Flags.NONE,
        orderer: SenseOrderer | None = None,
    ) -> None:
        self.model = model
        self.offsets = offsets
        self.flags = flags
        self.orderer = orderer or SenseOrderer()

    def sense_numbers(self) -> dict[str, int]:
        """1-based sense number of every sense key."""
        if not self.flags.reindex:
            return {s.sense_key: s.lex_index + 1 for s in self.model.senses}
        numbers: dict[str, int] = {}
        for senses in group_by_lemma_and_pos(self.model.senses).values():
            ordered = self.orderer.sort(senses)
            # senses of one synset share its number
            synset_ids = list(dict.fromkeys(s.synset_id for s in ordered))
            for sense in senses:
                numbers[sense.sense_key] = synset_ids.index(sense.synset_id) + 1
        return numbers

    def lines(self) -> Iterator[str]:
        by_key = group_by_sense_key(self.model.senses)
        numbers = self.sense_numbers()
        for key in sorted(by_key, key=lambda k: (k.lower(), k)):
            sense = by_key[key]
            offset = format_offset(_lookup_offset(self.offsets, sense))
            tag_count = sense.tag_count or 0
            yield f"{sense.sense_key} {offset} {numbers[sense.sense_key]} {tag_count}"

    def make(self, stream: TextIO) -> int:
        count = 0
        for line in self.lines():
            stream.write(line + "\n")
            count += 1
        logger.info("Senses: %d", count)
        return count

