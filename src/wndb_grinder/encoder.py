"""Synset record encoder for WNDB data files."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field

from wndb_grinder.coder import code_frame_id, code_lexfile, code_relation
from wndb_grinder.exceptions import MalformedInput
from wndb_grinder.flags import Flags
from wndb_grinder.formatter import (
    byte_length,
    escape,
    format_offset,
    join_with_count,
    quote_examples,
)
from wndb_grinder.models import Model, Sense, Synset
from wndb_grinder.outcome import Fatal, Recoverable

logger = logging.getLogger(__name__)

OffsetOf = Callable[[str], int]

# Any value of the same width as real offsets yields records of the same length.
PLACEHOLDER_OFFSET = 0

# Largest lex id that fits the legacy 4-bit field (16 wraps to 0).
MAX_COMPAT_LEX_ID = 16


def placeholder_offset(synset_id: str) -> int:
    """Offset function used while offsets are still unknown."""
    return PLACEHOLDER_OFFSET


@dataclass(frozen=True, slots=True)
class EncodedRecord:
    """One rendered data line and the incompatibilities met rendering it."""

    synset_id: str
    text: str
    incompats: Counter[str] = field(default_factory=Counter)

    @property
    def byte_length(self) -> int:
        return byte_length(self.text)


class RecordEncoder:
    """Render synsets as data file records.

    The same encoder serves both passes of a grind: the offset pass injects
    :func:`placeholder_offset` and the emission pass the resolved table.
    Out-of-range lex ids are reported when ``report_anomalies`` is set, so
    that each one is logged once per grind.
    """

    def __init__(
        self,
        model: Model,
        flags: Flags,
        offset_of: OffsetOf,
        *,
        verbose: bool = False,
        report_anomalies: bool = True,
    ) -> None:
        self.model = model
        self.flags = flags
        self.offset_of = offset_of
        self.verbose = verbose
        self.report_anomalies = report_anomalies

    def encode(self, synset: Synset, offset: int) -> EncodedRecord:
        """Render the data line of ``synset`` located at ``offset``."""
        incompats: Counter[str] = Counter()

        members = [self._member(synset, lemma) for lemma in synset.members]
        lexfile_num = self._lexfile_num(synset)

        relations = self._synset_relations(synset, incompats)
        frames: dict[int, list[int]] = {}
        for sense in self.model.senses_of(synset):
            self._collect_frames(synset, sense, frames, incompats)
            relations.extend(self._sense_relations(synset, sense, incompats))

        members_data = join_with_count(members, "02x")
        related_data = join_with_count(relations, "03d")
        frames_data = self._frames_data(synset, frames)
        if frames_data:
            frames_data = " " + frames_data
        definitions_data = "; ".join(synset.definitions)
        examples_data = (
            "; " + quote_examples(synset.examples) if synset.examples else ""
        )
        text = (
            f"{format_offset(offset)} {lexfile_num:02d} {synset.type} "
            f"{members_data} {related_data}{frames_data} "
            f"| {definitions_data}{examples_data}  \n"
        )
        return EncodedRecord(synset.synset_id, text, incompats)

    # -----------------------------------------------------------------------
    # Members
    # -----------------------------------------------------------------------

    def _member(self, synset: Synset, lemma: str) -> str:
        sense = self.model.find_sense_of(synset, lemma)
        if sense is None:
            raise MalformedInput(
                f"No sense of member {lemma!r} in synset {synset.synset_id}",
                subject=synset.synset_id, value=lemma,
            )
        lex_id = self.lex_id(sense)
        if sense.adj_position:
            return f"{escape(lemma)}({sense.adj_position}) {lex_id:X}"
        return f"{escape(lemma)} {lex_id:X}"

    def lex_id(self, sense: Sense) -> int:
        """Lex id as written, reduced to the legacy range in lex-id compat mode."""
        lex_id = sense.lex_id
        if not self.flags.lexid_compat:
            return lex_id
        if lex_id > MAX_COMPAT_LEX_ID and self.report_anomalies:
            logger.warning(
                "Out of range lexid %s: %d tweaked to %d",
                sense.sense_key, lex_id, lex_id % 16,
            )
        return lex_id % 16

    def _lexfile_num(self, synset: Synset) -> int:
        outcome = code_lexfile(synset.lexfile)
        if isinstance(outcome, Fatal):
            raise MalformedInput(
                f"Lexfile {synset.lexfile!r} in {synset.synset_id}",
                subject=synset.synset_id, value=synset.lexfile,
            ) from outcome.error
        return outcome.unwrap()

    # -----------------------------------------------------------------------
    # Relations
    # -----------------------------------------------------------------------

    def _dedup(
        self, owner: str, relations: dict[str, tuple[str, ...]],
    ) -> list[tuple[str, str]]:
        pairs: dict[tuple[str, str], None] = {}
        for kind, targets in relations.items():
            for target in targets:
                if (kind, target) in pairs:
                    if self.verbose:
                        logger.debug("%s has duplicate %s %s", owner, kind, target)
                    continue
                pairs[kind, target] = None
        return list(pairs)

    def _synset_relations(
        self, synset: Synset, incompats: Counter[str],
    ) -> list[str]:
        result = []
        for kind, target_id in self._dedup(synset.synset_id, synset.relations):
            target = self.model.synsets_by_id.get(target_id)
            if target is None:
                raise MalformedInput(
                    f"Synset {synset.synset_id} {kind} targets missing synset {target_id}",
                    subject=synset.synset_id, value=target_id,
                )
            outcome = code_relation(kind, synset.type, self.flags.pointer_compat)
            if isinstance(outcome, Recoverable):
                incompats[outcome.cause] += 1
                continue
            if isinstance(outcome, Fatal):
                raise MalformedInput(
                    f"Synset {synset.synset_id}: {outcome.error}",
                    subject=synset.synset_id, value=kind,
                ) from outcome.error
            result.append(self._relation(outcome.value, target, 0, 0))
        return result

    def _sense_relations(
        self, synset: Synset, sense: Sense, incompats: Counter[str],
    ) -> list[str]:
        result = []
        if not sense.relations:
            return result
        source_num = self.model.member_number(synset, sense.lemma)
        for kind, target_key in self._dedup(sense.sense_key, sense.relations):
            target_sense = self.model.senses_by_id.get(target_key)
            target = (
                self.model.synsets_by_id.get(target_sense.synset_id)
                if target_sense is not None else None
            )
            if target is None:
                raise MalformedInput(
                    f"Sense {sense.sense_key} {kind} targets missing sense {target_key}",
                    subject=synset.synset_id, value=target_key,
                )
            outcome = code_relation(kind, synset.type, self.flags.pointer_compat)
            if isinstance(outcome, Recoverable):
                incompats[outcome.cause] += 1
                continue
            if isinstance(outcome, Fatal):
                if self.verbose:
                    logger.debug(
                        "Discarded relation '%s' synset=%s sense=%s",
                        kind, synset.synset_id, sense.sense_key,
                    )
                continue
            target_num = self.model.member_number(target, target_sense.lemma)
            result.append(self._relation(outcome.value, target, source_num, target_num))
        return result

    def _relation(
        self, symbol: str, target: Synset, source_num: int, target_num: int,
    ) -> str:
        offset = format_offset(self.offset_of(target.synset_id))
        return f"{symbol} {offset} {target.type} {source_num:02x}{target_num:02x}"

    # -----------------------------------------------------------------------
    # Verb frames
    # -----------------------------------------------------------------------

    def _collect_frames(
        self,
        synset: Synset,
        sense: Sense,
        frames: dict[int, list[int]],
        incompats: Counter[str],
    ) -> None:
        if not sense.verb_frames:
            return
        member_num = self.model.member_number(synset, sense.lemma)
        for frame_id in sense.verb_frames:
            outcome = code_frame_id(frame_id, self.flags.verbframe_compat)
            if isinstance(outcome, Recoverable):
                incompats[outcome.cause] += 1
                continue
            if isinstance(outcome, Fatal):
                raise MalformedInput(
                    f"Sense {sense.sense_key} in {synset.synset_id}: {outcome.error}",
                    subject=synset.synset_id, value=frame_id,
                ) from outcome.error
            nums = frames.setdefault(outcome.value, [])
            if member_num not in nums:
                nums.append(member_num)

    @staticmethod
    def _frames_data(synset: Synset, frames: dict[int, list[int]]) -> str:
        if synset.type != "v":
            return ""
        # compulsory for verbs even if empty
        if not frames:
            return "00"
        entries = []
        for frame_num in sorted(frames):
            member_nums = sorted(frames[frame_num])
            # a frame shared by all members applies to the whole synset
            if len(member_nums) == len(synset.members):
                entries.append((frame_num, 0))
            else:
                entries.extend((frame_num, n) for n in member_nums)
        return join_with_count(entries, "02d", lambda e: f"+ {e[0]:02d} {e[1]:02x}")
