"""Deterministic sense order used to number senses in the indexes."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from wndb_grinder.exceptions import MalformedInput
from wndb_grinder.formatter import escape
from wndb_grinder.models import Sense

logger = logging.getLogger(__name__)


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


class LegacyOrder(Mapping[str, int]):
    """Rank of sense keys in a legacy sense index."""

    def __init__(self, ranks: Mapping[str, int] | None = None) -> None:
        self._ranks = dict(ranks or {})

    def __getitem__(self, sense_key: str) -> int:
        return self._ranks[sense_key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._ranks)

    def __len__(self) -> int:
        return len(self._ranks)

    @classmethod
    def load(cls, path: str | Path) -> LegacyOrder:
        """Load ``sensekey rank [...]`` lines; unreadable lines are skipped."""
        ranks: dict[str, int] = {}
        with open(path, encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                fields = line.split()
                if not fields:
                    continue
                try:
                    ranks[fields[0]] = int(fields[1])
                except (IndexError, ValueError):
                    logger.warning("%s:%d: unreadable line %r", path, line_no, line.rstrip())
        logger.info("Legacy order: %d sense keys", len(ranks))
        return cls(ranks)


class SenseOrderer:
    """Total order over senses.

    Senses sort by decreasing tag count (untagged last), then by legacy
    rank (ranked before unranked), then by synset type, index in the
    lexical unit, lemma ignoring case, lemma, and sense key.
    """

    def __init__(
        self,
        legacy_order: Mapping[str, int] | None = None,
        *,
        upper_case_first: bool = True,
    ) -> None:
        self.legacy_order = legacy_order if legacy_order is not None else LegacyOrder()
        self.upper_case_first = upper_case_first

    def compare(self, s1: Sense, s2: Sense) -> int:
        if s1 is s2:
            return 0
        c = self.compare_tag_counts(s1, s2)
        if c:
            return c
        c = self.compare_legacy(s1, s2)
        if c:
            return c
        return self.compare_tail(s1, s2)

    @staticmethod
    def compare_tag_counts(s1: Sense, s2: Sense) -> int:
        t1, t2 = s1.tag_count, s2.tag_count
        if t1 is None or t2 is None:
            return _cmp(t1 is None, t2 is None)
        return _cmp(t2, t1)

    def compare_legacy(self, s1: Sense, s2: Sense) -> int:
        r1 = self.legacy_order.get(s1.sense_key)
        r2 = self.legacy_order.get(s2.sense_key)
        if r1 is None or r2 is None:
            return _cmp(r1 is None, r2 is None)
        return _cmp(r1, r2)

    def compare_tail(self, s1: Sense, s2: Sense) -> int:
        if s1 is s2:
            return 0
        for a, b in (
            (s1.type, s2.type),
            (s1.lex_index, s2.lex_index),
            (s1.lemma.lower(), s2.lemma.lower()),
            (self._case_key(s1.lemma), self._case_key(s2.lemma)),
            (s1.sense_key, s2.sense_key),
        ):
            c = _cmp(a, b)
            if c:
                return c
        if s1 == s2:
            return 0
        raise MalformedInput(
            f"Distinct senses {s1.sense_key} and {s2.sense_key} cannot be ordered",
            subject=s1.sense_key, value=s2.sense_key,
        )

    def _case_key(self, lemma: str) -> str:
        return lemma if self.upper_case_first else lemma.swapcase()

    @property
    def key(self) -> Callable[[Sense], Any]:
        """Sort key for :func:`sorted`."""
        return functools.cmp_to_key(self.compare)

    def sort(self, senses: Iterable[Sense]) -> list[Sense]:
        return sorted(senses, key=self.key)


# ---------------------------------------------------------------------------
# Groupings
# ---------------------------------------------------------------------------

def index_key(lemma: str) -> str:
    """Word index key of a lemma: lower-cased with spaces escaped."""
    return escape(lemma.lower())


def group_by_lemma_and_pos(
    senses: Iterable[Sense],
) -> dict[tuple[str, str], list[Sense]]:
    """Senses grouped by (index key, partition), keys sorted."""
    groups: dict[tuple[str, str], list[Sense]] = {}
    for sense in senses:
        groups.setdefault((index_key(sense.lemma), sense.partition), []).append(sense)
    return {k: groups[k] for k in sorted(groups)}


def group_by_sense_key(senses: Iterable[Sense]) -> dict[str, Sense]:
    """Senses keyed by sense key; a repeated key is malformed."""
    by_key: dict[str, Sense] = {}
    for sense in senses:
        if sense.sense_key in by_key:
            raise MalformedInput(
                f"Duplicate sense key {sense.sense_key}",
                subject=sense.sense_key, value=sense.sense_key,
            )
        by_key[sense.sense_key] = sense
    return by_key
