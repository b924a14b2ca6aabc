"""Offset resolution: the first grind pass."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import TextIO

from wndb_grinder.encoder import PLACEHOLDER_OFFSET, RecordEncoder, placeholder_offset
from wndb_grinder.exceptions import MalformedInput
from wndb_grinder.flags import Flags
from wndb_grinder.formatter import OEWN_HEADER, byte_length
from wndb_grinder.models import PARTITIONS, Model
from wndb_grinder.ordering import group_by_sense_key

logger = logging.getLogger(__name__)


class OffsetTable(Mapping[str, int]):
    """Synset id to byte offset, one address space per partition.

    Append-only while offsets are resolved, read-only once frozen. Besides
    the offset, each synset's partition and first-pass record length are
    kept for the emission pass to check against.
    """

    def __init__(self) -> None:
        self._offsets: dict[str, int] = {}
        self._partitions: dict[str, str] = {}
        self._lengths: dict[str, int] = {}
        self._last: dict[str, int] = {}
        self._frozen = False

    def __getitem__(self, synset_id: str) -> int:
        return self._offsets[synset_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._offsets)

    def __len__(self) -> int:
        return len(self._offsets)

    def __repr__(self) -> str:
        return f"OffsetTable({self.counts()!r}, frozen={self._frozen})"

    @property
    def frozen(self) -> bool:
        return self._frozen

    def assign(self, synset_id: str, partition: str, offset: int, length: int) -> None:
        """Record the offset and record length of a synset."""
        if self._frozen:
            raise MalformedInput(
                f"Offset table is frozen, cannot assign {synset_id}",
                subject=synset_id, value=offset,
            )
        if synset_id in self._offsets:
            raise MalformedInput(
                f"Offset of {synset_id} already assigned",
                subject=synset_id, value=offset,
            )
        last = self._last.get(partition)
        if last is not None and offset <= last:
            raise MalformedInput(
                f"Offset {offset} of {synset_id} does not follow {last} in partition {partition}",
                subject=synset_id, value=offset,
            )
        self._offsets[synset_id] = offset
        self._partitions[synset_id] = partition
        self._lengths[synset_id] = length
        self._last[partition] = offset

    def freeze(self) -> OffsetTable:
        self._frozen = True
        return self

    def partition(self, synset_id: str) -> str:
        return self._partitions[synset_id]

    def length_of(self, synset_id: str) -> int:
        """Byte length of the synset's record as measured by the offset pass."""
        return self._lengths[synset_id]

    def ids_of(self, partition: str) -> list[str]:
        """Synset ids of a partition in increasing offset order."""
        return [k for k, p in self._partitions.items() if p == partition]

    def counts(self) -> dict[str, int]:
        counts = {pos: 0 for pos in PARTITIONS}
        for partition in self._partitions.values():
            counts[partition] = counts.get(partition, 0) + 1
        return counts


def resolve(
    model: Model,
    flags: Flags = Flags.NONE,
    header: str = OEWN_HEADER,
) -> OffsetTable:
    """Compute the offset of every synset.

    Each synset is encoded with placeholder offsets of the final width, so
    the record lengths measured here are the lengths eventually written.
    """
    # a repeated sense key would shadow a member sense
    group_by_sense_key(model.senses)
    encoder = RecordEncoder(model, flags, placeholder_offset, report_anomalies=False)
    start = byte_length(header)
    table = OffsetTable()
    for pos in PARTITIONS:
        offset = start
        for synset in model.synsets_of(pos):
            record = encoder.encode(synset, PLACEHOLDER_OFFSET)
            table.assign(synset.synset_id, pos, offset, record.byte_length)
            offset += record.byte_length
    counts = table.counts()
    logger.info(
        "Offsets: %d [%s]",
        len(table), " ".join(f"{pos}:{counts[pos]}" for pos in PARTITIONS),
    )
    return table.freeze()


# ---------------------------------------------------------------------------
# offsets.map
# ---------------------------------------------------------------------------

def write_offsets(offsets: Mapping[str, int], stream: TextIO) -> int:
    """Write ``<synset_id> <offset>`` lines sorted by synset id."""
    for synset_id in sorted(offsets):
        stream.write(f"{synset_id} {offsets[synset_id]}\n")
    return len(offsets)


def read_offsets(path: str | Path) -> dict[str, int]:
    """Read an ``offsets.map`` file back into a dict."""
    offsets: dict[str, int] = {}
    with open(path, encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            fields = line.split()
            if not fields:
                continue
            if len(fields) != 2 or not fields[1].isdigit():
                raise MalformedInput(
                    f"{path}:{line_no}: expected '<synset_id> <offset>'",
                    value=line.rstrip("\n"),
                )
            offsets[fields[0]] = int(fields[1])
    return offsets
