"""Grind driver: emit the WNDB files of a model into a directory."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections import Counter
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from wndb_grinder import flatfiles
from wndb_grinder.encoder import RecordEncoder
from wndb_grinder.exceptions import MalformedInput
from wndb_grinder.flags import Flags
from wndb_grinder.formatter import OEWN_HEADER, byte_length
from wndb_grinder.indexer import SenseIndexer, WordIndexer, report_incompats
from wndb_grinder.models import PARTITION_NAMES, PARTITIONS, Model
from wndb_grinder.offsets import OffsetTable, resolve, write_offsets
from wndb_grinder.ordering import SenseOrderer

logger = logging.getLogger(__name__)

OFFSETS_FILE = "offsets.map"


@contextlib.contextmanager
def atomic_output(path: str | Path) -> Iterator[TextIO]:
    """Open ``path`` for writing through a temporary file in the same directory.

    The target is replaced only when the block completes; on error the
    temporary file is removed and the target left untouched.
    """
    path = Path(path)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            yield f
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_path)
        raise


class Grinder:
    """Two-pass grinder of a model into WNDB files."""

    def __init__(
        self,
        model: Model,
        flags: Flags = Flags.NONE,
        header: str = OEWN_HEADER,
        orderer: SenseOrderer | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        self.model = model
        self.flags = flags
        self.header = header
        self.orderer = orderer or SenseOrderer()
        self.verbose = verbose
        self._offsets: OffsetTable | None = None

    def offsets(self) -> OffsetTable:
        """Resolved offsets, computed on first use."""
        if self._offsets is None:
            self._offsets = resolve(self.model, self.flags, self.header)
        return self._offsets

    def _encoder(self) -> RecordEncoder:
        return RecordEncoder(
            self.model, self.flags, self.offsets().__getitem__, verbose=self.verbose,
        )

    # -----------------------------------------------------------------------
    # Data files
    # -----------------------------------------------------------------------

    def write_data(self, stream: TextIO, pos: str) -> tuple[int, Counter[str]]:
        """Write the data file of a partition (second pass).

        Every record must have the offset and length found by the first
        pass, otherwise :class:`MalformedInput` is raised.
        """
        table = self.offsets()
        encoder = self._encoder()
        incompats: Counter[str] = Counter()
        stream.write(self.header)
        position = byte_length(self.header)
        count = 0
        for synset_id in table.ids_of(pos):
            offset = table[synset_id]
            if offset != position:
                raise MalformedInput(
                    f"Synset {synset_id} resolved at {offset} but written at {position}",
                    subject=synset_id, value=offset,
                )
            record = encoder.encode(self.model.synsets_by_id[synset_id], offset)
            expected = table.length_of(synset_id)
            if record.byte_length != expected:
                raise MalformedInput(
                    f"Synset {synset_id} record is {record.byte_length} bytes, "
                    f"offset pass measured {expected}",
                    subject=synset_id, value=record.byte_length,
                )
            stream.write(record.text)
            position += record.byte_length
            incompats.update(record.incompats)
            count += 1
        report_incompats(incompats)
        return count, incompats

    def line(self, synset_id: str) -> str:
        """Data line of a single synset, with its resolved offsets."""
        synset = self.model.synsets_by_id.get(synset_id)
        if synset is None:
            raise MalformedInput(
                f"No synset {synset_id}", subject=synset_id, value=synset_id,
            )
        return self._encoder().encode(synset, self.offsets()[synset_id]).text

    # -----------------------------------------------------------------------
    # Whole database
    # -----------------------------------------------------------------------

    def grind(self, out_dir: str | Path) -> dict[str, int]:
        """Write every WNDB file into ``out_dir``; returns line counts per file."""
        out = Path(out_dir)
        out.mkdir(parents=True, exist_ok=True)
        counts: dict[str, int] = {}

        names = _partition_files("data.{}")
        for pos, name in names.items():
            with atomic_output(out / name) as f:
                counts[name], _ = self.write_data(f, pos)
        _log_counts("Synsets", counts, names)

        word_indexer = WordIndexer(self.model, self.offsets(), self.flags, self.orderer)
        names = _partition_files("index.{}")
        for pos, name in names.items():
            with atomic_output(out / name) as f:
                counts[name], _ = word_indexer.make(f, pos, self.header)
        _log_counts("Indexes", counts, names)

        with atomic_output(out / "index.sense") as f:
            counts["index.sense"] = SenseIndexer(
                self.model, self.offsets(), self.flags, self.orderer,
            ).make(f)

        names = _partition_files("{}.exc")
        for pos, name in names.items():
            with atomic_output(out / name) as f:
                counts[name] = flatfiles.write_morphs(f, self.model, pos)
        _log_counts("Morphs", counts, names)

        with atomic_output(out / "verb.Framestext") as f:
            counts["verb.Framestext"] = flatfiles.write_verb_frames(f, self.model)
        with atomic_output(out / "sents.vrb") as f:
            counts["sents.vrb"] = flatfiles.write_templates(f, self.model)
        with atomic_output(out / "sentidx.vrb") as f:
            counts["sentidx.vrb"] = flatfiles.write_template_index(f, self.model)
        with atomic_output(out / "cntlist") as f:
            counts["cntlist"] = flatfiles.write_tag_counts(f, self.model)
        with atomic_output(out / "cntlist.rev") as f:
            counts["cntlist.rev"] = flatfiles.write_tag_counts_rev(f, self.model)
        with atomic_output(out / "lexnames") as f:
            counts["lexnames"] = flatfiles.write_lexnames(f)
        return counts

    def write_offsets(self, path: str | Path) -> int:
        """Write the ``offsets.map`` file."""
        with atomic_output(path) as f:
            return write_offsets(self.offsets(), f)


def _partition_files(pattern: str) -> dict[str, str]:
    return {pos: pattern.format(PARTITION_NAMES[pos]) for pos in PARTITIONS}


def _log_counts(label: str, counts: dict[str, int], names: dict[str, str]) -> None:
    logger.info(
        "%s: %d [%s]",
        label,
        sum(counts[name] for name in names.values()),
        " ".join(f"{pos}:{counts[name]}" for pos, name in names.items()),
    )
