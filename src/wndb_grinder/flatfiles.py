"""Auxiliary flat files: exceptions, verb frames, templates, tag counts, lexnames."""

from __future__ import annotations

import logging
from typing import TextIO

from wndb_grinder.coder import FRAME_ID_TO_NUM, LEXFILE_TO_NUM
from wndb_grinder.formatter import escape
from wndb_grinder.models import Model, partition_of

logger = logging.getLogger(__name__)

# Lexfile name prefix to the pos number of the lexnames file.
LEXNAME_POS_NUMS = {"noun": 1, "verb": 2, "adj": 3, "adv": 4}

# Frames without a legacy number are numbered after this base.
EXTRA_FRAME_BASE = 100


def write_morphs(stream: TextIO, model: Model, pos: str) -> int:
    """Write ``<form> <lemma>`` morphological exception lines of a partition."""
    lines = set()
    for lex in model.lexes:
        if partition_of(lex.pos) != pos:
            continue
        for form in lex.forms:
            lines.add(f"{escape(form)} {escape(lex.lemma)}")
    for line in sorted(lines):
        stream.write(line + "\n")
    return len(lines)


def verb_frame_nid(frame_id: str, index: int) -> int:
    """Number of a verb frame; frames with no legacy number get one past 100."""
    return FRAME_ID_TO_NUM.get(frame_id, EXTRA_FRAME_BASE + index)


def write_verb_frames(stream: TextIO, model: Model) -> int:
    """Write ``verb.Framestext``: ``<number> <frame text>`` lines."""
    numbered = sorted(
        (verb_frame_nid(vf.frame_id, i), vf.frame)
        for i, vf in enumerate(model.verb_frames, start=1)
    )
    for nid, frame in numbered:
        stream.write(f"{nid} {frame}\n")
    logger.info("Verb frames: %d", len(numbered))
    return len(numbered)


def write_templates(stream: TextIO, model: Model) -> int:
    """Write ``sents.vrb``: ``<template id> <template>`` lines."""
    templates = sorted(model.verb_templates, key=lambda t: t.template_id)
    for template in templates:
        stream.write(f"{template.template_id} {template.template}\n")
    logger.info("Verb templates: %d", len(templates))
    return len(templates)


def write_template_index(stream: TextIO, model: Model) -> int:
    """Write ``sentidx.vrb``: sense keys with their comma-separated template ids."""
    n = 0
    for sense in sorted(model.senses, key=lambda s: s.sense_key):
        if not sense.verb_templates:
            continue
        ids = ",".join(str(t) for t in sense.verb_templates)
        stream.write(f"{sense.sense_key} {ids}\n")
        n += 1
    logger.info("Verb template references: %d senses", n)
    return n


def write_tag_counts(stream: TextIO, model: Model) -> int:
    """Write ``cntlist``: ``<count> <sense key> <sense number>`` by decreasing count."""
    tagged = [s for s in model.senses if s.tag_count is not None]
    tagged.sort(key=lambda s: -s.tag_count)
    for sense in tagged:
        stream.write(f"{sense.tag_count} {sense.sense_key} {sense.lex_index + 1}\n")
    logger.info("Tag counts: %d", len(tagged))
    return len(tagged)


def write_tag_counts_rev(stream: TextIO, model: Model) -> int:
    """Write ``cntlist.rev``: ``<sense key> <sense number> <count>`` by sense key."""
    n = 0
    for sense in sorted(model.senses, key=lambda s: s.sense_key):
        if sense.tag_count is None:
            continue
        stream.write(f"{sense.sense_key} {sense.lex_index + 1} {sense.tag_count}\n")
        n += 1
    logger.info("Tag counts reverse: %d", n)
    return n


def write_lexnames(stream: TextIO) -> int:
    """Write ``lexnames``: ``<number>\\t<lexfile>\\t<pos number>``."""
    for name, num in sorted(LEXFILE_TO_NUM.items(), key=lambda item: item[1]):
        pos_num = LEXNAME_POS_NUMS.get(name.partition(".")[0], 0)
        stream.write(f"{num:02d}\t{name}\t{pos_num}\n")
    logger.info("Lexfiles: %d", len(LEXFILE_TO_NUM))
    return len(LEXFILE_TO_NUM)
