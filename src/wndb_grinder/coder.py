"""Relation, verb frame and lexicographer file coding tables."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from wndb_grinder.exceptions import CompatibilityViolation, MalformedInput
from wndb_grinder.outcome import Fatal, Ok, Outcome, Recoverable

# Pointer symbols not defined in the legacy format.
IS_ENTAILED_PTR = "*^"
IS_CAUSED_PTR = ">^"

# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------

NOUN_POINTERS: Mapping[str, str] = MappingProxyType({
    "antonym": "!",
    "hypernym": "@",
    "instance_hypernym": "@i",
    "hyponym": "~",
    "instance_hyponym": "~i",
    "holo_member": "#m",
    "holo_substance": "#s",
    "holo_part": "#p",
    "mero_member": "%m",
    "mero_substance": "%s",
    "mero_part": "%p",
    "attribute": "=",
    "pertainym": "\\",
    "also": "^",
    "derivation": "+",
    "domain_topic": ";c",
    "has_domain_topic": "-c",
    "domain_region": ";r",
    "has_domain_region": "-r",
    "exemplifies": ";u",
    "is_exemplified_by": "-u",
})

VERB_POINTERS: Mapping[str, str] = MappingProxyType({
    "antonym": "!",
    "hypernym": "@",
    "hyponym": "~",
    "entails": "*",
    "causes": ">",
    "also": "^",
    "verb_group": "$",
    "similar": "$",
    "derivation": "+",
    "domain_topic": ";c",
    "domain_region": ";r",
    "exemplifies": ";u",
    "is_entailed_by": IS_ENTAILED_PTR,
    "is_caused_by": IS_CAUSED_PTR,
})

ADJ_POINTERS: Mapping[str, str] = MappingProxyType({
    "antonym": "!",
    "similar": "&",
    "participle": "<",
    "pertainym": "\\",
    "attribute": "=",
    "also": "^",
    "derivation": "+",
    "domain_topic": ";c",
    "domain_region": ";r",
    "exemplifies": ";u",
    "has_domain_topic": "-c",
    "has_domain_region": "-r",
    "is_exemplified_by": "-u",
})

ADV_POINTERS: Mapping[str, str] = MappingProxyType({
    "antonym": "!",
    "pertainym": "\\",
    "also": "^",
    "derivation": "+",
    "domain_topic": ";c",
    "domain_region": ";r",
    "exemplifies": ";u",
    "has_domain_topic": "-c",
    "has_domain_region": "-r",
    "is_exemplified_by": "-u",
})

POINTERS_BY_POS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "n": NOUN_POINTERS,
    "v": VERB_POINTERS,
    "a": ADJ_POINTERS,
    "s": ADJ_POINTERS,
    "r": ADV_POINTERS,
})

# Verb relations with no legacy pointer symbol.
NON_LEGACY_VERB_RELATIONS = frozenset({"is_entailed_by", "is_caused_by"})


def code_relation(kind: str, pos: str, pointer_compat: bool = False) -> Outcome:
    """Code a relation kind as the pointer symbol for a part of speech."""
    table = POINTERS_BY_POS.get(pos)
    symbol = table.get(kind) if table is not None else None
    if symbol is None:
        return Fatal(MalformedInput(
            f"pos={pos} relType={kind}", subject=pos, value=kind,
        ))
    if pointer_compat and pos == "v" and kind in NON_LEGACY_VERB_RELATIONS:
        return Recoverable(CompatibilityViolation(kind))
    return Ok(symbol)


# ---------------------------------------------------------------------------
# Verb frames
# ---------------------------------------------------------------------------

LAST_COMPAT_VERBFRAME = 35

FRAME_ID_TO_NUM: Mapping[str, int] = MappingProxyType({
    "vii": 1,  # Something ----s
    "via": 2,  # Somebody ----s
    "nonreferential": 3,  # It is ----ing
    "vii-pp": 4,  # Something is ----ing PP
    "vtii-adj": 5,  # Something ----s something Adjective/Noun
    "vii-adj": 6,  # Something ----s Adjective/Noun
    "via-adj": 7,  # Somebody ----s Adjective
    "vtai": 8,  # Somebody ----s something
    "vtaa": 9,  # Somebody ----s somebody
    "vtia": 10,  # Something ----s somebody
    "vtii": 11,  # Something ----s something
    "vii-to": 12,  # Something ----s to somebody
    "via-on-inanim": 13,  # Somebody ----s on something
    "ditransitive": 14,  # Somebody ----s somebody something
    "vtai-to": 15,  # Somebody ----s something to somebody
    "vtai-from": 16,  # Somebody ----s something from somebody
    "vtaa-with": 17,  # Somebody ----s somebody with something
    "vtaa-of": 18,  # Somebody ----s somebody of something
    "vtai-on": 19,  # Somebody ----s something on somebody
    "vtaa-pp": 20,  # Somebody ----s somebody PP
    "vtai-pp": 21,  # Somebody ----s something PP
    "via-pp": 22,  # Somebody ----s PP
    "vibody": 23,  # Somebody's (body part) ----s
    "vtaa-to-inf": 24,  # Somebody ----s somebody to INFINITIVE
    "vtaa-inf": 25,  # Somebody ----s somebody INFINITIVE
    "via-that": 26,  # Somebody ----s that CLAUSE
    "via-to": 27,  # Somebody ----s to somebody
    "via-to-inf": 28,  # Somebody ----s to INFINITIVE
    "via-whether-inf": 29,  # Somebody ----s whether INFINITIVE
    "vtaa-into-ger": 30,  # Somebody ----s somebody into V-ing something
    "vtai-with": 31,  # Somebody ----s something with something
    "via-inf": 32,  # Somebody ----s INFINITIVE
    "via-ger": 33,  # Somebody ----s VERB-ing
    "nonreferential-sent": 34,  # It ----s that CLAUSE
    "vii-inf": 35,  # Something ----s INFINITIVE
    # extensions
    "via-at": 36,  # Somebody ----s at something
    "via-for": 37,  # Somebody ----s for something
    "via-on-anim": 38,  # Somebody ----s on somebody
    "via-out-of": 39,  # Somebody ----s out of somebody
})


def code_frame_id(frame_id: str, verb_frame_compat: bool = False) -> Outcome:
    """Code a syntactic frame id (e.g. ``vtai``) as its frame number."""
    num = FRAME_ID_TO_NUM.get(frame_id.strip())
    if num is None:
        return Fatal(MalformedInput(
            f"Unknown verb frame {frame_id!r}", value=frame_id,
        ))
    if verb_frame_compat and num > LAST_COMPAT_VERBFRAME:
        return Recoverable(CompatibilityViolation(frame_id))
    return Ok(num)


# ---------------------------------------------------------------------------
# Lexicographer files
# ---------------------------------------------------------------------------

LEXFILE_TO_NUM: Mapping[str, int] = MappingProxyType({
    "adj.all": 0,
    "adj.pert": 1,
    "adv.all": 2,
    "noun.Tops": 3,
    "noun.act": 4,
    "noun.animal": 5,
    "noun.artifact": 6,
    "noun.attribute": 7,
    "noun.body": 8,
    "noun.cognition": 9,
    "noun.communication": 10,
    "noun.event": 11,
    "noun.feeling": 12,
    "noun.food": 13,
    "noun.group": 14,
    "noun.location": 15,
    "noun.motive": 16,
    "noun.object": 17,
    "noun.person": 18,
    "noun.phenomenon": 19,
    "noun.plant": 20,
    "noun.possession": 21,
    "noun.process": 22,
    "noun.quantity": 23,
    "noun.relation": 24,
    "noun.shape": 25,
    "noun.state": 26,
    "noun.substance": 27,
    "noun.time": 28,
    "verb.body": 29,
    "verb.change": 30,
    "verb.cognition": 31,
    "verb.communication": 32,
    "verb.competition": 33,
    "verb.consumption": 34,
    "verb.contact": 35,
    "verb.creation": 36,
    "verb.emotion": 37,
    "verb.motion": 38,
    "verb.perception": 39,
    "verb.possession": 40,
    "verb.social": 41,
    "verb.stative": 42,
    "verb.weather": 43,
    "adj.ppl": 44,
})


def code_lexfile(name: str | None) -> Outcome:
    """Code a lexicographer file name as its number."""
    num = LEXFILE_TO_NUM.get(name) if name is not None else None
    if num is None:
        return Fatal(MalformedInput(f"Unknown lexfile {name!r}", value=name))
    return Ok(num)
