"""Shared test fixtures for wndb-grinder."""

import pytest

from wndb_grinder import LexicalUnit, Model, Sense, Synset, VerbFrame, VerbTemplate


@pytest.fixture
def synsets():
    """Two noun synsets linked by hypernymy and one verb synset."""
    return [
        Synset(
            "ss-vehicle", "n", "noun.artifact", ("vehicle",), ("a conveyance",),
            relations={"hyponym": ("ss-car",)},
        ),
        Synset(
            "ss-car", "n", "noun.artifact", ("car", "auto"), ("a motor vehicle",),
            relations={"hypernym": ("ss-vehicle",)},
        ),
        Synset(
            "ss-drive", "v", "verb.motion", ("drive",), ("operate a vehicle",),
            examples=("drive a car",),
        ),
    ]


@pytest.fixture
def senses():
    return [
        Sense("vehicle%1:06:00::", "vehicle", "n", "n", 0, "ss-vehicle", tag_count=5),
        Sense("car%1:06:00::", "car", "n", "n", 0, "ss-car", tag_count=10),
        Sense("auto%1:06:00::", "auto", "n", "n", 0, "ss-car"),
        Sense(
            "drive%2:38:00::", "drive", "v", "v", 0, "ss-drive", tag_count=3,
            verb_frames=("via", "vtai"), verb_templates=(2, 8),
        ),
    ]


@pytest.fixture
def model(synsets, senses):
    """Small model: vehicle, car/auto (nouns) and drive (verb)."""
    lexes = [
        LexicalUnit("vehicle", "n", ("vehicle%1:06:00::",), ("vehicles",)),
        LexicalUnit("car", "n", ("car%1:06:00::",), ("cars",)),
        LexicalUnit("auto", "n", ("auto%1:06:00::",)),
        LexicalUnit("drive", "v", ("drive%2:38:00::",), ("drove", "driven")),
    ]
    frames = [
        VerbFrame("via", "Somebody ----s"),
        VerbFrame("vtai", "Somebody ----s something"),
    ]
    templates = [
        VerbTemplate(8, "Sam cannot %s Sue"),
        VerbTemplate(2, "The children %s to the playground"),
    ]
    return Model(synsets, senses, lexes, frames, templates)


@pytest.fixture
def expected_lines():
    """Data lines of the small model ground with an empty header."""
    return {
        "ss-vehicle": "00000000 06 n 01 vehicle 0 001 ~ 00000066 n 0000 | a conveyance  \n",
        "ss-car": "00000066 06 n 02 car 0 auto 0 001 @ 00000000 n 0000 | a motor vehicle  \n",
        "ss-drive": (
            "00000000 38 v 01 drive 0 000 02 + 02 00 + 08 00 "
            '| operate a vehicle; "drive a car"  \n'
        ),
    }
