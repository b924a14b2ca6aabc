"""Text formatting helpers for WNDB records and headers."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from wndb_grinder.exceptions import MalformedInput

# Offsets are fixed-width decimal fields.
OFFSET_WIDTH = 8
MAX_OFFSET = 10 ** OFFSET_WIDTH - 1

_QUOTED = re.compile(r'".*"', re.DOTALL)


def escape(item: str) -> str:
    """Escape a lemma for WNDB output (spaces become underscores)."""
    return item.replace(" ", "_")


def format_offset(offset: int) -> str:
    """Format an offset as an 8-digit decimal field."""
    if offset < 0 or offset > MAX_OFFSET:
        raise MalformedInput(
            f"Offset {offset} does not fit {OFFSET_WIDTH} digits", value=offset,
        )
    return f"{offset:0{OFFSET_WIDTH}d}"


def byte_length(text: str) -> int:
    """Length of text once written, in UTF-8 bytes."""
    return len(text.encode("utf-8"))


def join_with_count(
    items: Sequence[Any],
    count_format: str,
    transform: Callable[[Any], str] = str,
) -> str:
    """Join items with spaces, prefixed by their formatted count.

    >>> join_with_count(["a", "b"], "02d")
    '02 a b'
    """
    parts = [format(len(items), count_format)]
    parts.extend(transform(item) for item in items)
    return " ".join(parts)


def quote_examples(examples: Iterable[str]) -> str:
    """Join examples with spaces, double-quoting those not already quoted."""
    return " ".join(
        example if _QUOTED.fullmatch(example) else f'"{example}"'
        for example in examples
    )


def _header(lines: tuple[str, ...]) -> str:
    return "".join(f"{line}\n" for line in lines)


PRINCETON_HEADER = _header((
    "  1 This software and database is being provided to you, the LICENSEE, by  ",
    "  2 Princeton University under the following license.  By obtaining, using  ",
    "  3 and/or copying this software and database, you agree that you have  ",
    "  4 read, understood, and will comply with these terms and conditions.:  ",
    "  5   ",
    "  6 Permission to use, copy, modify and distribute this software and  ",
    "  7 database and its documentation for any purpose and without fee or  ",
    "  8 royalty is hereby granted, provided that you agree to comply with  ",
    "  9 the following copyright notice and statements, including the disclaimer,  ",
    "  10 and that the same appear on ALL copies of the software, database and  ",
    "  11 documentation, including modifications that you make for internal  ",
    "  12 use or for distribution.  ",
    "  13   ",
    "  14 WordNet 3.1 Copyright 2011 by Princeton University.  All rights reserved.  ",
    "  15   ",
    "  16 THIS SOFTWARE AND DATABASE IS PROVIDED \"AS IS\" AND PRINCETON  ",
    "  17 UNIVERSITY MAKES NO REPRESENTATIONS OR WARRANTIES, EXPRESS OR  ",
    "  18 IMPLIED.  BY WAY OF EXAMPLE, BUT NOT LIMITATION, PRINCETON  ",
    "  19 UNIVERSITY MAKES NO REPRESENTATIONS OR WARRANTIES OF MERCHANT-  ",
    "  20 ABILITY OR FITNESS FOR ANY PARTICULAR PURPOSE OR THAT THE USE  ",
    "  21 OF THE LICENSED SOFTWARE, DATABASE OR DOCUMENTATION WILL NOT  ",
    "  22 INFRINGE ANY THIRD PARTY PATENTS, COPYRIGHTS, TRADEMARKS OR  ",
    "  23 OTHER RIGHTS.  ",
    "  24   ",
    "  25 The name of Princeton University or Princeton may not be used in  ",
    "  26 advertising or publicity pertaining to distribution of the software  ",
    "  27 and/or database.  Title to copyright in this software, database and  ",
    "  28 any associated documentation shall at all times remain with  ",
    "  29 Princeton University and LICENSEE agrees to preserve same.  ",
))

OEWN_HEADER = _header((
    "  1 This software and database is being provided to you, the LICENSEE, by  ",
    "  2 the Open English Wordnet team under the Creative Commons Attribution 4.0  ",
    "  3 International License (CC-BY 4.0).  ",
    "  4 Open English Wordnet 2021 Copyright 2021 by the Open English Wordnet team.  ",
    "  5 ",
    "  6 Permission to use, copy, modify and distribute this software and  ",
    "  7 database and its documentation for any purpose and without fee or  ",
    "  8 royalty is hereby granted, provided that you agree to comply with  ",
    "  9 the following copyright notice and statements, including the disclaimer,  ",
    "  10 and that the same appear on ALL copies of the software, database and  ",
    "  11 documentation, including modifications that you make for internal  ",
    "  12 use or for distribution.  ",
    "  13 ",
    "  14 WordNet 3.1 Copyright 2011 by Princeton University.  All rights reserved.  ",
    "  15 THIS SOFTWARE AND DATABASE IS PROVIDED \"AS IS\" AND PRINCETON  ",
    "  16 UNIVERSITY MAKES NO REPRESENTATIONS OR WARRANTIES, EXPRESS OR  ",
    "  17 IMPLIED.  BY WAY OF EXAMPLE, BUT NOT LIMITATION, PRINCETON  ",
    "  18 UNIVERSITY MAKES NO REPRESENTATIONS OR WARRANTIES OF MERCHANT-  ",
    "  19 ABILITY OR FITNESS FOR ANY PARTICULAR PURPOSE OR THAT THE USE  ",
    "  20 OF THE LICENSED SOFTWARE, DATABASE OR DOCUMENTATION WILL NOT  ",
    "  21 INFRINGE ANY THIRD PARTY PATENTS, COPYRIGHTS, TRADEMARKS OR  ",
    "  22 OTHER RIGHTS.  ",
    "  23 The name of Princeton University or Princeton may not be used in  ",
    "  24 advertising or publicity pertaining to distribution of the software  ",
    "  25 and/or database.  Title to copyright in this software, database and  ",
    "  26 any associated documentation shall at all times remain with  ",
    "  27 Princeton University and LICENSEE agrees to preserve same.  ",
    "  28 ",
    "  29 Ground by oewntk@gmail.com     ",
))

HEADERS: dict[str, str] = {
    "oewn": OEWN_HEADER,
    "princeton": PRINCETON_HEADER,
}
