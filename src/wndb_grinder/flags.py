"""Grind flags: legacy compatibility switches and indexing options."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntFlag

from wndb_grinder.exceptions import ConfigError


class Flags(IntFlag):
    """Settings that affect the grinder's behaviour, combined as a bit set."""

    NONE = 0
    # Lex ids must fit the legacy 4-bit field (reduced modulo 16).
    LEXID_COMPAT = 0x1
    # No pointers beyond those of the legacy format.
    POINTER_COMPAT = 0x2
    # No verb frames beyond those of the legacy format.
    VERBFRAME_COMPAT = 0x4
    # Number senses by their rank in the lexical unit instead of reindexing.
    NO_REINDEX = 0x10000000

    @property
    def lexid_compat(self) -> bool:
        return bool(self & Flags.LEXID_COMPAT)

    @property
    def pointer_compat(self) -> bool:
        return bool(self & Flags.POINTER_COMPAT)

    @property
    def verbframe_compat(self) -> bool:
        return bool(self & Flags.VERBFRAME_COMPAT)

    @property
    def reindex(self) -> bool:
        return not self & Flags.NO_REINDEX

    @classmethod
    def parse(cls, names: Iterable[str]) -> Flags:
        """Build flags from configuration names (``lexid``, ``pointer``, ...)."""
        flags = cls.NONE
        for name in names:
            flag = COMPAT_NAMES.get(name.strip().lower())
            if flag is None:
                raise ConfigError(
                    f"Unknown compat flag {name!r}; "
                    f"expected one of {', '.join(sorted(COMPAT_NAMES))}"
                )
            flags |= flag
        return flags


COMPAT_NAMES: dict[str, Flags] = {
    "lexid": Flags.LEXID_COMPAT,
    "pointer": Flags.POINTER_COMPAT,
    "verbframe": Flags.VERBFRAME_COMPAT,
}
