from __future__ import annotations

from collections.abc import Iterator
from types import MappingProxyType

from loguru import logger

from module_resolver.core import constants as cs
from module_resolver.core import logs as ls
from module_resolver.data_models.types_defs import AliasMapping, AliasMatch


def strip_legacy_marker(target: str) -> str:
    """Removes the legacy `npm:` package marker from an alias target."""
    if target.startswith(cs.LEGACY_NPM_PREFIX):
        logger.debug(ls.ALIAS_LEGACY_MARKER.format(target=target))
        return target.removeprefix(cs.LEGACY_NPM_PREFIX)
    return target


class AliasTable:
    """
    A static mapping from specifier prefixes to replacement prefixes.

    Keys and targets are stored exactly as configured. Lookups walk from the
    full specifier towards shorter `/`-delimited prefixes, so the most
    specific alias wins while any ancestor prefix may still be aliased.
    """

    def __init__(self, mapping: AliasMapping | None = None) -> None:
        self._mapping = MappingProxyType(dict(mapping or {}))

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, key: object) -> bool:
        return key in self._mapping

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __repr__(self) -> str:
        return f"AliasTable({dict(self._mapping)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AliasTable):
            return NotImplemented
        return self._mapping == other._mapping

    def __hash__(self) -> int:
        return hash(frozenset(self._mapping.items()))

    def items(self) -> list[tuple[str, str]]:
        return list(self._mapping.items())

    def lookup(self, specifier: str) -> AliasMatch | None:
        """
        Finds the longest configured prefix of `specifier`.

        Args:
            specifier (str): The raw module specifier.

        Returns:
            AliasMatch | None: The matched key, its raw target and the unmatched
                remainder (including its leading `/`), or None. A key mapped to
                an empty target ends the search without a match.
        """
        segments = specifier.split(cs.SEPARATOR_SLASH)
        while segments:
            key = cs.SEPARATOR_SLASH.join(segments)
            if key in self._mapping:
                target = self._mapping[key]
                if not target:
                    return None
                return AliasMatch(key, target, specifier[len(key) :])
            segments.pop()
        return None
