from .alias_table import AliasTable, strip_legacy_marker
from .fs_probe import resolve_on_disk
from .resolver import (
    map_module,
    resolve,
    resolve_request,
    resolve_stub,
    stub_base_file,
)

__all__ = [
    "AliasTable",
    "map_module",
    "resolve",
    "resolve_on_disk",
    "resolve_request",
    "resolve_stub",
    "strip_legacy_marker",
    "stub_base_file",
]
