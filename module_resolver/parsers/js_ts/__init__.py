from .call_sites import (
    find_call_sites,
    is_import_method_call,
    is_proxyquire_call,
    is_require_call,
    stub_key_nodes,
)
from .rewriter import SourceRewriter, apply_edits, format_diff

__all__ = [
    "SourceRewriter",
    "apply_edits",
    "find_call_sites",
    "format_diff",
    "is_import_method_call",
    "is_proxyquire_call",
    "is_require_call",
    "stub_key_nodes",
]
