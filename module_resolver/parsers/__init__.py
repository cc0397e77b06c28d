from module_resolver.parsers.js_ts.call_sites import find_call_sites
from module_resolver.parsers.js_ts.rewriter import SourceRewriter

__all__ = [
    "SourceRewriter",
    "find_call_sites",
]
