from __future__ import annotations

from functools import lru_cache

from tree_sitter import Query, QueryCursor

from module_resolver.core import constants as cs
from module_resolver.data_models.types_defs import ASTNode, TreeSitterNodeProtocol


def run_query(query: Query, root_node: ASTNode) -> dict[str, list[ASTNode]]:
    """Executes a query on the root node and groups captured nodes by name."""
    return QueryCursor(query).captures(root_node)


@lru_cache(maxsize=10000)
def _cached_decode_bytes(text_bytes: bytes) -> str:
    return text_bytes.decode(cs.ENCODING_UTF8)


def safe_decode_text(node: ASTNode | TreeSitterNodeProtocol | None) -> str | None:
    """
    Safely decodes the text content of a Tree-sitter node.

    Args:
        node (ASTNode | TreeSitterNodeProtocol | None): The node to extract text from.

    Returns:
        str | None: The decoded string or None if node is None or has no text.
    """
    if node is None or (text_bytes := node.text) is None:
        return None
    if isinstance(text_bytes, bytes):
        return _cached_decode_bytes(text_bytes)
    return str(text_bytes)
