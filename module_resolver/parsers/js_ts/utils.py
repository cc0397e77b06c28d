from tree_sitter import Node

from module_resolver.core import constants as cs

from ..core.utils import safe_decode_text


def is_identifier(node: Node | None, name: str) -> bool:
    return (
        node is not None
        and node.type == cs.TS_IDENTIFIER
        and safe_decode_text(node) == name
    )


def call_arguments(call: Node) -> list[Node]:
    """
    Returns the argument expressions of a call, skipping comments.

    Tagged templates (`require\\`x\\``) have no `arguments` node and yield nothing.
    """
    arguments = call.child_by_field_name(cs.FIELD_ARGUMENTS)
    if arguments is None or arguments.type != cs.FIELD_ARGUMENTS:
        return []
    return [child for child in arguments.named_children if child.type != cs.TS_COMMENT]


def string_literal_value(node: Node | None) -> str | None:
    """
    Extracts the value of a plain string literal.

    Args:
        node: A candidate string literal node.

    Returns:
        The unquoted value, or None for non-strings and strings with escapes.
    """
    if node is None or node.type != cs.TS_STRING:
        return None
    if any(child.type == cs.TS_ESCAPE_SEQUENCE for child in node.children):
        return None
    text = safe_decode_text(node)
    if text is None or len(text) < 2:
        return None
    return text[1:-1]


def string_literal_quote(node: Node) -> str:
    text = safe_decode_text(node) or '"'
    return text[0]


def line_of(node: Node) -> int:
    return node.start_point[0] + 1
