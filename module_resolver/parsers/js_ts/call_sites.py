"""
Discovery of module-loading call sites in JavaScript/TypeScript syntax trees.

Three shapes are recognised:

-   `require("x")` and `require.<member>("x")`.
-   `proxyquire("x", stubs)`, `proxyquire.<member>("x", stubs)` and
    `<call chain starting at proxyquire>.load("x", stubs)`, e.g.
    `proxyquire.noCallThru().load("x")`.
-   `import ... from "x"` and `import "x"`.

Only the first argument (or the import source) is a rewrite candidate, and
only when it is a plain string literal.
"""

from __future__ import annotations

from loguru import logger
from tree_sitter import Node

from module_resolver.core import constants as cs
from module_resolver.core import logs as ls
from module_resolver.data_models.models import CallSite
from module_resolver.data_models.types_defs import ASTNode, LanguageQueries

from ..core.utils import run_query, safe_decode_text
from .utils import call_arguments, is_identifier, line_of


def is_import_method_call(method_name: str, call: Node) -> bool:
    """True for `name(...)` and `name.<member>(...)`."""
    callee = call.child_by_field_name(cs.FIELD_FUNCTION)
    if callee is None:
        return False
    if is_identifier(callee, method_name):
        return True
    return callee.type == cs.TS_MEMBER_EXPRESSION and is_identifier(
        callee.child_by_field_name(cs.FIELD_OBJECT), method_name
    )


def is_require_call(call: Node) -> bool:
    return is_import_method_call(cs.JS_REQUIRE_KEYWORD, call)


def _chain_root(node: Node | None) -> Node | None:
    """Walks `a.b().c()` style call chains down to the leftmost expression."""
    while node is not None:
        if node.type == cs.TS_CALL_EXPRESSION:
            node = node.child_by_field_name(cs.FIELD_FUNCTION)
        elif node.type == cs.TS_MEMBER_EXPRESSION:
            node = node.child_by_field_name(cs.FIELD_OBJECT)
        else:
            return node
    return None


def is_proxyquire_call(call: Node) -> bool:
    """
    True for proxyquire calls, including `.load(...)` at the end of a call chain
    that starts with proxyquire, e.g. `proxyquire.noCallThru().load(...)`.
    """
    if is_import_method_call(cs.JS_PROXYQUIRE_KEYWORD, call):
        return True

    callee = call.child_by_field_name(cs.FIELD_FUNCTION)
    if callee is None or callee.type != cs.TS_MEMBER_EXPRESSION:
        return False

    prop = callee.child_by_field_name(cs.FIELD_PROPERTY)
    if prop is None or safe_decode_text(prop) != cs.JS_LOAD_METHOD:
        return False

    inner = callee.child_by_field_name(cs.FIELD_OBJECT)
    if inner is None or inner.type != cs.TS_CALL_EXPRESSION:
        return False
    return is_identifier(_chain_root(inner), cs.JS_PROXYQUIRE_KEYWORD)


def _call_site_for(call: Node) -> CallSite | None:
    if is_require_call(call):
        kind = cs.CallSiteKind.REQUIRE
    elif is_proxyquire_call(call):
        kind = cs.CallSiteKind.PROXYQUIRE
    else:
        return None

    arguments = call_arguments(call)
    if not arguments or arguments[0].type != cs.TS_STRING:
        logger.debug(ls.CALL_SITE_SKIPPED.format(kind=kind, line=line_of(call)))
        return None

    stubs = None
    if kind == cs.CallSiteKind.PROXYQUIRE and len(arguments) > 1:
        if arguments[1].type == cs.TS_OBJECT:
            stubs = arguments[1]

    return CallSite(kind=kind, specifier_node=arguments[0], stubs_node=stubs)


def find_call_sites(root_node: ASTNode, queries: LanguageQueries) -> list[CallSite]:
    """
    Finds every rewrite candidate in a syntax tree.

    Args:
        root_node: The root of the parsed tree.
        queries: The call-site and import queries for the tree's language.

    Returns:
        The call sites in source order.
    """
    sites: list[CallSite] = []

    if calls_query := queries["calls"]:
        for call in run_query(calls_query, root_node).get(cs.CAPTURE_CALL, []):
            if site := _call_site_for(call):
                sites.append(site)

    if imports_query := queries["imports"]:
        sources = run_query(imports_query, root_node).get(cs.CAPTURE_IMPORT_SOURCE, [])
        sites.extend(
            CallSite(kind=cs.CallSiteKind.IMPORT, specifier_node=source)
            for source in sources
        )

    sites.sort(key=lambda site: site.specifier_node.start_byte)
    for site in sites:
        logger.debug(
            ls.CALL_SITE_FOUND.format(
                kind=site.kind,
                line=site.line,
                specifier=safe_decode_text(site.specifier_node),
            )
        )
    return sites


def stub_key_nodes(stubs: Node) -> list[Node]:
    """Returns the string-literal keys of a proxyquire stub object."""
    keys: list[Node] = []
    for child in stubs.named_children:
        if child.type != cs.TS_PAIR:
            continue
        key = child.child_by_field_name(cs.FIELD_KEY)
        if key is not None and key.type == cs.TS_STRING:
            keys.append(key)
    return keys
