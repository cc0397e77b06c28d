# Resolution
RESOLVE_SKIP_RELATIVE = "Leaving relative specifier '{specifier}' untouched"
RESOLVE_ROOT_MATCH = (
    "Resolved '{specifier}' under root '{root}' to {resolved} -> '{rewritten}'"
)
RESOLVE_ROOT_MISS = "No match for '{specifier}' under root '{root}': {error}"
RESOLVE_ALIAS_MATCH = (
    "Alias '{key}' -> '{target}' matched '{specifier}' -> '{rewritten}'"
)
RESOLVE_NO_MATCH = "No root or alias matched '{specifier}' in {file}"
ALIAS_LEGACY_MARKER = "Stripping legacy package marker from alias target '{target}'"

# Probe
PROBE_PACKAGE_JSON_FAILED = "Ignoring unreadable {path}: {error}"

# Config
CONFIG_LOADED = "Loaded resolver options from {path}"
CONFIG_NOT_FOUND = "No resolver config file found in {path}"
GLOB_EXPANDED = "Root pattern '{pattern}' expanded to {count} director(y/ies)"
GLOB_NO_MATCH = "Root pattern '{pattern}' matched nothing"
RESOLVER_CONFIG_BUILT = (
    "Resolver config: {roots} root(s), {aliases} alias(es), extensions={extensions}"
)

# Parsers
IMPORTING_MODULE = "Importing grammar module: {module}"
LIB_NOT_AVAILABLE = "Tree-sitter grammar for {lang} is not installed"
GRAMMAR_LOADED = "Loaded tree-sitter grammar for {lang}"
GRAMMAR_LOAD_FAILED = "Failed to load tree-sitter grammar for {lang}: {error}"
INITIALIZED_PARSERS = "Initialized parsers for: {languages}"

# Rewriting
CALL_SITE_FOUND = "{kind} call site at line {line}: '{specifier}'"
CALL_SITE_SKIPPED = "Skipping non-literal {kind} argument at line {line}"
STUB_REWRITTEN = "Stub '{stub}' -> '{rewritten}' (relative to {base})"
EDIT_APPLIED = "{file}:{line} '{original}' -> '{rewritten}'"
FILE_REWRITTEN = "Rewrote {count} specifier(s) in {file}"
FILE_UNCHANGED = "No rewrites needed in {file}"
FILE_WRITTEN = "Wrote {file}"
FILE_FAILED = "Failed to rewrite {file}: {error}"
FILES_DISCOVERED = "Discovered {count} source file(s) under {path}"
RUN_SUMMARY = "{changed} of {total} file(s) changed, {failed} failed"

# Decorators
FUNC_TIMING = "{func} took {time:.2f} ms"
