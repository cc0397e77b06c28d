from enum import StrEnum


class SupportedLanguage(StrEnum):
    JS = "javascript"
    TS = "typescript"
    TSX = "tsx"


class TreeSitterModule(StrEnum):
    JS = "tree_sitter_javascript"
    TS = "tree_sitter_typescript"


class CallSiteKind(StrEnum):
    REQUIRE = "require"
    PROXYQUIRE = "proxyquire"
    IMPORT = "import"


class Color(StrEnum):
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    CYAN = "cyan"
    MAGENTA = "magenta"


class StyleModifier(StrEnum):
    BOLD = "bold"
    DIM = "dim"
    NONE = ""


APP_NAME = "module-resolver"
ENCODING_UTF8 = "utf-8"
LOG_FORMAT = "{time:HH:mm:ss} | {level: <8} | {message}"
DEFAULT_LOG_LEVEL = "INFO"
VERBOSE_LOG_LEVEL = "DEBUG"
QUIET_LOG_LEVEL = "ERROR"

# Path conventions
PATH_CURRENT_DIR = "."
SEPARATOR_SLASH = "/"
EXPLICIT_CURRENT_PREFIX = "./"
EXPLICIT_PARENT_PREFIX = "../"
EXPLICIT_RELATIVE_PREFIXES = (EXPLICIT_CURRENT_PREFIX, EXPLICIT_PARENT_PREFIX)
RELATIVE_MARKER = "."

# Resolution
LEGACY_NPM_PREFIX = "npm:"
DEFAULT_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".es", ".es6")
PACKAGE_JSON = "package.json"
PACKAGE_JSON_MAIN = "main"
INDEX_BASENAME = "index"
GLOB_MAGIC_CHARS = frozenset("*?[")
GLOB_RECURSIVE = "**"

# Config files
CONFIG_FILENAME = ".moduleresolverrc.json"
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_SECTION = "tool"
PYPROJECT_TOOL_KEY = "module-resolver"
ALIAS_CLI_SEPARATOR = "="

# Source discovery
LANG_ATTR_TYPESCRIPT = "language_typescript"
LANG_ATTR_TSX = "language_tsx"
QUERY_LANGUAGE = "language"
JS_SOURCE_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs", ".es", ".es6")
TS_SOURCE_SUFFIXES = (".ts", ".mts", ".cts")
TSX_SOURCE_SUFFIXES = (".tsx",)
IGNORE_PATTERNS = frozenset(
    {"node_modules", ".git", ".hg", ".svn", "dist", "build", "coverage"}
)
DIFF_FROM_PREFIX = "a/"
DIFF_TO_PREFIX = "b/"

# Tree-sitter node types
TS_CALL_EXPRESSION = "call_expression"
TS_MEMBER_EXPRESSION = "member_expression"
TS_IDENTIFIER = "identifier"
TS_STRING = "string"
TS_ESCAPE_SEQUENCE = "escape_sequence"
TS_OBJECT = "object"
TS_PAIR = "pair"
TS_COMMENT = "comment"

# Tree-sitter fields
FIELD_FUNCTION = "function"
FIELD_ARGUMENTS = "arguments"
FIELD_OBJECT = "object"
FIELD_PROPERTY = "property"
FIELD_KEY = "key"

# Call-site keywords
JS_REQUIRE_KEYWORD = "require"
JS_PROXYQUIRE_KEYWORD = "proxyquire"
JS_LOAD_METHOD = "load"

# Queries
CAPTURE_CALL = "call"
CAPTURE_IMPORT_SOURCE = "import_source"
JS_CALL_SITE_QUERY = f"(call_expression) @{CAPTURE_CALL}"
JS_IMPORT_SOURCE_QUERY = (
    f"(import_statement source: (string) @{CAPTURE_IMPORT_SOURCE})"
)

# Exit codes
EXIT_FAILURE = 1

# CLI messages
CLI_MSG_REWRITE_CHECK_FAILED = "{count} file(s) would be rewritten"
CLI_MSG_REWRITE_CLEAN = "All specifiers already resolvable"
CLI_MSG_REWRITE_DONE = "{changed} of {total} file(s) rewritten"
CLI_MSG_REWRITE_PREVIEW = (
    "{changed} of {total} file(s) would change (use --write to apply)"
)
CLI_MSG_FAILED_FILES = "{count} file(s) could not be processed"
CLI_MSG_NO_REWRITE = "{specifier} (unchanged)"
CLI_ERR_CONFIG = "Configuration error: {error}"
CLI_TABLE_TITLE = "Resolver configuration"
CLI_TABLE_SETTING = "Setting"
CLI_TABLE_VALUE = "Value"
CLI_TABLE_ROOT = "root"
CLI_TABLE_EXTENSIONS = "extensions"
CLI_TABLE_ALIAS = "alias"
CLI_TABLE_CWD = "cwd"
CLI_TABLE_NONE = "(none)"
