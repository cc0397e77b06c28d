class ModuleResolverError(Exception):
    """Base class for errors raised outside the resolution engine."""


class ConfigurationError(ModuleResolverError):
    """Raised when resolver options cannot be loaded or validated."""


class UnsupportedSourceError(ModuleResolverError):
    """Raised when a file has no tree-sitter grammar available."""


class ModuleNotFound(LookupError):
    """Raised by the filesystem probe when a specifier cannot be found on disk."""


# Config
CONFIG_FILE_MISSING = "Config file not found: {path}"
CONFIG_FILE_INVALID = "Config file {path} is not valid: {error}"
CONFIG_SECTION_INVALID = "[{section}] in {path} must be a table"
ALIAS_CLI_INVALID = "Alias '{value}' must have the form KEY=TARGET"

# Probe
MODULE_NOT_FOUND = "Cannot find module '{specifier}' from '{basedir}'"

# Parsers
NO_LANGUAGES = "No tree-sitter grammars could be loaded"
UNSUPPORTED_SOURCE = "No parser available for '{path}' (suffix '{suffix}')"

# CLI
PATH_NOT_FOUND = "Path does not exist: {path}"
WRITE_MODES_EXCLUSIVE = "--write, --check and --out-dir are mutually exclusive"
