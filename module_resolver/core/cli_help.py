APP_DESCRIPTION = (
    "Rewrite bare module specifiers in JavaScript/TypeScript sources into "
    "paths resolvable from each file, using root directories and aliases."
)

CMD_RESOLVE = "Resolve a single specifier as seen from a given file."
CMD_REWRITE = "Rewrite require/import/proxyquire specifiers in files or directories."
CMD_SHOW_CONFIG = "Show the effective resolver configuration."

HELP_QUIET = "Only print errors."
HELP_VERBOSE = "Log every resolution decision."
HELP_SPECIFIER = "The module specifier to resolve, as written in the source."
HELP_FROM_FILE = "The file containing the specifier, relative to --project."
HELP_PATHS = "Source files or directories to rewrite."
HELP_ROOT = "Root directory (or glob pattern) to search; repeatable, first wins."
HELP_ALIAS = "Alias as KEY=TARGET; repeatable. Prefix TARGET with npm: for packages."
HELP_EXTENSION = "Extension to probe on disk; repeatable, in priority order."
HELP_CONFIG = "Explicit config file (.json, or .toml with [tool.module-resolver])."
HELP_PROJECT = "Project directory holding the config file; relative paths start here."
HELP_WRITE = "Write rewritten files in place."
HELP_CHECK = "Exit with status 1 if any file would be rewritten."
HELP_OUT_DIR = "Write every processed file into this directory instead."
