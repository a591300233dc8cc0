"""CLI-related constants."""


class CLIDefaults:
    """Default values for the command line."""

    VERSION = "0.1.0"
    LOG_LEVEL = "WARNING"
    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INTERRUPTED = 130
    COMMAND = "filter"


class CLIOptions:
    """Command line option names."""

    MIN_SIZE = "--min"
    MAX_SIZE = "--max"
    SUFFIXES = "--suffixes"
    QUEUE_SIZE = "--queue-size"
    STATS = "--stats"
    VERBOSE = "--verbose"
    VERBOSE_SHORT = "-v"
    LOG_LEVEL = "--log-level"
    LOG_JSON = "--log-json"
    VERSION = "--version"
    VERSION_SHORT = "-V"

    SUFFIX_SEPARATOR = ","


class CLIHelp:
    """Help texts for the command line."""

    APP_NAME = "filterpipe"
    APP_DESCRIPTION = (
        "Filter file paths by suffix and size, printing survivors one per line."
    )
    VERSION_TEXT = "filterpipe {version}"

    PATHS_HELP = "File paths to filter (globs are expanded by the shell)."
    MIN_SIZE_HELP = "Minimum file size in bytes, exclusive (-1 means no minimum)."
    MAX_SIZE_HELP = "Maximum file size in bytes, exclusive (-1 means no maximum)."
    SUFFIXES_HELP = "Comma-separated list of file suffixes, e.g. .pdf,.txt."
    QUEUE_SIZE_HELP = "Capacity of each queue between pipeline stages."
    STATS_HELP = "Print per-stage statistics to stderr after the run."
    VERBOSE_HELP = "Enable verbose output (equivalent to --log-level DEBUG)."
    LOG_LEVEL_HELP = "Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    LOG_JSON_HELP = "Emit diagnostic logs as JSON lines on stderr."
    VERSION_HELP = "Show version information and exit."


__all__ = ["CLIDefaults", "CLIHelp", "CLIOptions"]
