"""Constants for the command gateway surface."""

COMMANDER_URL_NAME = "clicommander"
COMMANDER_DISPLAY_NAME = "CLI Commander"

# Request field carrying the raw command line
COMMAND_LINE_FIELD = "commandLine"

# Text encoding of captured command output
OUTPUT_ENCODING = "utf-8"

# Exit codes reported by commands
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE_ERROR = 2
EXIT_ILLEGAL_STATE = 3
EXIT_ACCESS_DENIED = 6
