"""Process exit codes for startup failures.

Codes are stable so deployment tooling can tell failure classes apart.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    # Invalid application configuration
    CONFIG_ERROR = 1
    # The server failed while running
    EXECUTION_FAILURE = 2
    # Programming error inside the application
    APP_DEV_ERROR = 3
    # Port is not an integer or out of range
    BAD_PORT = 4
    # A template option was given without a file name
    TEMPLATE_FILENAME_EMPTY = 5
    # The template file could not be read
    TEMPLATE_NOT_FOUND = 6
    # The template did not compile
    TEMPLATE_ERROR = 7
    # The mapping file is missing, unparsable or invalid
    BAD_MAPPING_FILE = 8
    # Unknown log level name
    INVALID_LOG_LEVEL = 9
    # The metrics endpoint could not be set up
    METRICS_ISSUE = 10
