"""Enums and constants for harness metadata processing.

The module provides:
- IssueKind: Enum of the problems the generator reports
- MessageClass: Enum of the severity classes used on message elements
- ExitCode: CLI exit codes
- Element ids, message texts and the recognized metadata keys

Example:
    >>> from harnessmeta.types import MessageClass, METADATA_PROPERTIES
    >>> print(MessageClass.WARNING.value, METADATA_PROPERTIES)
    warning ('help', 'assert', 'author')
"""

from enum import Enum
from typing import Final, Tuple

class IssueKind(str, Enum):
    """Kinds of problems found while processing a completed run."""

    DUPLICATE_TEST_NAME = 'DUPLICATE_TEST_NAME'
    CACHE_MISSING = 'CACHE_MISSING'
    CACHE_OUT_OF_SYNC = 'CACHE_OUT_OF_SYNC'

class MessageClass(str, Enum):
    """Severity class carried by a message element.

    Attributes:
        WARNING: Non-fatal, the cache simply has not been generated yet
        ERROR: The cache or the test file needs fixing
    """

    WARNING = 'warning'
    ERROR = 'error'

class ExitCode(int, Enum):
    """Exit codes returned by the CLI."""

    SUCCESS = 0
    WARNING = 1
    ERROR = 2
    LOAD_ERROR = 3

# Metadata keys extracted from test properties, in output order
METADATA_PROPERTIES: Final[Tuple[str, ...]] = ('help', 'assert', 'author')

# Element ids
SUMMARY_ID: Final[str] = 'summary'
ISSUE_ID: Final[str] = 'metadata_issue'
SOURCE_ID: Final[str] = 'metadata_source'
SCRIPT_ID: Final[str] = 'test_metadata'

# Name of the binding assigned in the embedded script block
CACHE_BINDING: Final[str] = 'cached_metadata'

# Message texts
CACHE_MISSING_MESSAGE: Final[str] = 'Cached metdata not present.'
CACHE_OUT_OF_SYNC_MESSAGE: Final[str] = 'Cached metadata out of sync.'
DUPLICATE_TEST_NAME_MESSAGE: Final[str] = 'Duplicate test name: {name}'
SOURCE_LINK_TEXT: Final[str] = 'Click for source code.'
SOURCE_INSTRUCTIONS: Final[str] = (
    "Copy the following into the <head> element of the test "
    "or the test's metadata sidecar file:"
)
