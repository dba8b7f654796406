"""Error types for harness metadata processing.

This module defines the exceptions raised by the harness-side layer:
loading results files, reading cached metadata and applying document
operations. Pipeline issues such as duplicate test names or a stale cache
are never raised; they are reported as document elements instead.
"""

from typing import Optional, Any

class MetadataError(Exception):
    """Base class for all harness metadata errors.

    Attributes:
        message: A descriptive error message
        details: Optional additional error details
    """

    def __init__(self, message: str, details: Optional[Any] = None):
        """Initialize a new MetadataError.

        Args:
            message: A descriptive error message
            details: Optional additional error details
        """
        self.message = message
        self.details = details
        super().__init__(self.message)

class ConfigurationError(MetadataError):
    """Error raised when a configuration value is invalid.

    Example:
        >>> raise ConfigurationError("Unknown log level", {"log_level": "LOUD"})
    """
    pass

class ResultsLoadError(MetadataError):
    """Error raised when a test results file cannot be loaded.

    This error is raised when:
    - The results file does not exist or cannot be read
    - The file is not valid YAML or JSON
    - A test entry has no name

    Example:
        >>> raise ResultsLoadError("Test entry has no name", {"index": 3})
    """
    pass

class CacheParseError(MetadataError):
    """Error raised when an embedded cached metadata block cannot be parsed.

    Example:
        >>> raise CacheParseError("Invalid cached metadata literal", {"line": 2})
    """
    pass

class DocumentError(MetadataError):
    """Error raised when a document operation targets a missing element.

    Example:
        >>> raise DocumentError("No element with id 'metadata_issue'")
    """
    pass
