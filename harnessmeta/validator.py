"""Comparison of extracted metadata against the cached copy.

The cached mapping is drained while it is checked: every matched test
entry is removed, so once all extracted tests are processed any entry left
behind belongs to a test that no longer exists.
"""

from typing import Any, Dict, Mapping

from .logger import get_logger
from .types import METADATA_PROPERTIES

logger = get_logger("validator")

def validate_cache(metadata: Mapping[str, Mapping[str, Any]],
                   cached_metadata: Dict[str, Mapping[str, Any]]) -> bool:
    """Compare cached metadata to extracted metadata.

    Args:
        metadata: Extracted metadata by test name
        cached_metadata: Cached metadata by test name; matched entries are
            removed from it

    Returns:
        True if both mappings hold the same tests with the same metadata
    """
    for test_name, test_metadata in metadata.items():
        if test_name not in cached_metadata:
            logger.debug(f"No cached metadata for test '{test_name}'")
            return False
        cached_test_metadata = cached_metadata.pop(test_name)
        if not isinstance(cached_test_metadata, Mapping):
            logger.debug(f"Cached metadata of test '{test_name}' is not a mapping")
            return False

        for meta in METADATA_PROPERTIES:
            in_cache = meta in cached_test_metadata
            in_test = meta in test_metadata
            if in_cache and in_test:
                if not _lines_match(cached_test_metadata[meta], test_metadata[meta]):
                    logger.debug(f"Cached '{meta}' of test '{test_name}' differs")
                    return False
            elif in_cache or in_test:
                logger.debug(f"'{meta}' of test '{test_name}' is only present on one side")
                return False

    if cached_metadata:
        logger.debug(f"Cached metadata has stale tests: {', '.join(map(str, cached_metadata))}")
        return False
    return True

def _lines_match(cached_value: Any, value: Any) -> bool:
    """Compare two metadata values line by line.

    A cached value that is not a sequence of lines only matches an equal
    scalar, never a sequence.
    """
    cached_is_sequence = isinstance(cached_value, (list, tuple))
    if cached_is_sequence != isinstance(value, (list, tuple)):
        return False
    if not cached_is_sequence:
        return cached_value == value
    if len(cached_value) != len(value):
        return False
    for cached_line, line in zip(cached_value, value):
        if cached_line != line:
            return False
    return True
