"""Metadata extraction from completed test records."""

from typing import Any, Dict

from .models import TestRecord
from .types import METADATA_PROPERTIES

def extract_from_test(test: TestRecord) -> Dict[str, Any]:
    """Extract metadata from a test record.

    Only the recognized metadata keys are kept, in the order of
    METADATA_PROPERTIES; other properties are filtered out.

    Args:
        test: The completed test record

    Returns:
        New dictionary with the metadata keys the test declares
    """
    test_metadata = {}
    for meta in METADATA_PROPERTIES:
        if meta in test.properties:
            test_metadata[meta] = test.properties[meta]
    return test_metadata
