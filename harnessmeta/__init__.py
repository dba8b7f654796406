"""
harness-metadata: extract, validate and regenerate cached test metadata.
"""

from .generator import MetadataGenerator
from .document import Document, DocumentSurface
from .extractor import extract_from_test
from .validator import validate_cache
from .renderer import generate_source
from .harness import load_results, load_cached_metadata, parse_cached_metadata
from .models import TestRecord, MetadataIssue

__version__ = "0.1.0"

__all__ = [
    'MetadataGenerator',
    'Document',
    'DocumentSurface',
    'extract_from_test',
    'validate_cache',
    'generate_source',
    'load_results',
    'load_cached_metadata',
    'parse_cached_metadata',
    'TestRecord',
    'MetadataIssue',
]
