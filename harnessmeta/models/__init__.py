"""Data models for harness metadata processing."""

from .record import TestRecord, MetadataIssue
from .operations import Element, InsertBefore, InsertAfter, Remove, DocumentOperation

__all__ = [
    'TestRecord',
    'MetadataIssue',
    'Element',
    'InsertBefore',
    'InsertAfter',
    'Remove',
    'DocumentOperation',
]
