"""Decisions about what to show in the hosting document.

Every function here is pure: it builds elements and returns the document
operations a surface should apply, without touching any document.
"""

from typing import Any, Callable, List, Mapping, Optional

from .models import Element, InsertAfter, InsertBefore, MetadataIssue, Remove, DocumentOperation
from .types import (
    CACHE_MISSING_MESSAGE,
    CACHE_OUT_OF_SYNC_MESSAGE,
    DUPLICATE_TEST_NAME_MESSAGE,
    ISSUE_ID,
    SOURCE_ID,
    SOURCE_INSTRUCTIONS,
    SOURCE_LINK_TEXT,
    SUMMARY_ID,
    IssueKind,
    MessageClass,
)

def duplicate_name_issue(name: str) -> MetadataIssue:
    return MetadataIssue(
        kind=IssueKind.DUPLICATE_TEST_NAME,
        message=DUPLICATE_TEST_NAME_MESSAGE.format(name=name),
        severity=MessageClass.ERROR
    )

def cache_issue(cached_metadata: Optional[Mapping[str, Any]], valid: bool) -> Optional[MetadataIssue]:
    """Decide which cache issue, if any, a run reports.

    Args:
        cached_metadata: The cached mapping the run was given, None if absent
        valid: Outcome of validating the extracted metadata against it

    Returns:
        The issue to report, or None when the cache is present and in sync
    """
    if cached_metadata is None:
        return MetadataIssue(IssueKind.CACHE_MISSING, CACHE_MISSING_MESSAGE, MessageClass.WARNING)
    if not valid:
        return MetadataIssue(IssueKind.CACHE_OUT_OF_SYNC, CACHE_OUT_OF_SYNC_MESSAGE, MessageClass.ERROR)
    return None

def report_error(issue: MetadataIssue, anchor_id: str = SUMMARY_ID) -> List[DocumentOperation]:
    """Operations inserting a plain error paragraph for an issue."""
    element = Element(tag='p', css_class=issue.severity.value, text=issue.message)
    return [InsertBefore(anchor_id, element)]

def report_cache_issue(issue: MetadataIssue, on_activate: Callable[[], None],
                       anchor_id: str = SUMMARY_ID) -> List[DocumentOperation]:
    """Operations inserting the cache message with its source link.

    Args:
        issue: The cache issue to report
        on_activate: Called when the link is activated
        anchor_id: Id of the element the message goes before

    Returns:
        Operations to apply
    """
    link = Element(tag='a', text=SOURCE_LINK_TEXT, href='#', action=on_activate)
    element = Element(
        tag='p',
        id=ISSUE_ID,
        css_class=issue.severity.value,
        text=issue.message + ' ',
        children=[link]
    )
    return [InsertBefore(anchor_id, element)]

def source_block(source: str) -> Element:
    """Build the wrapper holding the instructions and the rendered source."""
    return Element(
        tag='div',
        id=SOURCE_ID,
        children=[
            Element(tag='p', text=SOURCE_INSTRUCTIONS),
            Element(tag='pre', text=source),
        ]
    )

def show_source(source: str) -> List[DocumentOperation]:
    """Operations replacing the cache message with the rendered source."""
    return [InsertAfter(ISSUE_ID, source_block(source)), Remove(ISSUE_ID)]

def clear_cache_report() -> List[DocumentOperation]:
    """Operations removing the cache message or source block of an earlier run."""
    return [Remove(ISSUE_ID, missing_ok=True), Remove(SOURCE_ID, missing_ok=True)]
