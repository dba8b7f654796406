"""Metadata generator driven by the harness completion callback.

The generator extracts metadata from every completed test, validates it
against the cached copy embedded in the test document and, when the cache
is missing or stale, offers source code suitable for caching the metadata.
The cached copy exists for test processing tools that cannot run the tests
themselves.

Typical use with a harness that exposes `add_completion_callback`:

    >>> generator = MetadataGenerator(Document())
    >>> generator.setup(harness, cached_metadata)   # doctest: +SKIP

or, called directly once all tests are done:

    >>> issues = generator.process(tests, harness_status, cached_metadata)  # doctest: +SKIP
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from .config import get_config
from .document import Document, DocumentSurface
from .extractor import extract_from_test
from .logger import get_logger
from .models import MetadataIssue, TestRecord
from .presenter import (
    cache_issue,
    clear_cache_report,
    duplicate_name_issue,
    report_cache_issue,
    report_error,
    show_source,
)
from .renderer import generate_source
from .validator import validate_cache

logger = get_logger("generator")

CompletionCallback = Callable[[Iterable[Any], Any], List[MetadataIssue]]

class MetadataGenerator:
    """Extracts, validates and presents test metadata after a run.

    Attributes:
        surface: Document surface messages are applied to
        anchor_id: Id of the element messages are inserted before
        metadata: Metadata extracted during the last run, by test name
        issues: Issues reported during the last run
    """

    def __init__(self, surface: Optional[DocumentSurface] = None, anchor_id: Optional[str] = None):
        self.surface = surface if surface is not None else Document()
        self.anchor_id = anchor_id or get_config().summary_id
        self.metadata: Dict[str, Dict[str, Any]] = {}
        self.issues: List[MetadataIssue] = []

    def error(self, issue: MetadataIssue) -> None:
        """Report an issue as its own message element."""
        logger.error(issue.message)
        self.issues.append(issue)
        self.surface.apply(report_error(issue, self.anchor_id))

    def generate_source(self) -> str:
        """Generate source code caching the metadata of the last run."""
        return generate_source(self.metadata)

    def add_source_element(self) -> None:
        """Replace the cache message with the generated source code."""
        logger.debug("Adding metadata source element")
        self.surface.apply(show_source(self.generate_source()))

    def collect(self, tests: Iterable[Union[TestRecord, Mapping[str, Any]]]) -> Dict[str, Dict[str, Any]]:
        """Extract metadata from every test, reporting duplicate names.

        The first test with a given name wins; later ones are reported.

        Args:
            tests: Completed test records, in run order

        Returns:
            The extracted metadata by test name

        Raises:
            ResultsLoadError: If a test given as a mapping is malformed
        """
        self.metadata = {}
        self.issues = []
        for test in tests:
            if not isinstance(test, TestRecord):
                test = TestRecord.from_dict(dict(test))
            if test.name in self.metadata:
                self.error(duplicate_name_issue(test.name))
            else:
                self.metadata[test.name] = extract_from_test(test)
        logger.debug(f"Extracted metadata for {len(self.metadata)} tests")
        return self.metadata

    def process(self, tests: Iterable[Union[TestRecord, Mapping[str, Any]]],
                harness_status: Any = None,
                cached_metadata: Optional[Dict[str, Any]] = None) -> List[MetadataIssue]:
        """Extract metadata from tests and compare it to the cached version.

        If the cache is absent or differs from the extracted metadata, a
        message offering the source code is added to the document.

        Args:
            tests: Completed test records, in run order
            harness_status: Overall harness status, accepted but not used
            cached_metadata: Previously cached metadata, None if the document
                has none; matched entries are removed from it

        Returns:
            Issues reported during this run

        Raises:
            ResultsLoadError: If a test given as a mapping has no name or
                malformed properties; TestRecord inputs never raise
        """
        logger.debug(f"Processing completed run, harness status: {harness_status!r}")
        self.collect(tests)
        self.surface.apply(clear_cache_report())

        valid = cached_metadata is not None and validate_cache(self.metadata, cached_metadata)
        issue = cache_issue(cached_metadata, valid)
        if issue is not None:
            logger.warning(issue.message)
            self.issues.append(issue)
            self.surface.apply(report_cache_issue(issue, self.add_source_element, self.anchor_id))
        return self.issues

    def completion_callback(self, cached_metadata: Optional[Dict[str, Any]] = None) -> CompletionCallback:
        """Build a completion callback bound to this generator.

        Args:
            cached_metadata: Cached metadata the callback validates against

        Returns:
            Callable taking (tests, harness_status)
        """
        def callback(tests, harness_status):
            return self.process(tests, harness_status, cached_metadata)
        return callback

    def setup(self, harness: Any, cached_metadata: Optional[Dict[str, Any]] = None) -> None:
        """Register with a harness exposing add_completion_callback."""
        harness.add_completion_callback(self.completion_callback(cached_metadata))
