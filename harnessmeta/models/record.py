"""Test record and issue models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..errors import ResultsLoadError
from ..types import IssueKind, MessageClass

@dataclass(frozen=True)
class TestRecord:
    """One completed test as reported by the harness.

    Attributes:
        name: Unique test name
        properties: Declared test properties, metadata keys included
        status: Harness status code of the test
        message: Harness message for the test
    """
    __test__ = False

    name: str
    properties: Mapping[str, Any] = field(default_factory=dict)
    status: Optional[int] = None
    message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TestRecord':
        """Create a TestRecord from a results-file entry.

        Args:
            data: Dictionary with 'name' and optional 'properties',
                'status' and 'message'

        Returns:
            TestRecord instance

        Raises:
            ResultsLoadError: If the entry is not a mapping or has no name
        """
        if not isinstance(data, dict):
            raise ResultsLoadError("Test entry must be a mapping", {"entry": data})
        if data.get('name') is None:
            raise ResultsLoadError("Test entry has no name", {"entry": data})
        properties = data.get('properties') or {}
        if not isinstance(properties, dict):
            raise ResultsLoadError(
                f"Properties of test '{data['name']}' must be a mapping",
                {"properties": properties}
            )
        return cls(
            name=str(data['name']),
            properties=properties,
            status=data.get('status'),
            message=data.get('message')
        )

@dataclass(frozen=True)
class MetadataIssue:
    """A problem reported while processing a completed run."""
    kind: IssueKind
    message: str
    severity: MessageClass
