"""Harness-side loading of completed runs and cached metadata.

Results files are YAML or JSON, either a plain list of tests or a mapping
with the tests and the overall harness status:

    status: {status: 0, message: null}
    tests:
      - name: t1
        status: 0
        properties:
          help: [h1]

Cached metadata lives in the test document as the block produced by
`harnessmeta.renderer.generate_source`, or in a sidecar file holding the
same block or just the assignment.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .errors import CacheParseError, ResultsLoadError
from .logger import get_logger
from .models import TestRecord
from .types import CACHE_BINDING, SCRIPT_ID

logger = get_logger("harness")

SCRIPT_BLOCK_PATTERN = re.compile(
    r'<script\b[^>]*\bid\s*=\s*["\']' + re.escape(SCRIPT_ID) + r'["\'][^>]*>(.*?)</script\s*>',
    re.DOTALL | re.IGNORECASE
)
ASSIGNMENT_PATTERN = re.compile(
    r'^\s*(?:(?:var|let|const)\s+)?(?:window\.)?' + re.escape(CACHE_BINDING) + r'\s*=\s*(.*?)\s*;?\s*$',
    re.DOTALL
)

class ResultsLoader(yaml.SafeLoader):
    """Safe YAML loader that keeps date-like scalars as plain strings."""

ResultsLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != 'tag:yaml.org,2002:timestamp']
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

def load_results(path: Union[str, Path]) -> Tuple[List[TestRecord], Any]:
    """Load completed test records from a results file.

    Args:
        path: Path to a .json, .yaml or .yml results file

    Returns:
        Tuple of the test records in run order and the harness status

    Raises:
        ResultsLoadError: If the file cannot be read or has the wrong shape
    """
    path = Path(path)
    try:
        content = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ResultsLoadError(f"Failed to read results file {path}: {str(e)}", {"path": str(path)})

    try:
        if path.suffix.lower() == '.json':
            data = json.loads(content)
        else:
            data = yaml.load(content, Loader=ResultsLoader)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ResultsLoadError(f"Invalid results file {path}: {str(e)}", {"path": str(path)})

    harness_status = None
    if isinstance(data, dict):
        harness_status = data.get('status')
        data = data.get('tests')
    if data is None:
        data = []
    if not isinstance(data, list):
        raise ResultsLoadError(f"Results file {path} must hold a list of tests", {"path": str(path)})

    records = [TestRecord.from_dict(entry) for entry in data]
    logger.debug(f"Loaded {len(records)} test records from {path}")
    return records, harness_status

def parse_cached_metadata(text: str, sidecar: bool = False) -> Optional[Dict[str, Any]]:
    """Read the cached metadata mapping from document or sidecar text.

    Args:
        text: Content of the test document or sidecar file
        sidecar: Whether text may be a bare assignment without a script block

    Returns:
        The cached mapping, or None if the text holds no cached metadata

    Raises:
        CacheParseError: If a cached metadata block is present but malformed
    """
    match = SCRIPT_BLOCK_PATTERN.search(text)
    if match is not None:
        body = match.group(1)
    elif sidecar and text.strip():
        body = text
    else:
        return None

    assignment = ASSIGNMENT_PATTERN.match(body)
    if assignment is None:
        raise CacheParseError(f"No '{CACHE_BINDING}' assignment in cached metadata block")

    try:
        cached_metadata = json.loads(assignment.group(1))
    except json.JSONDecodeError as e:
        raise CacheParseError(
            f"Invalid cached metadata literal: {e.msg}",
            {"line": e.lineno, "column": e.colno}
        )
    if not isinstance(cached_metadata, dict):
        raise CacheParseError("Cached metadata must be an object keyed by test name")
    return cached_metadata

def load_cached_metadata(document_path: Optional[Union[str, Path]] = None,
                         sidecar_path: Optional[Union[str, Path]] = None) -> Optional[Dict[str, Any]]:
    """Load cached metadata from a sidecar file or from the test document.

    Args:
        document_path: The test document
        sidecar_path: The metadata sidecar file; takes precedence when given

    Returns:
        The cached mapping, or None if there is none

    Raises:
        ResultsLoadError: If the file cannot be read
        CacheParseError: If the cached metadata is malformed
    """
    path = sidecar_path if sidecar_path is not None else document_path
    if path is None:
        return None
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ResultsLoadError(f"Failed to read {path}: {str(e)}", {"path": str(path)})
    logger.debug(f"Reading cached metadata from {path}")
    return parse_cached_metadata(text, sidecar=sidecar_path is not None)
