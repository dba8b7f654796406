"""Pretty-printed source generation for captured metadata.

The output is JSON laid out for humans: single-line arrays stay inline,
longer arrays put one element per line aligned under the first element,
and every object key gets its own line.

Example:
    >>> print(generate_source({"t1": {"help": ["h1"]}}))
    <script id="test_metadata">
    var cached_metadata = {
      "t1": {
        "help": ["h1"]
      }
    }
    </script>
    <BLANKLINE>
"""

import json
from typing import Any, Mapping, Sequence

from .types import CACHE_BINDING, SCRIPT_ID

def _literal(value: Any) -> str:
    # "<\/" keeps a "</script>" inside a string from closing the block
    return json.dumps(value, ensure_ascii=False, default=str).replace('</', '<\\/')

def jsonify_array(array_value: Sequence[Any], indent: str) -> str:
    """Render a sequence, continuation lines prefixed with indent plus two spaces.

    Args:
        array_value: The sequence to render
        indent: Indent of the column the first element starts at, minus two

    Returns:
        The rendered array
    """
    if len(array_value) == 1:
        return '[' + _literal(array_value[0]) + ']'
    separator = ',\n  ' + indent
    return '[' + separator.join(_literal(item) for item in array_value) + ']'

def jsonify_object(object_value: Mapping[str, Any], indent: str) -> str:
    """Render a mapping with one key per line, nested two spaces below indent.

    Args:
        object_value: The mapping to render
        indent: Indent of the line holding the opening brace

    Returns:
        The rendered object
    """
    output = '{'
    first = True
    for key, value in object_value.items():
        if not first:
            output += ','
        first = False
        quoted_key = _literal(str(key))
        output += '\n  ' + indent + quoted_key + ': '
        if isinstance(value, (list, tuple)):
            # Align continuation lines with the first element after '<key>: ['
            output += jsonify_array(value, indent + ' ' * (len(quoted_key) + 3))
        elif isinstance(value, Mapping):
            output += jsonify_object(value, indent + '  ')
        else:
            output += _literal(value)
    if len(output) > 1:
        output += '\n' + indent
    output += '}'
    return output

def render_literal(metadata: Mapping[str, Any]) -> str:
    """Render the metadata mapping as a pretty-printed JSON literal."""
    return jsonify_object(metadata, '')

def generate_source(metadata: Mapping[str, Any]) -> str:
    """Generate the script block caching the captured metadata.

    Args:
        metadata: Extracted metadata by test name

    Returns:
        Source to paste into the head of the test document
    """
    return (
        f'<script id="{SCRIPT_ID}">\n'
        f'var {CACHE_BINDING} = {render_literal(metadata)}\n'
        '</script>\n'
    )
