"""Document element and operation models.

The presenter never touches a document directly. It describes what should
change as a list of operations, and a document surface applies them.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

@dataclass
class Element:
    """A document element.

    Attributes:
        tag: Element tag name ('p', 'a', 'div', 'pre')
        id: Identifying marker, if any
        css_class: Class attribute, if any
        text: Text content placed before the children
        children: Child elements
        href: Link target for anchors
        action: Callback run when the element is activated
    """
    tag: str
    id: Optional[str] = None
    css_class: Optional[str] = None
    text: str = ''
    children: List['Element'] = field(default_factory=list)
    href: Optional[str] = None
    action: Optional[Callable[[], None]] = None

    def iter(self):
        """Yield this element and all of its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.iter()

    def text_content(self) -> str:
        """Return the concatenated text of this element and its descendants."""
        return ''.join(element.text for element in self.iter())

    def find_link(self) -> Optional['Element']:
        """Return the first descendant carrying an action, if any."""
        for element in self.iter():
            if element.action is not None:
                return element
        return None

@dataclass(frozen=True)
class InsertBefore:
    """Insert an element before the anchor; append to the body if the anchor is missing."""
    anchor_id: str
    element: Element

@dataclass(frozen=True)
class InsertAfter:
    """Insert an element right after an existing target element."""
    target_id: str
    element: Element

@dataclass(frozen=True)
class Remove:
    """Remove an element; a missing target is an error unless missing_ok."""
    target_id: str
    missing_ok: bool = False

DocumentOperation = Union[InsertBefore, InsertAfter, Remove]
