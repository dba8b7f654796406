"""Document surfaces that apply presenter operations.

A surface is whatever the messages end up on. `Document` keeps an
in-memory element tree addressed by element id; other surfaces build on it
and add their own output.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from .errors import DocumentError
from .logger import get_logger
from .models import Element, InsertAfter, InsertBefore, Remove, DocumentOperation

logger = get_logger("document")

class DocumentSurface(ABC):
    """Base class for anything presenter operations can be applied to."""

    @abstractmethod
    def apply(self, operations: Iterable[DocumentOperation]) -> None:
        """Apply operations in order.

        Args:
            operations: Operations produced by the presenter

        Raises:
            DocumentError: If an operation targets a missing element
        """
        pass

class Document(DocumentSurface):
    """In-memory document body.

    Example:
        >>> doc = Document([Element(tag='div', id='summary')])
        >>> doc.apply([InsertBefore('summary', Element(tag='p', text='hi'))])
        >>> [element.tag for element in doc.body.children]
        ['p', 'div']
    """

    def __init__(self, elements: Optional[Iterable[Element]] = None):
        self.body = Element(tag='body', children=list(elements or []))

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        """Return the element carrying element_id, or None."""
        located = self._locate(element_id)
        if located is None:
            return None
        parent, index = located
        return parent.children[index]

    def elements(self) -> List[Element]:
        """Top-level elements of the body, in document order."""
        return list(self.body.children)

    def apply(self, operations: Iterable[DocumentOperation]) -> None:
        for operation in operations:
            if isinstance(operation, InsertBefore):
                self._insert_before(operation)
            elif isinstance(operation, InsertAfter):
                self._insert_after(operation)
            elif isinstance(operation, Remove):
                self._remove(operation)
            else:
                raise DocumentError(f"Unsupported document operation: {operation!r}")

    def activate(self, element_id: str) -> None:
        """Activate the link inside the element carrying element_id.

        Raises:
            DocumentError: If the element is missing or holds no link
        """
        element = self.get_element_by_id(element_id)
        if element is None:
            raise DocumentError(f"No element with id '{element_id}'")
        link = element.find_link()
        if link is None:
            raise DocumentError(f"Element '{element_id}' has no link to activate")
        logger.debug(f"Activating link in '{element_id}'")
        link.action()

    def _locate(self, element_id: str) -> Optional[Tuple[Element, int]]:
        for parent in self.body.iter():
            for index, child in enumerate(parent.children):
                if child.id == element_id:
                    return parent, index
        return None

    def _insert_before(self, operation: InsertBefore) -> None:
        located = self._locate(operation.anchor_id)
        if located is None:
            self.body.children.append(operation.element)
        else:
            parent, index = located
            parent.children.insert(index, operation.element)
        self.on_insert(operation.element)

    def _insert_after(self, operation: InsertAfter) -> None:
        located = self._locate(operation.target_id)
        if located is None:
            raise DocumentError(f"No element with id '{operation.target_id}'")
        parent, index = located
        parent.children.insert(index + 1, operation.element)
        self.on_insert(operation.element)

    def _remove(self, operation: Remove) -> None:
        located = self._locate(operation.target_id)
        if located is None:
            if operation.missing_ok:
                return
            raise DocumentError(f"No element with id '{operation.target_id}'")
        parent, index = located
        del parent.children[index]

    def on_insert(self, element: Element) -> None:
        """Hook run after an element is inserted."""
        pass
