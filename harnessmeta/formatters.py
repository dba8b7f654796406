"""Console output for harness metadata results."""

from typing import Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .document import Document
from .models import Element
from .types import SOURCE_ID, MessageClass

MESSAGE_STYLES: Dict[str, str] = {
    MessageClass.WARNING.value: 'bold yellow',
    MessageClass.ERROR.value: 'bold red',
}

class RichDocumentSurface(Document):
    """Document that also prints every inserted element to a Rich console.

    Message paragraphs are styled by their class; the rendered source block
    is shown inside a panel so it can be copied as is.
    """

    def __init__(self, console: Console, elements=None):
        """Initialize the surface with a Rich console.

        Args:
            console: Rich console instance for output
            elements: Initial top-level elements of the document
        """
        super().__init__(elements)
        self.console = console

    def on_insert(self, element: Element) -> None:
        if element.id == SOURCE_ID:
            self.console.print(self.format_source(element))
        else:
            self.console.print(self.format_message(element))

    def format_message(self, element: Element) -> Text:
        """Format a message paragraph, link text included.

        Args:
            element: The message element

        Returns:
            Styled Rich text
        """
        style = MESSAGE_STYLES.get(element.css_class or '', '')
        text = Text(element.text, style=style)
        link = element.find_link()
        if link is not None:
            text.append(link.text, style='underline')
        return text

    def format_source(self, element: Element) -> Panel:
        """Format the source wrapper as a panel titled with its instructions.

        Args:
            element: The wrapper element holding instructions and source

        Returns:
            A Rich panel containing the source
        """
        instructions: Optional[Text] = None
        source = ''
        for child in element.children:
            if child.tag == 'pre':
                source = child.text
            elif child.tag == 'p':
                instructions = Text(child.text)
        return Panel(Text(source.rstrip('\n')), title=instructions, title_align='left', expand=False)
