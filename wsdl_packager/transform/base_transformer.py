"""Base class for transform engines that turn definitions into package descriptors."""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from lxml import etree


class Transformer(ABC):
    """Turns a definition document into a package descriptor document."""

    @abstractmethod
    def transform(self, document: etree._Element, parameters: Mapping[str, str] | None = None) -> etree._Element:
        """
        Transform a definition (or index) document.

        Args:
            document: Root element of the resolved definition.
            parameters: Caller parameters, in order. Values are strings;
                parameters the engine cannot accept are skipped.

        Returns:
            Root element of the package descriptor.
        """
