"""Builds the index document listing every generated class."""

from lxml import etree

from wsdl_packager.domain.constants import INDEX_DOCUMENT_NAME
from wsdl_packager.domain.models import DefinitionDocument


class IndexBuilder:
    """Aggregates the class names of all materialized packages."""

    def build(self, classes: list[str]) -> DefinitionDocument:
        """Return ``<index><class>Name</class>...</index>`` in collection order."""
        root = etree.Element('index')
        for class_name in classes:
            etree.SubElement(root, 'class').text = class_name
        return DefinitionDocument(location='', root=root, name=INDEX_DOCUMENT_NAME)
