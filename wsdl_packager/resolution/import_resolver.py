"""Import resolution for definition documents.

Inlines every schema (``xsd:import``) and WSDL (``wsdl:import``) reference
into the importing document until no import element is left, producing one
self-contained definition.
"""

import copy
import logging

from lxml import etree

from wsdl_packager.domain.constants import IMPORT_LOCATION_ATTRIBUTES
from wsdl_packager.domain.exceptions import MalformedImportError, UnresolvedImportError
from wsdl_packager.domain.models import DefinitionDocument
from wsdl_packager.domain.xml_utils import local_name, parse_xml
from wsdl_packager.fetcher import ResourceFetcher, resolve_location

logger = logging.getLogger(__name__)


class ImportResolver:
    """Flattens the imports of a definition document into the document itself.

    Works as a fixed-point iteration: each pass inlines every import whose
    location has not been visited yet, and passes repeat until one inserts
    nothing. Each location is fetched at most once per top-level resolution,
    which also makes cyclic imports terminate.

    Args:
        fetcher: Source of imported document text.
    """

    def __init__(self, fetcher: ResourceFetcher) -> None:
        self._fetcher = fetcher

    def resolve(self, doc: DefinitionDocument, visited: set[str] | None = None) -> None:
        """Resolve all imports of ``doc`` (replaces ``doc.root`` on success).

        Args:
            doc: Document to flatten.
            visited: Absolute locations already inlined. A fresh set seeded
                with the document's own location is used when omitted.

        Raises:
            MalformedImportError: An import element has no location attribute.
            UnresolvedImportError: An imported document is unreachable or
                not well-formed.
        """
        base = self._fetcher.absolute_location(doc.location) if doc.location else None
        if visited is None:
            visited = {base} if base else set()

        # Work on a copy so a failure leaves the document untouched
        root = copy.deepcopy(doc.root)
        passes = 0
        while self._expand_pass(root, base, visited):
            passes += 1
        logger.debug('Resolved %s in %d pass(es), %d location(s) visited',
                     doc.location or '<inline>', passes + 1, len(visited))
        doc.root = root

    def _expand_pass(self, root: etree._Element, base: str | None, visited: set[str]) -> bool:
        """Run one scan over the tree. Returns True if anything was inserted."""
        inserted = False
        for tag, attribute in IMPORT_LOCATION_ATTRIBUTES:
            for import_el in list(root.iter(tag)):
                parent = import_el.getparent()
                if parent is None:
                    continue
                location = import_el.get(attribute)
                if location is None:
                    raise MalformedImportError(local_name(tag), attribute)
                location = resolve_location(location, base)

                if location in visited:
                    # Already inlined; dropped as well so no import element survives resolution
                    parent.remove(import_el)
                    continue

                children = self._load_children(location)
                position = parent.index(import_el)
                for offset, child in enumerate(children):
                    parent.insert(position + 1 + offset, child)
                parent.remove(import_el)
                visited.add(location)
                inserted = inserted or bool(children)
        return inserted

    def _load_children(self, location: str) -> list:
        """Fetch the imported document and return copies of its root's children."""
        text = self._fetcher.fetch(location)
        if text is None:
            raise UnresolvedImportError(location)
        try:
            imported_root = parse_xml(text)
        except etree.XMLSyntaxError as e:
            raise UnresolvedImportError(location, f'could not be parsed ({e})') from e

        logger.debug('Inlining %d node(s) from %s', len(imported_root), location)
        children = [copy.deepcopy(child) for child in imported_root]
        for child in children:
            self._absolutize_imports(child, location)
        return children

    @staticmethod
    def _absolutize_imports(node, location: str) -> None:
        """Rewrite relative import locations inside inlined content to absolute form."""
        if not isinstance(node.tag, str):
            return
        for tag, attribute in IMPORT_LOCATION_ATTRIBUTES:
            for import_el in node.iter(tag):
                value = import_el.get(attribute)
                if value is not None:
                    import_el.set(attribute, resolve_location(value, location))
