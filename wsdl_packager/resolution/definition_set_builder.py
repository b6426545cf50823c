"""Builds the set of resolved definition documents for a conversion request."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from lxml import etree

from wsdl_packager.domain.constants import LOCATION_DELIMITER_RE, WSDL_QUERY_SUFFIX
from wsdl_packager.domain.exceptions import DefinitionParseError
from wsdl_packager.domain.models import DefinitionDocument
from wsdl_packager.domain.xml_utils import parse_xml
from wsdl_packager.fetcher import ResourceFetcher
from wsdl_packager.resolution.import_resolver import ImportResolver

logger = logging.getLogger(__name__)


def split_locations(location_list: str) -> list[str]:
    """Split a ``; , | newline tab`` delimited list, dropping blank entries."""
    return [token.strip() for token in LOCATION_DELIMITER_RE.split(location_list or '') if token.strip()]


class DefinitionSetBuilder:
    """Turns a delimited list of locations into flattened definition documents.

    Each location is fetched as given, then with a ``?WSDL`` suffix;
    unreachable locations are skipped. A response without any markup is read
    as a further list of locations when ``expand_location_lists`` is set.

    Args:
        fetcher: Source of document text (carries the request credentials).
        resolver: Import resolver; defaults to one over the same fetcher.
        expand_location_lists: Treat non-markup responses as location lists.
        max_workers: Resolve imports of independent documents in parallel.
    """

    def __init__(
        self,
        fetcher: ResourceFetcher,
        resolver: ImportResolver | None = None,
        expand_location_lists: bool = True,
        max_workers: int = 1,
    ):
        self._fetcher = fetcher
        self._resolver = resolver or ImportResolver(fetcher)
        self._expand_location_lists = expand_location_lists
        self._max_workers = max(1, max_workers)

    def build(self, location_list: str) -> list[DefinitionDocument]:
        """Fetch, parse and resolve every document named in ``location_list``.

        Returns:
            Documents in first-discovered order (depth-first through any
            expanded location lists).

        Raises:
            DefinitionParseError: A fetched document is not well-formed.
            MalformedImportError, UnresolvedImportError: Import resolution failed.
        """
        documents: list[DefinitionDocument] = []
        self._collect(location_list, documents, expanding=set())

        if self._max_workers > 1 and len(documents) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                # Each call gets its own visited set; list() re-raises failures
                list(pool.map(self._resolver.resolve, documents))
        else:
            for doc in documents:
                self._resolver.resolve(doc)

        logger.info('Built %d definition(s) from %r', len(documents), location_list)
        return documents

    def _collect(self, location_list: str, documents: list[DefinitionDocument],
                 expanding: set[str]) -> None:
        for location in split_locations(location_list):
            data = self._fetcher.fetch(location)
            if data is None:
                location = location + WSDL_QUERY_SUFFIX
                data = self._fetcher.fetch(location)
            if data is None:
                logger.warning('Skipping unreachable location %s', location)
                continue

            if '<' not in data:
                self._expand_list(location, data, documents, expanding)
                continue

            try:
                root = parse_xml(data)
            except etree.XMLSyntaxError as e:
                raise DefinitionParseError(location, str(e)) from e
            documents.append(DefinitionDocument(location=location, root=root))

    def _expand_list(self, location: str, data: str, documents: list[DefinitionDocument],
                     expanding: set[str]) -> None:
        """Treat a non-markup response as a further list of locations."""
        if not self._expand_location_lists:
            logger.warning('Skipping %s: response is not a markup document', location)
            return
        if location in expanding:
            logger.warning('Skipping %s: location list refers back to itself', location)
            return
        logger.debug('Expanding location list returned by %s', location)
        expanding.add(location)
        try:
            self._collect(data, documents, expanding)
        finally:
            expanding.discard(location)
