"""Tests for ImportResolver."""

import pytest
from lxml import etree

from tests.conftest import (
    ALPHA_TYPES_XSD,
    ALPHA_WSDL,
    GAMMA_MESSAGES_WSDL,
    GAMMA_WSDL,
    schema,
    xsd_import,
)
from wsdl_packager.domain.exceptions import MalformedImportError, UnresolvedImportError
from wsdl_packager.domain.models import DefinitionDocument
from wsdl_packager.domain.xml_utils import parse_xml
from wsdl_packager.resolution.import_resolver import ImportResolver

XS = '{http://www.w3.org/2001/XMLSchema}'
WSDL = '{http://schemas.xmlsoap.org/wsdl/}'


def _doc(text: str, location: str = 'http://example.com/root.wsdl') -> DefinitionDocument:
    return DefinitionDocument(location=location, root=parse_xml(text))


def _names(root, tag: str) -> list[str]:
    return [el.get('name') for el in root.iter(tag)]


def _imports(root) -> list:
    return list(root.iter(f'{XS}import')) + list(root.iter(f'{WSDL}import'))


class TestImportResolver:
    """Tests for flattening schema and WSDL imports."""

    def test_inlines_schema_import_in_order(self, make_fetcher):
        fetcher = make_fetcher({'http://example.com/alpha-types.xsd': ALPHA_TYPES_XSD})
        doc = _doc(ALPHA_WSDL, 'http://example.com/alpha.wsdl')

        ImportResolver(fetcher).resolve(doc)

        schema_el = doc.root.find(f'{WSDL}types/{XS}schema')
        children = [el.get('name') for el in schema_el if isinstance(el.tag, str)]
        assert children == ['First', 'Second', 'Ping']
        assert _imports(doc.root) == []

    def test_inlines_wsdl_import(self, make_fetcher):
        fetcher = make_fetcher({'http://example.com/gamma-messages.wsdl': GAMMA_MESSAGES_WSDL})
        doc = _doc(GAMMA_WSDL, 'http://example.com/gamma.wsdl')

        ImportResolver(fetcher).resolve(doc)

        assert _names(doc.root, f'{WSDL}message') == ['GammaRequest', 'GammaResponse']
        assert [el.tag for el in doc.root if isinstance(el.tag, str)][-1] == f'{WSDL}service'
        assert _imports(doc.root) == []

    def test_resolving_resolved_document_is_noop(self, make_fetcher):
        fetcher = make_fetcher({'http://example.com/alpha-types.xsd': ALPHA_TYPES_XSD})
        doc = _doc(ALPHA_WSDL, 'http://example.com/alpha.wsdl')
        resolver = ImportResolver(fetcher)
        resolver.resolve(doc)
        before = etree.tostring(doc.root)
        fetcher.calls.clear()

        resolver.resolve(doc)

        assert fetcher.calls == []
        assert etree.tostring(doc.root) == before

    def test_cyclic_imports_terminate(self, make_fetcher):
        fetcher = make_fetcher({
            'http://example.com/a.xsd': schema(xsd_import('b.xsd') + '<xs:element name="FromA"/>'),
            'http://example.com/b.xsd': schema(xsd_import('a.xsd') + '<xs:element name="FromB"/>'),
        })
        doc = _doc(schema(xsd_import('a.xsd')), 'http://example.com/root.xsd')

        ImportResolver(fetcher).resolve(doc)

        assert sorted(_names(doc.root, f'{XS}element')) == ['FromA', 'FromB']
        assert fetcher.calls.count('http://example.com/a.xsd') == 1
        assert fetcher.calls.count('http://example.com/b.xsd') == 1
        assert _imports(doc.root) == []

    def test_import_back_to_root_is_not_inlined(self, make_fetcher):
        fetcher = make_fetcher({
            'http://example.com/part.xsd': schema(xsd_import('root.xsd') + '<xs:element name="Part"/>'),
        })
        doc = _doc(schema(xsd_import('part.xsd') + '<xs:element name="Root"/>'), 'http://example.com/root.xsd')

        ImportResolver(fetcher).resolve(doc)

        assert _names(doc.root, f'{XS}element') == ['Part', 'Root']
        assert 'http://example.com/root.xsd' not in fetcher.calls

    def test_duplicate_import_inlined_once(self, make_fetcher):
        fetcher = make_fetcher({
            'http://example.com/shared.xsd': schema('<xs:element name="Shared"/>'),
        })
        body = xsd_import('shared.xsd') + '<xs:element name="Own"/>' + xsd_import('shared.xsd')
        doc = _doc(schema(body), 'http://example.com/root.xsd')

        ImportResolver(fetcher).resolve(doc)

        assert _names(doc.root, f'{XS}element') == ['Shared', 'Own']
        assert fetcher.calls == ['http://example.com/shared.xsd']
        assert _imports(doc.root) == []

    def test_nested_relative_imports_resolved_against_their_document(self, make_fetcher):
        fetcher = make_fetcher({
            'http://example.com/types/a.xsd': schema(xsd_import('b.xsd') + '<xs:element name="A"/>'),
            'http://example.com/types/b.xsd': schema('<xs:element name="B"/>'),
        })
        doc = _doc(schema(xsd_import('types/a.xsd')), 'http://example.com/root.xsd')

        ImportResolver(fetcher).resolve(doc)

        assert _names(doc.root, f'{XS}element') == ['B', 'A']
        assert fetcher.calls == ['http://example.com/types/a.xsd', 'http://example.com/types/b.xsd']

    def test_explicit_visited_set_is_respected_and_updated(self, make_fetcher):
        fetcher = make_fetcher({'http://example.com/b.xsd': schema('<xs:element name="B"/>')})
        body = xsd_import('a.xsd') + xsd_import('b.xsd')
        doc = _doc(schema(body), 'http://example.com/root.xsd')
        visited = {'http://example.com/a.xsd'}

        ImportResolver(fetcher).resolve(doc, visited)

        assert fetcher.calls == ['http://example.com/b.xsd']
        assert visited == {'http://example.com/a.xsd', 'http://example.com/b.xsd'}

    def test_empty_imported_document_removes_import(self, make_fetcher):
        fetcher = make_fetcher({'http://example.com/empty.xsd': schema('')})
        doc = _doc(schema(xsd_import('empty.xsd') + '<xs:element name="Own"/>'), 'http://example.com/root.xsd')

        ImportResolver(fetcher).resolve(doc)

        assert _imports(doc.root) == []
        assert _names(doc.root, f'{XS}element') == ['Own']

    def test_missing_location_attribute_raises(self, make_fetcher):
        text = schema('<xs:import namespace="http://example.com/other"/>')
        doc = _doc(text)

        with pytest.raises(MalformedImportError, match='schemaLocation'):
            ImportResolver(make_fetcher({})).resolve(doc)

    def test_missing_wsdl_location_attribute_raises(self, make_fetcher):
        text = GAMMA_WSDL.replace(' location="gamma-messages.wsdl"', '')
        with pytest.raises(MalformedImportError, match="'location'"):
            ImportResolver(make_fetcher({})).resolve(_doc(text))

    def test_unreachable_import_raises_without_partial_commit(self, make_fetcher):
        fetcher = make_fetcher({'http://example.com/a.xsd': schema('<xs:element name="A"/>')})
        doc = _doc(schema(xsd_import('a.xsd') + xsd_import('missing.xsd')), 'http://example.com/root.xsd')
        original_root = doc.root
        before = etree.tostring(doc.root)

        with pytest.raises(UnresolvedImportError, match='missing.xsd'):
            ImportResolver(fetcher).resolve(doc)

        assert doc.root is original_root
        assert etree.tostring(doc.root) == before

    def test_unparsable_import_raises(self, make_fetcher):
        fetcher = make_fetcher({'http://example.com/broken.xsd': '<xs:schema'})
        doc = _doc(schema(xsd_import('broken.xsd')), 'http://example.com/root.xsd')

        with pytest.raises(UnresolvedImportError, match='could not be parsed'):
            ImportResolver(fetcher).resolve(doc)

    def test_local_file_imports(self, wsdl_dir):
        from wsdl_packager.fetcher import DefaultFetcher

        location = str(wsdl_dir / 'alpha.wsdl')
        doc = DefinitionDocument(location=location, root=parse_xml(ALPHA_WSDL))

        ImportResolver(DefaultFetcher()).resolve(doc)

        assert _names(doc.root, f'{XS}complexType') == ['First', 'Second']
