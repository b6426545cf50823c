"""Shared test fixtures."""

import textwrap

import pytest
import requests

from wsdl_packager.fetcher import ResourceFetcher


# ── Sample XML Content ───────────────────────────────────────────────────

ALPHA_WSDL = """\
<?xml version="1.0" encoding="UTF-8"?>
<wsdl:definitions name="AlphaDefinitions"
    targetNamespace="http://example.com/alpha"
    xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/"
    xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <wsdl:types>
    <xs:schema targetNamespace="http://example.com/alpha">
      <xs:import namespace="http://example.com/alpha/types" schemaLocation="alpha-types.xsd"/>
      <xs:element name="Ping" type="xs:string"/>
    </xs:schema>
  </wsdl:types>
  <wsdl:portType name="AlphaPort">
    <wsdl:operation name="Ping"/>
    <wsdl:operation name="Echo"/>
  </wsdl:portType>
  <wsdl:service name="Alpha"/>
</wsdl:definitions>
"""

ALPHA_TYPES_XSD = """\
<?xml version="1.0" encoding="UTF-8"?>
<xs:schema targetNamespace="http://example.com/alpha/types"
    xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:complexType name="First"/>
  <xs:complexType name="Second"/>
</xs:schema>
"""

BETA_WSDL = """\
<?xml version="1.0" encoding="UTF-8"?>
<wsdl:definitions name="BetaDefinitions"
    targetNamespace="http://example.com/beta"
    xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/">
  <wsdl:portType name="BetaPort">
    <wsdl:operation name="Lookup"/>
  </wsdl:portType>
  <wsdl:service name="Beta"/>
</wsdl:definitions>
"""

# Root document pulling messages in through a WSDL import
GAMMA_WSDL = """\
<?xml version="1.0" encoding="UTF-8"?>
<wsdl:definitions name="Gamma"
    xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/">
  <wsdl:import namespace="http://example.com/gamma" location="gamma-messages.wsdl"/>
  <wsdl:service name="Gamma"/>
</wsdl:definitions>
"""

GAMMA_MESSAGES_WSDL = """\
<?xml version="1.0" encoding="UTF-8"?>
<wsdl:definitions xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/">
  <wsdl:message name="GammaRequest"/>
  <wsdl:message name="GammaResponse"/>
</wsdl:definitions>
"""


def schema(body: str, target: str = 'http://example.com/types') -> str:
    """Wrap schema content in an ``xs:schema`` root."""
    return (
        f'<xs:schema targetNamespace="{target}" '
        f'xmlns:xs="http://www.w3.org/2001/XMLSchema">{body}</xs:schema>'
    )


def xsd_import(location: str) -> str:
    return f'<xs:import namespace="http://example.com/types" schemaLocation="{location}"/>'


# ── Fetchers ─────────────────────────────────────────────────────────────

class DictFetcher(ResourceFetcher):
    """In-memory fetcher recording every location it was asked for."""

    def __init__(self, documents: dict[str, str]):
        self.documents = dict(documents)
        self.calls: list[str] = []

    def fetch(self, location: str) -> str | None:
        self.calls.append(location)
        return self.documents.get(location)


class FakeResponse:
    """Stand-in for ``requests.Response`` with the attributes the fetcher reads."""

    def __init__(self, text='', status_code=200, content_type='text/xml; charset=utf-8'):
        self.text = text
        self.status_code = status_code
        self.headers = {'Content-Type': content_type}
        self.encoding = None

    @property
    def ok(self):
        return self.status_code < 400


# ── Fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def make_fetcher():
    """Factory fixture building a DictFetcher from a location → text mapping."""
    def _make(documents: dict[str, str]) -> DictFetcher:
        return DictFetcher(documents)
    return _make


@pytest.fixture
def wsdl_dir(tmp_path):
    """Directory holding the alpha (with schema import) and beta WSDL files."""
    directory = tmp_path / 'wsdl'
    directory.mkdir()
    (directory / 'alpha.wsdl').write_text(ALPHA_WSDL, encoding='utf-8')
    (directory / 'alpha-types.xsd').write_text(ALPHA_TYPES_XSD, encoding='utf-8')
    (directory / 'beta.wsdl').write_text(BETA_WSDL, encoding='utf-8')
    return directory


@pytest.fixture
def tmp_template(tmp_path):
    """Write an XSLT stylesheet into a template directory and return its path."""
    def _write(content: str, name: str = 'custom') -> str:
        directory = tmp_path / 'templates'
        directory.mkdir(exist_ok=True)
        path = directory / f'{name}.xslt'
        path.write_text(textwrap.dedent(content), encoding='utf-8')
        return str(path)
    return _write


@pytest.fixture
def recorded_gets(monkeypatch):
    """Patch ``requests.Session.get`` and record (session, url, kwargs) per call.

    Register responses in ``recorded_gets.responses``; a response may also be
    an exception to raise. Unknown URLs answer 404.
    """
    calls = []
    responses = {}

    def fake_get(session, url, **kwargs):
        calls.append((session, url, kwargs))
        response = responses.get(url)
        if isinstance(response, Exception):
            raise response
        return response or FakeResponse(status_code=404)

    monkeypatch.setattr(requests.Session, 'get', fake_get)
    fake_get.calls = calls
    fake_get.responses = responses
    return fake_get
