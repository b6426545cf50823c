"""Small helpers around lxml shared by every module that touches XML."""

import re
from xml.sax.saxutils import escape

from lxml import etree

_XML_DECLARATION_RE = re.compile(r'^\s*<\?xml[^>]*\?>')


def make_parser() -> etree.XMLParser:
    """Parser for untrusted documents: no entity expansion, no network access."""
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


def parse_xml(text: str | bytes) -> etree._Element:
    """Parse document text and return its root element.

    lxml refuses ``str`` input carrying an encoding declaration, so text is
    stripped of its declaration and re-encoded as UTF-8.

    Raises:
        etree.XMLSyntaxError: If the text is not well-formed.
    """
    if isinstance(text, str):
        text = _XML_DECLARATION_RE.sub('', text.lstrip('\ufeff'), count=1).encode('utf-8')
    return etree.fromstring(text, make_parser())


def local_name(tag) -> str:
    """Return the tag without its namespace, or '' for comments and PIs."""
    if not isinstance(tag, str):
        return ''
    if '}' in tag:
        return tag.split('}')[1]
    return tag


def inner_xml(element: etree._Element) -> str:
    """Serialize the element's content (text plus children) without its own tags."""
    parts = [escape(element.text or '')]
    for child in element:
        parts.append(etree.tostring(child, encoding='unicode', with_tail=True))
    return ''.join(parts)


def inner_text(element: etree._Element) -> str:
    """Concatenated text content with entities resolved and markup stripped."""
    return str(element.xpath('string()'))
