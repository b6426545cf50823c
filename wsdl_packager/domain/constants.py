"""Shared constants: namespaces, delimiters, and file layout names.

Centralizes the values shared across resolution, transformation, and output
modules.
"""

import re

# ── Namespaces ───────────────────────────────────────────────────────────

XSD_NS = 'http://www.w3.org/2001/XMLSchema'
WSDL_NS = 'http://schemas.xmlsoap.org/wsdl/'

XSD_IMPORT_TAG = f'{{{XSD_NS}}}import'
WSDL_IMPORT_TAG = f'{{{WSDL_NS}}}import'

# Import element tag → attribute holding its location, in scan order
IMPORT_LOCATION_ATTRIBUTES = (
    (XSD_IMPORT_TAG, 'schemaLocation'),
    (WSDL_IMPORT_TAG, 'location'),
)

# ── Location Lists ───────────────────────────────────────────────────────

LOCATION_DELIMITER_RE = re.compile(r'[;,|\n\t\r]')

# Metadata-endpoint convention tried when a plain location is unavailable
WSDL_QUERY_SUFFIX = '?WSDL'

# ── Naming ───────────────────────────────────────────────────────────────

NAMESPACE_SEGMENT_RE = re.compile(r'[/\\.:;]')
PACKAGE_NAME_SEPARATOR = '_'
DEFAULT_ARCHIVE_NAME = 'package'

# ── Output Layout ────────────────────────────────────────────────────────

WSDL_FOLDER = 'WSDL'
WSDL_EXTENSION = '.wsdl'
TEMPLATE_EXTENSION = '.xslt'
INDEX_DOCUMENT_NAME = 'index'

# ── Descriptor Grammar ───────────────────────────────────────────────────

PACKAGE_NAME_ATTRIBUTE = 'name'
PACKAGE_CLASS_ATTRIBUTE = 'class'
COPY_ATTRIBUTE = 'copy'
TARGET_ATTRIBUTE = 'as'
FILENAME_ATTRIBUTE = 'filename'

# Extensions (lowercased prefix) whose file content is the raw inner markup
MARKUP_EXTENSION_PREFIX = '.htm'
