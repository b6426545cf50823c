"""
XSLT transform engine.

Package types map to stylesheets named ``{type}.xslt`` in a template
directory. Stylesheets receive every caller parameter as an XSLT string
parameter and must emit a package descriptor.
"""

import logging
import re
from collections.abc import Mapping
from pathlib import Path

from lxml import etree

from wsdl_packager.domain.constants import TEMPLATE_EXTENSION
from wsdl_packager.domain.exceptions import TemplateNotFoundError, TransformError
from wsdl_packager.transform.base_transformer import Transformer

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / 'templates'

# Package types are plain file stems, never paths
_PACKAGE_TYPE_RE = re.compile(r'^[A-Za-z0-9][\w.-]*$')

# XSLT parameter names must be NCNames
_PARAM_NAME_RE = re.compile(r'^[A-Za-z_][\w.-]*$')

# Keyword arguments of XSLT.__call__ itself
_RESERVED_PARAMS = {'_input', 'profile_run'}


def find_template(template_dir: str | Path | None, package_type: str) -> Path:
    """Locate the stylesheet for ``package_type``.

    Raises:
        TemplateNotFoundError: The type is not a plain name or has no stylesheet.
    """
    directory = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    if not package_type or not _PACKAGE_TYPE_RE.match(package_type):
        raise TemplateNotFoundError(f"Invalid package type '{package_type}'")
    path = directory / f'{package_type}{TEMPLATE_EXTENSION}'
    if not path.is_file():
        raise TemplateNotFoundError(f"No template for package type '{package_type}' in {directory}")
    return path


def list_templates(template_dir: str | Path | None = None) -> list[str]:
    """Return the package types available in ``template_dir``."""
    directory = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    if not directory.is_dir():
        return []
    return sorted(p.stem for p in directory.glob(f'*{TEMPLATE_EXTENSION}') if p.is_file())


class XsltTransformer(Transformer):
    """Applies a compiled XSLT 1.0 stylesheet.

    Args:
        template_path: Path to the ``.xslt`` stylesheet.
    """

    def __init__(self, template_path: str | Path):
        self.template_path = Path(template_path)
        try:
            stylesheet = etree.parse(str(self.template_path))
            self._xslt = etree.XSLT(stylesheet)
        except (OSError, etree.XMLSyntaxError, etree.XSLTParseError) as e:
            raise TransformError(f"Could not load template '{self.template_path}': {e}") from e

    @classmethod
    def for_package_type(cls, package_type: str, template_dir: str | Path | None = None) -> 'XsltTransformer':
        return cls(find_template(template_dir, package_type))

    def transform(self, document: etree._Element, parameters: Mapping[str, str] | None = None) -> etree._Element:
        params = self._build_params(parameters or {})
        try:
            result = self._xslt(etree.ElementTree(document), **params)
        except etree.XSLTApplyError as e:
            raise TransformError(f"Template '{self.template_path.name}' failed: {e}") from e

        root = result.getroot()
        if root is None:
            raise TransformError(f"Template '{self.template_path.name}' produced no document element")
        return root

    @staticmethod
    def _build_params(parameters: Mapping[str, str]) -> dict:
        params = {}
        for key, value in parameters.items():
            if not isinstance(key, str) or not _PARAM_NAME_RE.match(key) or key in _RESERVED_PARAMS:
                logger.debug('Skipping transform parameter %r: not a valid parameter name', key)
                continue
            params[key] = etree.XSLT.strparam('' if value is None else str(value))
        return params
