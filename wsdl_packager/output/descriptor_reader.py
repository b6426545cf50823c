"""Reads package descriptor documents into validated directive lists.

Descriptor grammar::

    <package name="..." class="...">
        <folder copy="..." as="..."/>
        <include copy="..." as="..."/>
        <file filename="...">content</file>
    </package>

The root may also be named ``index``. Child names are matched
case-insensitively; anything else is ignored.
"""

import logging
import os

from lxml import etree

from wsdl_packager.domain.constants import (
    COPY_ATTRIBUTE,
    FILENAME_ATTRIBUTE,
    MARKUP_EXTENSION_PREFIX,
    PACKAGE_CLASS_ATTRIBUTE,
    PACKAGE_NAME_ATTRIBUTE,
    TARGET_ATTRIBUTE,
)
from wsdl_packager.domain.exceptions import MissingAttributeError
from wsdl_packager.domain.models import (
    Directive,
    FileDirective,
    FolderDirective,
    IncludeDirective,
    PackageDescriptor,
)
from wsdl_packager.domain.xml_utils import inner_text, inner_xml, local_name

logger = logging.getLogger(__name__)


def _required(element: etree._Element, attribute: str, element_name: str) -> str:
    value = element.get(attribute)
    if not value:
        raise MissingAttributeError(attribute, element_name)
    return value


def _read_folder(element: etree._Element) -> FolderDirective:
    return FolderDirective(
        copy=_required(element, COPY_ATTRIBUTE, 'folder'),
        target=element.get(TARGET_ATTRIBUTE) or None,
    )


def _read_include(element: etree._Element) -> IncludeDirective:
    return IncludeDirective(
        copy=_required(element, COPY_ATTRIBUTE, 'include'),
        target=element.get(TARGET_ATTRIBUTE) or None,
    )


def _read_file(element: etree._Element) -> FileDirective:
    filename = _required(element, FILENAME_ATTRIBUTE, 'file')
    extension = os.path.splitext(filename)[1].lower()
    if extension.startswith(MARKUP_EXTENSION_PREFIX):
        content = inner_xml(element)
    else:
        content = inner_text(element)
    return FileDirective(filename=filename, content=content)


_DIRECTIVE_READERS = {
    'folder': _read_folder,
    'include': _read_include,
    'file': _read_file,
}


def read_descriptor(root: etree._Element) -> PackageDescriptor:
    """Validate a descriptor document and parse its directives.

    Every directive is validated before anything is written, so a descriptor
    with a missing attribute never produces a partial package.

    Raises:
        MissingAttributeError: ``name`` on the root, ``copy`` on a folder or
            include, or ``filename`` on a file is missing or empty.
    """
    root_name = local_name(root.tag) or 'package'
    name = _required(root, PACKAGE_NAME_ATTRIBUTE, root_name)

    directives: list[Directive] = []
    for child in root:
        tag = local_name(child.tag).lower()
        reader = _DIRECTIVE_READERS.get(tag)
        if reader is None:
            if tag:
                logger.debug("Ignoring unknown element '%s' in package '%s'", tag, name)
            continue
        directives.append(reader(child))

    return PackageDescriptor(
        name=name,
        class_name=root.get(PACKAGE_CLASS_ATTRIBUTE) or None,
        directives=directives,
    )
