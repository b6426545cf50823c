"""Shared data models used across resolution, transform, and output modules."""

from __future__ import annotations

from dataclasses import dataclass, field

from lxml import etree

from wsdl_packager.domain.constants import PACKAGE_NAME_SEPARATOR
from wsdl_packager.naming import derive_name


@dataclass
class Credentials:
    """Credentials attached to every fetch of a conversion request."""

    username: str | None = None
    password: str | None = None
    domain: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.username and not self.password


@dataclass
class DefinitionDocument:
    """A parsed service description (a WSDL or an imported fragment).

    ``name`` is derived from ``location`` when not given; an empty location
    leaves it unset until assigned explicitly.
    """

    location: str
    root: etree._Element
    name: str | None = None

    def __post_init__(self):
        if not self.name and self.location:
            self.name = derive_name(self.location)

    def save(self, path: str) -> None:
        """Write the document to ``path`` as UTF-8 with an XML declaration."""
        etree.ElementTree(self.root).write(path, xml_declaration=True, encoding='utf-8')

    def to_string(self) -> str:
        return etree.tostring(self.root, encoding='unicode')


@dataclass
class FolderDirective:
    """Copy a whole directory tree into the package."""

    copy: str
    target: str | None = None


@dataclass
class IncludeDirective:
    """Copy a single file into the package."""

    copy: str
    target: str | None = None


@dataclass
class FileDirective:
    """Write literal content to a file relative to the package root."""

    filename: str
    content: str = ''


Directive = FolderDirective | IncludeDirective | FileDirective


@dataclass
class PackageDescriptor:
    """A validated package descriptor, ready to be materialized."""

    name: str
    class_name: str | None = None
    directives: list[Directive] = field(default_factory=list)


@dataclass
class ConvertOptions:
    """Options controlling one conversion request."""

    package_type: str
    template_dir: str | None = None
    base_path: str = '.'
    base_url: str | None = None
    credentials: Credentials = field(default_factory=Credentials)
    parameters: dict[str, str] = field(default_factory=dict)
    expand_location_lists: bool = True
    timeout: float = 30.0
    max_workers: int = 1
    allow_local_files: bool = True


@dataclass
class ConvertResult:
    """Result summary of a conversion."""

    packages: list[str]
    classes: list[str]
    output_dir: str

    @property
    def package_name(self) -> str:
        return PACKAGE_NAME_SEPARATOR.join(self.packages)


@dataclass
class ArchiveResult:
    """Location of a finished archive and the name it was built under."""

    path: str
    package_name: str
