"""Conversion orchestration: WSDL locations -> packages -> archive.

One ``Converter`` serves one conversion request. It owns the scratch output
directory and the definition set, both created lazily on first access.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile

from wsdl_packager.domain.constants import (
    DEFAULT_ARCHIVE_NAME,
    PACKAGE_NAME_SEPARATOR,
    WSDL_EXTENSION,
    WSDL_FOLDER,
)
from wsdl_packager.domain.models import (
    ArchiveResult,
    ConvertOptions,
    ConvertResult,
    DefinitionDocument,
    PackageDescriptor,
)
from wsdl_packager.fetcher import DefaultFetcher, ResourceFetcher
from wsdl_packager.naming import derive_aggregate_name, join_package_names
from wsdl_packager.output.archive_writer import ArchiveWriter
from wsdl_packager.output.descriptor_reader import read_descriptor
from wsdl_packager.output.index_builder import IndexBuilder
from wsdl_packager.output.package_materializer import PackageMaterializer
from wsdl_packager.resolution.definition_set_builder import DefinitionSetBuilder, split_locations
from wsdl_packager.transform import Transformer, XsltTransformer

logger = logging.getLogger(__name__)


class Converter:
    """Converts a list of WSDL locations into generated packages.

    Args:
        locations: Delimited list of WSDL locations (``; , | newline tab``).
        options: Conversion options (package type, templates, credentials...).
        fetcher: Document source; defaults to a ``DefaultFetcher`` built from
            the options.
        transformer: Transform engine; defaults to the XSLT template for
            ``options.package_type``.
    """

    def __init__(
        self,
        locations: str,
        options: ConvertOptions,
        fetcher: ResourceFetcher | None = None,
        transformer: Transformer | None = None,
    ):
        self.locations = locations
        self.options = options
        self._fetcher = fetcher or DefaultFetcher(
            credentials=options.credentials,
            base_url=options.base_url,
            timeout=options.timeout,
            allow_local_files=options.allow_local_files,
        )
        self._transformer = transformer
        self._materializer = PackageMaterializer(options.base_path)
        self._output_directory: str | None = None
        self._definitions: list[DefinitionDocument] | None = None

    @property
    def output_directory(self) -> str:
        """Scratch directory for this conversion, created on first access."""
        if self._output_directory is None:
            self._output_directory = tempfile.mkdtemp(prefix='wsdl-packager-')
        return self._output_directory

    @output_directory.setter
    def output_directory(self, value: str) -> None:
        self._output_directory = value

    @property
    def definitions(self) -> list[DefinitionDocument]:
        """Resolved definition documents, built on first access."""
        if self._definitions is None:
            builder = DefinitionSetBuilder(
                self._fetcher,
                expand_location_lists=self.options.expand_location_lists,
                max_workers=self.options.max_workers,
            )
            self._definitions = builder.build(self.locations)
        return self._definitions

    @property
    def transformer(self) -> Transformer:
        if self._transformer is None:
            self._transformer = XsltTransformer.for_package_type(
                self.options.package_type, self.options.template_dir
            )
        return self._transformer

    def transform(self, document: DefinitionDocument) -> PackageDescriptor:
        """Run a document through the transform and read the resulting descriptor."""
        descriptor_root = self.transformer.transform(document.root, self.options.parameters)
        return read_descriptor(descriptor_root)

    def convert_to_packages(self) -> list[PackageDescriptor]:
        return [self.transform(doc) for doc in self.definitions]

    def convert(self) -> ConvertResult:
        """Write sources, packages and the index into the output directory."""
        output_dir = self.output_directory
        self.save_definitions(output_dir)

        packages: list[str] = []
        classes: list[str] = []
        for descriptor in self.convert_to_packages():
            packages.append(self._materializer.materialize(descriptor, output_dir))
            if descriptor.class_name:
                classes.append(descriptor.class_name)

        self.save_index(classes, output_dir)
        logger.info('Converted %d package(s) into %s', len(packages), output_dir)
        return ConvertResult(packages=packages, classes=classes, output_dir=output_dir)

    def save_definitions(self, output_dir: str) -> None:
        """Save every resolved source document as ``WSDL/{name}.wsdl``."""
        wsdl_dir = os.path.join(output_dir, WSDL_FOLDER)
        os.makedirs(wsdl_dir, exist_ok=True)
        for doc in self.definitions:
            doc.save(os.path.join(wsdl_dir, f'{doc.name}{WSDL_EXTENSION}'))

    def save_index(self, classes: list[str], output_dir: str) -> str:
        """Transform and materialize the index of generated classes."""
        index = IndexBuilder().build(classes)
        return self._materializer.materialize(self.transform(index), output_dir)

    def create_archive(self, destination_dir: str | None = None,
                       package_name: str | None = None) -> ArchiveResult:
        """Convert, zip the output directory, then delete it.

        Args:
            destination_dir: Directory receiving the zip file (a temporary
                directory when omitted).
            package_name: Archive base name; defaults to the package names
                joined by ``_``, then to a name derived from the first
                requested location.
        """
        result = self.convert()
        package_name = package_name or join_package_names(result.packages) or self._fallback_archive_name()
        path = ArchiveWriter.write(result.output_dir, package_name, destination_dir)
        self.cleanup()
        return ArchiveResult(path=path, package_name=package_name)

    def _fallback_archive_name(self) -> str:
        locations = split_locations(self.locations)
        name = derive_aggregate_name(locations[0]) if locations else None
        return (name or '').strip(PACKAGE_NAME_SEPARATOR) or DEFAULT_ARCHIVE_NAME

    def cleanup(self) -> None:
        """Remove the output directory if it was created."""
        if self._output_directory and os.path.exists(self._output_directory):
            shutil.rmtree(self._output_directory)
        self._output_directory = None
