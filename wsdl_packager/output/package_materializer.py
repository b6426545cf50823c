"""Materializes package descriptors into an output directory."""

import logging
import os
import shutil
import stat
from pathlib import Path

from wsdl_packager.domain.exceptions import PathEscapeError, SourceNotFoundError
from wsdl_packager.domain.models import (
    Directive,
    FileDirective,
    FolderDirective,
    IncludeDirective,
    PackageDescriptor,
)

logger = logging.getLogger(__name__)

_WINDOWS_HIDDEN = getattr(stat, 'FILE_ATTRIBUTE_HIDDEN', 0x2)
_BSD_HIDDEN = getattr(stat, 'UF_HIDDEN', 0x8000)


def is_hidden(path: str) -> bool:
    """Whether the filesystem marks ``path`` as hidden.

    Uses the hidden attribute on Windows and the ``UF_HIDDEN`` flag on
    BSD/macOS; other systems have no attribute, so dot-prefixed names count.
    """
    st = os.lstat(path)
    attributes = getattr(st, 'st_file_attributes', None)
    if attributes is not None:
        return bool(attributes & _WINDOWS_HIDDEN)
    flags = getattr(st, 'st_flags', None)
    if flags is not None and flags & _BSD_HIDDEN:
        return True
    return os.path.basename(path).startswith('.')


def _ignore_hidden(directory: str, names: list[str]) -> set[str]:
    return {name for name in names if is_hidden(os.path.join(directory, name))}


def contained_path(root: Path, relative: str) -> Path:
    """Join ``relative`` onto ``root``, refusing results that resolve outside ``root``.

    Raises:
        PathEscapeError: ``relative`` is absolute or climbs out with ``..``.
    """
    path = root / relative
    if not path.resolve().is_relative_to(root.resolve()):
        raise PathEscapeError(relative, str(root))
    return path


class PackageMaterializer:
    """Writes the directives of a package descriptor, in document order.

    Args:
        base_path: Root that ``copy`` sources of folder and include
            directives are resolved against.
    """

    def __init__(self, base_path: str = '.'):
        self._base_path = Path(base_path)

    def resolve_source(self, source: str) -> Path:
        """Map a ``copy`` value onto the base path (``~/`` and ``/`` prefixes are dropped)."""
        if source.startswith('~'):
            source = source[1:]
        return contained_path(self._base_path, source.lstrip('/\\'))

    def materialize(self, descriptor: PackageDescriptor, output_dir: str) -> str:
        """Apply every directive to ``output_dir``.

        Returns:
            The package name.

        Raises:
            SourceNotFoundError: A folder or include source does not exist.
            PathEscapeError: A source, ``as`` or ``filename`` value leaves its root.
        """
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        for directive in descriptor.directives:
            self._apply(directive, out)
        logger.info("Materialized package '%s' (%d directive(s))",
                    descriptor.name, len(descriptor.directives))
        return descriptor.name

    def _apply(self, directive: Directive, out: Path) -> None:
        if isinstance(directive, FolderDirective):
            self._copy_folder(directive, out)
        elif isinstance(directive, IncludeDirective):
            self._copy_file(directive, out)
        elif isinstance(directive, FileDirective):
            self._write_file(directive, out)
        else:
            raise TypeError(f'Unsupported directive: {directive!r}')

    def _copy_folder(self, directive: FolderDirective, out: Path) -> None:
        source = self.resolve_source(directive.copy)
        if not source.is_dir():
            raise SourceNotFoundError(directive.copy, 'folder')
        target = contained_path(out, directive.target or source.resolve().name)
        shutil.copytree(source, target, ignore=_ignore_hidden, dirs_exist_ok=True)
        logger.debug('Copied folder %s -> %s', source, target)

    def _copy_file(self, directive: IncludeDirective, out: Path) -> None:
        source = self.resolve_source(directive.copy)
        if not source.is_file():
            raise SourceNotFoundError(directive.copy, 'file')
        target = contained_path(out, directive.target or source.name)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        logger.debug('Copied file %s -> %s', source, target)

    @staticmethod
    def _write_file(directive: FileDirective, out: Path) -> None:
        target = contained_path(out, directive.filename)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, 'w', encoding='utf-8', newline='') as f:
            f.write(directive.content)
        logger.debug('Wrote %s (%d chars)', target, len(directive.content))
