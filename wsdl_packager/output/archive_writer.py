"""Zips a materialized output directory."""

import logging
import os
import shutil
import tempfile

from wsdl_packager.domain.exceptions import PathEscapeError

logger = logging.getLogger(__name__)


class ArchiveWriter:
    """Writes ``{package_name}.zip`` holding the contents of a directory."""

    @staticmethod
    def write(source_dir: str, package_name: str, destination_dir: str | None = None) -> str:
        """Archive ``source_dir`` and return the path of the zip file.

        Args:
            source_dir: Directory whose contents become the archive root.
            package_name: Base name of the archive; a plain file name.
            destination_dir: Where to put the archive; a fresh temporary
                directory when omitted.

        Raises:
            PathEscapeError: ``package_name`` contains a path separator or
                is ``.``/``..``.
        """
        if (package_name in ('.', '..') or '/' in package_name or '\\' in package_name
                or os.path.basename(package_name) != package_name):
            raise PathEscapeError(package_name, destination_dir or '<temporary directory>')
        destination_dir = destination_dir or tempfile.mkdtemp(prefix='wsdl-packager-')
        os.makedirs(destination_dir, exist_ok=True)
        base_name = os.path.join(destination_dir, package_name)
        path = shutil.make_archive(base_name, 'zip', source_dir)
        logger.info('Wrote archive %s', path)
        return path
