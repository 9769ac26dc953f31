"""
Manifest Reader

Reads a multi-document YAML file and splits it into resource documents.
"""

import logging
import os
from typing import Any, Dict, List, Tuple

import yaml

from ..core.constants import ErrorMessages, FileConstants
from ..core.exceptions import ManifestError

logger = logging.getLogger(__name__)


class ManifestReader:
    """Splits a YAML manifest file into its documents"""

    def __init__(self, path: str = FileConstants.DEFAULT_MANIFEST_FILE):
        """
        Initialize manifest reader

        Args:
            path: Manifest file path, relative paths resolve against the working directory
        """
        self.path = path

    def resolve_path(self) -> str:
        """Get the absolute path of the manifest file"""
        return os.path.abspath(os.path.expanduser(self.path))

    def read_documents(self) -> List[Dict[str, Any]]:
        """
        Read every non-empty YAML document from the manifest file

        Returns:
            List of documents in file order

        Raises:
            ManifestError: If the file is missing, unreadable or not valid YAML,
                           or a document is not a mapping
        """
        manifest_path = self.resolve_path()

        if not os.path.isfile(manifest_path):
            raise ManifestError(ErrorMessages.MANIFEST_NOT_FOUND.format(path=manifest_path))

        try:
            # Binary mode lets PyYAML detect the encoding and report bad bytes as a YAMLError
            with open(manifest_path, 'rb') as f:
                # Empty documents come from leading or trailing '---' separators
                documents = [doc for doc in yaml.safe_load_all(f) if doc is not None]
        except yaml.YAMLError as e:
            raise ManifestError(ErrorMessages.MANIFEST_INVALID_YAML.format(path=manifest_path, error=e)) from e
        except OSError as e:
            raise ManifestError(f"Failed to read manifest file {manifest_path}: {e}") from e

        for index, doc in enumerate(documents, 1):
            if not isinstance(doc, dict):
                raise ManifestError(ErrorMessages.MANIFEST_NOT_A_MAPPING.format(index=index, path=manifest_path))

        logger.debug(f"Read {len(documents)} documents from {manifest_path}")
        return documents

    def read_pair(self) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """
        Read the first two documents of the manifest file

        Returns:
            Tuple of (first document, second document)

        Raises:
            ManifestError: If the file holds fewer than two documents
        """
        documents = self.read_documents()
        expected = FileConstants.MANIFEST_DOCUMENT_COUNT

        if len(documents) < expected:
            raise ManifestError(ErrorMessages.MANIFEST_TOO_FEW_DOCUMENTS.format(
                path=self.resolve_path(), expected=expected, found=len(documents)
            ))

        if len(documents) > expected:
            logger.warning(f"Manifest file has {len(documents)} documents; only the first {expected} are applied")

        return documents[0], documents[1]
