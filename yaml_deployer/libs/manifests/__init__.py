"""
Manifest Libraries

Reading YAML manifest files and decoding their documents into typed resources.
"""

from .reader import ManifestReader
from .scheme import GroupVersionKind, ResourceScheme

__all__ = [
    'ManifestReader',
    'GroupVersionKind',
    'ResourceScheme'
]
