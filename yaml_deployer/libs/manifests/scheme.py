"""
Resource Scheme

Registry mapping group/version/kind triples to the typed models of the
Kubernetes Python client, and decoding of raw manifest documents into them.
"""

import json
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from kubernetes import client

from ..core.constants import ErrorMessages, KubernetesConstants
from ..core.exceptions import ManifestError

logger = logging.getLogger(__name__)


class GroupVersionKind(NamedTuple):
    """Identifies a resource type"""
    group: str
    version: str
    kind: str

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> 'GroupVersionKind':
        """
        Build a GVK from a document's apiVersion and kind

        Raises:
            ManifestError: If apiVersion or kind is missing
        """
        for field in ('apiVersion', 'kind'):
            if not document.get(field):
                raise ManifestError(ErrorMessages.MISSING_TYPE_INFO.format(field=field))

        api_version = str(document['apiVersion'])
        group, _, version = api_version.rpartition('/')
        return cls(group=group, version=version, kind=str(document['kind']))

    @property
    def api_version(self) -> str:
        """Get the apiVersion string (e.g. 'apps/v1', 'v1')"""
        return f"{self.group}/{self.version}" if self.group else self.version

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


class _JSONPayload:
    """Mimics the response object ApiClient.deserialize expects"""

    def __init__(self, data: str):
        self.data = data


class ResourceScheme:
    """Decodes manifest documents into typed Kubernetes client models"""

    # Built-in registrations: GVK -> kubernetes.client model class name
    DEFAULT_TYPES = {
        GroupVersionKind(KubernetesConstants.APPS_API_GROUP, "v1", str(KubernetesConstants.ResourceKind.DEPLOYMENT)): "V1Deployment",
        GroupVersionKind(KubernetesConstants.CORE_API_GROUP, "v1", str(KubernetesConstants.ResourceKind.SERVICE)): "V1Service",
        GroupVersionKind(KubernetesConstants.CORE_API_GROUP, "v1", str(KubernetesConstants.ResourceKind.POD)): "V1Pod",
    }

    def __init__(self, api_client: Optional[client.ApiClient] = None):
        """
        Initialize the scheme with the default registrations

        Args:
            api_client: Client used for deserialization (no requests are made)
        """
        self.api_client = api_client or client.ApiClient()
        self._types: Dict[GroupVersionKind, str] = dict(self.DEFAULT_TYPES)

    def register(self, gvk: GroupVersionKind, model_name: str) -> None:
        """
        Register a model for a GVK

        Args:
            gvk: Resource type to register
            model_name: Name of the kubernetes.client model class (e.g. 'V1ConfigMap')

        Raises:
            ValueError: If the model class does not exist in kubernetes.client
        """
        if not hasattr(client, model_name):
            raise ValueError(f"Unknown kubernetes client model: {model_name}")
        self._types[gvk] = model_name

    def is_registered(self, gvk: GroupVersionKind) -> bool:
        return gvk in self._types

    def recognized_kinds(self) -> List[GroupVersionKind]:
        return sorted(self._types)

    def decode(self, document: Dict[str, Any]) -> Tuple[Any, GroupVersionKind]:
        """
        Decode a manifest document into its typed model

        The document is serialized to JSON and deserialized into the model
        registered for its GVK, the same path API responses take.

        Args:
            document: Parsed YAML document

        Returns:
            Tuple of (typed model instance, GVK)

        Raises:
            ManifestError: If the kind is unknown or the document does not fit the model
        """
        gvk = GroupVersionKind.from_document(document)

        model_name = self._types.get(gvk)
        if model_name is None:
            known = ", ".join(f"'{known_gvk}'" for known_gvk in self.recognized_kinds())
            raise ManifestError(ErrorMessages.UNRECOGNIZED_KIND.format(gvk=f"'{gvk}'", known=known))

        try:
            # default=str covers dates and timestamps PyYAML turns into objects
            payload = _JSONPayload(json.dumps(document, default=str))
            obj = self.api_client.deserialize(payload, model_name)
        except (ValueError, TypeError) as e:
            raise ManifestError(ErrorMessages.DECODE_FAILED.format(gvk=gvk, error=e)) from e

        logger.debug(f"Decoded {gvk} into {model_name}")
        return obj, gvk

    def decode_as(self, document: Dict[str, Any], kind: str) -> Tuple[Any, GroupVersionKind]:
        """
        Decode a document and check it is of the expected kind

        Raises:
            ManifestError: If the document is of another kind or fails to decode
        """
        gvk = GroupVersionKind.from_document(document)
        if gvk.kind != str(kind):
            raise ManifestError(ErrorMessages.UNEXPECTED_KIND.format(expected=kind, found=gvk.kind))
        return self.decode(document)
