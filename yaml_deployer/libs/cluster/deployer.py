"""
Resource Deployer

Applies Deployments and Services to the cluster with create-or-update
semantics.
"""

import logging
from typing import Any, Callable, NamedTuple, Optional

from kubernetes import client

from ..core.constants import KubernetesConstants, OutputMessages
from ..core.exceptions import DeploymentError
from ..core.utils import format_api_error, handle_api_error

logger = logging.getLogger(__name__)


class ApplyResult(NamedTuple):
    """Outcome of applying one resource"""
    kind: str
    name: str
    action: str  # 'created' or 'updated'
    obj: Any


class ResourceDeployer:
    """Creates resources, falling back to an update when creation fails"""

    CREATED = "created"
    UPDATED = "updated"

    def __init__(self, apps_api: client.AppsV1Api, core_api: client.CoreV1Api,
                 namespace: str = KubernetesConstants.DEFAULT_NAMESPACE):
        """
        Initialize resource deployer

        Args:
            apps_api: Kubernetes AppsV1Api client
            core_api: Kubernetes CoreV1Api client
            namespace: Namespace the resources are applied to
        """
        self.apps_api = apps_api
        self.core_api = core_api
        self.namespace = namespace

    def apply_deployment(self, deployment: client.V1Deployment) -> ApplyResult:
        """
        Create the deployment, or update it if creation fails

        Raises:
            DeploymentError: If both create and update fail
        """
        return self._apply(
            kind=str(KubernetesConstants.ResourceKind.DEPLOYMENT),
            obj=deployment,
            create=self.apps_api.create_namespaced_deployment,
            read=self.apps_api.read_namespaced_deployment,
            replace=self.apps_api.replace_namespaced_deployment,
        )

    def apply_service(self, service: client.V1Service) -> ApplyResult:
        """
        Create the service, or update it if creation fails

        Raises:
            DeploymentError: If both create and update fail
        """
        return self._apply(
            kind=str(KubernetesConstants.ResourceKind.SERVICE),
            obj=service,
            create=self.core_api.create_namespaced_service,
            read=self.core_api.read_namespaced_service,
            replace=self.core_api.replace_namespaced_service,
            carry_over=self._carry_over_cluster_ip,
        )

    def _apply(self, kind: str, obj: Any, create: Callable, read: Callable, replace: Callable,
               carry_over: Optional[Callable[[Any, Any], None]] = None) -> ApplyResult:
        name = obj.metadata.name if obj.metadata else None
        if not name:
            raise DeploymentError(f"{kind} has no metadata.name")

        print(OutputMessages.CREATE.format(kind=kind.lower(), name=name))
        try:
            created = create(namespace=self.namespace, body=obj)
        except Exception as e:
            # Any failure, not only AlreadyExists, falls through to an update
            logger.debug(f"Create {kind} {name} failed: {e}")
            print(OutputMessages.INFO.format(error=format_api_error(e)))
            print()
        else:
            print(OutputMessages.RESULT.format(kind=kind, name=created.metadata.name, action=self.CREATED))
            return ApplyResult(kind, created.metadata.name, self.CREATED, created)

        print(OutputMessages.UPDATE.format(kind=kind.lower(), name=name))
        self._prepare_update(kind, obj, read, carry_over)
        try:
            updated = replace(name=name, namespace=self.namespace, body=obj)
        except Exception as e:
            logger.error(f"Update {kind} {name} failed: {e}")
            handle_api_error(e, DeploymentError)

        print(OutputMessages.RESULT.format(kind=kind, name=updated.metadata.name, action=self.UPDATED))
        return ApplyResult(kind, updated.metadata.name, self.UPDATED, updated)

    def _prepare_update(self, kind: str, obj: Any, read: Callable,
                        carry_over: Optional[Callable[[Any, Any], None]]) -> None:
        """Copy server-assigned fields from the live object onto obj"""
        name = obj.metadata.name
        try:
            live = read(name=name, namespace=self.namespace)
        except Exception as e:
            # The update will report the real problem
            logger.debug(f"Could not read live {kind} {name}: {e}")
            return

        if not obj.metadata.resource_version and live.metadata:
            obj.metadata.resource_version = live.metadata.resource_version

        if carry_over is not None:
            carry_over(obj, live)

    @staticmethod
    def _carry_over_cluster_ip(service: client.V1Service, live: client.V1Service) -> None:
        """clusterIP is immutable once allocated"""
        if service.spec is None or live.spec is None:
            return
        if not service.spec.cluster_ip and live.spec.cluster_ip:
            service.spec.cluster_ip = live.spec.cluster_ip
            service.spec.cluster_i_ps = live.spec.cluster_i_ps
