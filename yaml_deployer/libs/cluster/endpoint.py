"""
Endpoint Resolver

Works out the URL under which an applied NodePort service can be reached.
"""

import logging
from typing import NamedTuple, Optional

from kubernetes import client

from ..core.constants import ErrorMessages, KubernetesConstants
from ..core.exceptions import EndpointError
from ..core.utils import format_api_error

logger = logging.getLogger(__name__)


class Endpoint(NamedTuple):
    """Node address and port of a service"""
    host_ip: Optional[str]
    node_port: int
    error: Optional[str] = None  # why host_ip could not be found

    @property
    def url(self) -> Optional[str]:
        if not self.host_ip:
            return None
        return f"http://{self.host_ip}:{self.node_port}"


class EndpointResolver:
    """Looks up a service's node port and a node IP to build its URL"""

    def __init__(self, core_api: client.CoreV1Api,
                 namespace: str = KubernetesConstants.DEFAULT_NAMESPACE,
                 pod_namespace: str = KubernetesConstants.ADDON_MANAGER_NAMESPACE,
                 pod_name: str = KubernetesConstants.ADDON_MANAGER_POD):
        """
        Initialize endpoint resolver

        Args:
            core_api: Kubernetes CoreV1Api client
            namespace: Namespace of the service
            pod_namespace: Namespace of the pod whose host IP is reported
            pod_name: Pod whose host IP is reported (the minikube addon manager by default)
        """
        self.core_api = core_api
        self.namespace = namespace
        self.pod_namespace = pod_namespace
        self.pod_name = pod_name
        self.last_error: Optional[str] = None

    def get_node_port(self, service_name: str) -> int:
        """
        Read the running service and return the node port of its first port

        Raises:
            EndpointError: If the service cannot be read or has no node port
        """
        try:
            service = self.core_api.read_namespaced_service(name=service_name, namespace=self.namespace)
        except Exception as e:
            raise EndpointError(ErrorMessages.SERVICE_READ_FAILED.format(
                name=service_name, error=format_api_error(e)
            )) from e

        ports = service.spec.ports if service.spec else None
        if not ports:
            raise EndpointError(ErrorMessages.SERVICE_HAS_NO_PORTS.format(name=service_name))

        node_port = ports[0].node_port
        if node_port is None:
            raise EndpointError(ErrorMessages.SERVICE_HAS_NO_NODE_PORT.format(name=service_name))

        return node_port

    def get_host_ip(self) -> Optional[str]:
        """
        Best-effort lookup of the configured pod's host IP

        Only meaningful on minikube, where the addon manager pod runs on
        the single node. The reason for a miss is kept in last_error.

        Returns:
            str: Host IP, or None if the pod is unavailable
        """
        self.last_error = None
        try:
            pod = self.core_api.read_namespaced_pod(name=self.pod_name, namespace=self.pod_namespace)
        except Exception as e:
            self.last_error = format_api_error(e)
            logger.debug(f"Pod {self.pod_namespace}/{self.pod_name} lookup failed: {e}")
            return None

        host_ip = pod.status.host_ip if pod.status else None
        if not host_ip:
            self.last_error = f"pod {self.pod_namespace}/{self.pod_name} reports no host IP"
        return host_ip

    def resolve(self, service_name: str) -> Endpoint:
        """
        Resolve the endpoint of a service

        Raises:
            EndpointError: If the service's node port cannot be read
        """
        node_port = self.get_node_port(service_name)
        host_ip = self.get_host_ip()
        return Endpoint(host_ip=host_ip, node_port=node_port, error=self.last_error)
