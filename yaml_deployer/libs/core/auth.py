"""
Authentication Module

Loads cluster credentials from a kubeconfig file or the in-cluster
service account and builds the Kubernetes API clients.
"""

import logging
import os
from typing import Optional, Tuple

import yaml
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from .constants import ErrorMessages
from .exceptions import AuthenticationError
from .utils import disable_ssl_warnings, mask_sensitive_info

logger = logging.getLogger(__name__)


class KubeconfigAuth:
    """Handles kubeconfig loading and API client construction"""

    def __init__(self, kubeconfig_path: str = "", skip_tls: bool = False):
        """
        Initialize authentication handler

        Args:
            kubeconfig_path: Path to the kubeconfig file (empty to use in-cluster config)
            skip_tls: Whether to skip TLS verification for requests
        """
        self.kubeconfig_path = os.path.expanduser(kubeconfig_path) if kubeconfig_path else ""
        self.skip_tls = skip_tls
        self.configuration: Optional[client.Configuration] = None
        self.k8s_client: Optional[client.ApiClient] = None
        self.apps_api: Optional[client.AppsV1Api] = None
        self.core_api: Optional[client.CoreV1Api] = None

    def configure_auth(self) -> bool:
        """
        Load cluster configuration and initialize the API clients.

        The kubeconfig file is tried first; the in-cluster service account
        is used when no kubeconfig path is set or loading it fails.

        Returns:
            bool: True if authentication was configured successfully

        Raises:
            AuthenticationError: If no cluster configuration can be loaded
        """
        configuration = client.Configuration()

        if not self._load_kubeconfig(configuration) and not self._load_incluster(configuration):
            raise AuthenticationError(ErrorMessages.NO_CLUSTER_CONFIG.format(path=self.kubeconfig_path or "<unset>"))

        if self.skip_tls:
            configuration.verify_ssl = False
            configuration.ssl_ca_cert = None
            disable_ssl_warnings()

        self.configuration = configuration
        self.k8s_client = client.ApiClient(configuration)
        self.apps_api = client.AppsV1Api(self.k8s_client)
        self.core_api = client.CoreV1Api(self.k8s_client)

        logger.info(f"Configured Kubernetes client for {self.get_cluster_host()}")
        return True

    def _load_kubeconfig(self, configuration: client.Configuration) -> bool:
        """Load the kubeconfig file into configuration; False if unavailable"""
        if not self.kubeconfig_path:
            logger.debug("No kubeconfig path set")
            return False

        if not os.path.isfile(self.kubeconfig_path):
            logger.warning(ErrorMessages.KUBECONFIG_NOT_FOUND.format(path=self.kubeconfig_path))
            return False

        try:
            config.load_kube_config(config_file=self.kubeconfig_path, client_configuration=configuration)
        except (ConfigException, OSError, ValueError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load kubeconfig {self.kubeconfig_path}: {e}")
            return False

        logger.debug(f"Loaded kubeconfig from {self.kubeconfig_path}")
        return True

    def _load_incluster(self, configuration: client.Configuration) -> bool:
        """Load the in-cluster service account into configuration; False if unavailable"""
        try:
            config.load_incluster_config(client_configuration=configuration)
        except ConfigException as e:
            logger.warning(f"Failed to load in-cluster config: {e}")
            return False

        logger.info("Loaded in-cluster config")
        return True

    def get_cluster_host(self) -> str:
        """Get the API server URL, masked for display"""
        if not self.configuration or not self.configuration.host:
            return "<unknown>"
        host = self.configuration.host
        return mask_sensitive_info(host, host)

    def is_authenticated(self) -> bool:
        """Check if the API clients have been built"""
        return self.k8s_client is not None

    def get_kubernetes_clients(self) -> Tuple[Optional[client.ApiClient], Optional[client.AppsV1Api], Optional[client.CoreV1Api]]:
        """
        Get initialized Kubernetes API clients

        Returns:
            Tuple of (k8s_client, apps_api, core_api)

        Raises:
            AuthenticationError: If configure_auth has not run
        """
        if not self.is_authenticated():
            raise AuthenticationError(ErrorMessages.NOT_AUTHENTICATED)
        return self.k8s_client, self.apps_api, self.core_api
