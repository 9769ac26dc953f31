"""
Main Application

Reads the Deployment and Service from a manifest file, applies them to the
cluster and prints where the service can be reached.
"""

import argparse
import logging
import sys
from typing import Any, List, Optional, Tuple

from .core import KubeconfigAuth, ConfigManager, setup_logging, disable_ssl_warnings, default_kubeconfig_path, validate_namespace
from .core.constants import FileConstants, KubernetesConstants, OutputMessages
from .core.exceptions import YAMLDeployerError
from .manifests import ManifestReader, ResourceScheme
from .cluster import ApplyResult, Endpoint, EndpointResolver, ResourceDeployer

logger = logging.getLogger(__name__)


class YAMLDeployer:
    """Main application orchestrator for the YAML Deployer tool"""

    def __init__(
        self,
        auth_provider: Optional[KubeconfigAuth] = None,
        scheme: Optional[ResourceScheme] = None,
        kubeconfig_path: str = "",
        namespace: str = KubernetesConstants.DEFAULT_NAMESPACE,
        pod_namespace: str = KubernetesConstants.ADDON_MANAGER_NAMESPACE,
        pod_name: str = KubernetesConstants.ADDON_MANAGER_POD,
        skip_tls: bool = False,
        debug: bool = False
    ):
        """
        Initialize YAML Deployer with dependency injection

        Args:
            auth_provider: Authentication provider (defaults to KubeconfigAuth)
            scheme: Resource scheme used for decoding (defaults to ResourceScheme)
            kubeconfig_path: Path to the kubeconfig file
            namespace: Namespace the Deployment and Service are applied to
            pod_namespace: Namespace of the pod used to find the node IP
            pod_name: Pod used to find the node IP
            skip_tls: Whether to skip TLS verification
            debug: Enable debug logging
        """
        self.namespace = namespace
        self.pod_namespace = pod_namespace
        self.pod_name = pod_name
        self.skip_tls = skip_tls
        self.debug = debug

        setup_logging(debug)

        if skip_tls:
            disable_ssl_warnings()

        self.auth = auth_provider or KubeconfigAuth(kubeconfig_path, skip_tls=skip_tls)
        self.scheme = scheme or ResourceScheme()

        # Built once authentication is configured
        self.deployer: Optional[ResourceDeployer] = None
        self.endpoint_resolver: Optional[EndpointResolver] = None

    def load_resources(self, manifest_file: str) -> Tuple[Any, Any]:
        """
        Read and decode the Deployment and the Service from the manifest file

        Args:
            manifest_file: Path to the manifest file

        Returns:
            Tuple of (V1Deployment, V1Service)

        Raises:
            ManifestError: If the file cannot be read or decoded
        """
        reader = ManifestReader(manifest_file)
        deployment_doc, service_doc = reader.read_pair()

        deployment, gvk = self.scheme.decode_as(deployment_doc, KubernetesConstants.ResourceKind.DEPLOYMENT)
        print(OutputMessages.GROUP_VERSION_KIND.format(group=gvk.group, kind=gvk.kind, version=gvk.version))

        service, _ = self.scheme.decode_as(service_doc, KubernetesConstants.ResourceKind.SERVICE)
        return deployment, service

    def configure_authentication(self) -> bool:
        """
        Configure authentication and initialize the cluster services

        Raises:
            AuthenticationError: If no cluster configuration can be loaded
        """
        self.auth.configure_auth()
        _, apps_api, core_api = self.auth.get_kubernetes_clients()

        self.deployer = ResourceDeployer(apps_api, core_api, namespace=self.namespace)
        self.endpoint_resolver = EndpointResolver(
            core_api,
            namespace=self.namespace,
            pod_namespace=self.pod_namespace,
            pod_name=self.pod_name
        )

        logger.debug("Successfully configured authentication and services")
        return True

    def apply(self, deployment: Any, service: Any) -> Tuple[ApplyResult, ApplyResult]:
        """Apply the Deployment, then the Service"""
        deployment_result = self.deployer.apply_deployment(deployment)
        print()
        service_result = self.deployer.apply_service(service)
        return deployment_result, service_result

    def report_endpoint(self, service_name: str) -> Endpoint:
        """
        Print the URL of the applied service

        Raises:
            EndpointError: If the service's node port cannot be read
        """
        endpoint = self.endpoint_resolver.resolve(service_name)

        print()
        if endpoint.url:
            print(OutputMessages.VIEW_URL.format(url=endpoint.url))
        else:
            print(OutputMessages.INFO.format(error=endpoint.error))
            print(OutputMessages.VIEW_URL_PLACEHOLDER.format(port=endpoint.node_port))
        print()
        return endpoint

    def run(self, manifest_file: str = FileConstants.DEFAULT_MANIFEST_FILE) -> int:
        """
        Run the full read-apply-report flow

        Returns:
            int: Exit code (0 for success)

        Raises:
            YAMLDeployerError: On any failure other than the create-to-update fallback
        """
        deployment, service = self.load_resources(manifest_file)
        self.configure_authentication()
        _, service_result = self.apply(deployment, service)
        self.report_endpoint(service_result.name)
        return 0


# Factory function for easy creation
def create_yaml_deployer(kubeconfig_path: str = "", namespace: str = KubernetesConstants.DEFAULT_NAMESPACE,
                         pod_namespace: str = KubernetesConstants.ADDON_MANAGER_NAMESPACE,
                         pod_name: str = KubernetesConstants.ADDON_MANAGER_POD,
                         skip_tls: bool = False, debug: bool = False) -> YAMLDeployer:
    """
    Factory function to create YAMLDeployer with default dependencies

    Returns:
        YAMLDeployer: Configured YAMLDeployer instance
    """
    return YAMLDeployer(
        kubeconfig_path=kubeconfig_path,
        namespace=namespace,
        pod_namespace=pod_namespace,
        pod_name=pod_name,
        skip_tls=skip_tls,
        debug=debug
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser"""
    parser = argparse.ArgumentParser(
        description='YAML Deployer - Create or update a Deployment and a Service from one YAML file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  yaml-deployer
  yaml-deployer -f ./configuration.yaml --kubeconfig ~/.kube/minikube
  yaml-deployer --config yaml-deployer-config.yaml --debug
  yaml-deployer --generate-config > yaml-deployer-config.yaml
        """
    )

    kubeconfig = default_kubeconfig_path()
    if kubeconfig:
        parser.add_argument('--kubeconfig', default=kubeconfig,
                            help='(optional) absolute path to the kubeconfig file')
    else:
        parser.add_argument('--kubeconfig', default='',
                            help='absolute path to the kubeconfig file')

    parser.add_argument('-f', dest='filename', default=FileConstants.DEFAULT_MANIFEST_FILE,
                        help='(optional) path to the YAML configuration file holding a Deployment and a Service')
    parser.add_argument('--namespace', default=KubernetesConstants.DEFAULT_NAMESPACE,
                        help='Namespace for the Deployment and the Service (default: default)')
    parser.add_argument('--pod-namespace', default=KubernetesConstants.ADDON_MANAGER_NAMESPACE,
                        help='Namespace of the pod used to find the node IP')
    parser.add_argument('--pod-name', default=KubernetesConstants.ADDON_MANAGER_POD,
                        help='Pod whose host IP is shown in the service URL')
    parser.add_argument('--skip-tls', action='store_true', help='Skip TLS verification for insecure requests')
    parser.add_argument('--config', help='Configuration file path')
    parser.add_argument('--generate-config', action='store_true', help='Print a configuration template and exit')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')

    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments, taking defaults from --config if given

    Raises:
        ConfigurationError: If the configuration file is invalid
    """
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument('--config')
    pre_args, _ = pre_parser.parse_known_args(argv)

    parser = create_argument_parser()

    if pre_args.config:
        config_manager = ConfigManager()
        config_manager.load_config(pre_args.config)
        config_defaults = config_manager.get_argparse_defaults()
        if config_defaults:
            parser.set_defaults(**config_defaults)
            logger.debug(f"Applied config defaults: {list(config_defaults.keys())}")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    try:
        args = parse_arguments(argv)

        if args.generate_config:
            print(ConfigManager().get_config_template_content(), end='')
            return 0

        validate_namespace(args.namespace)
        validate_namespace(args.pod_namespace)

        yaml_deployer = create_yaml_deployer(
            kubeconfig_path=args.kubeconfig,
            namespace=args.namespace,
            pod_namespace=args.pod_namespace,
            pod_name=args.pod_name,
            skip_tls=args.skip_tls,
            debug=args.debug
        )
        return yaml_deployer.run(args.filename)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 1
    except YAMLDeployerError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
