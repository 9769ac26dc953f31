"""
Constants Module

Centralized constants for the YAML Deployer tool to eliminate magic strings
and improve maintainability.
"""


class KubernetesConstants:
    """Kubernetes-related constants with enum-based structure"""

    from enum import Enum

    # Namespace constants - simple attributes for configurable values
    DEFAULT_NAMESPACE = "default"

    # Minikube addon manager pod, used to discover the node IP
    ADDON_MANAGER_NAMESPACE = "kube-system"
    ADDON_MANAGER_POD = "kube-addon-manager-minikube"

    # API Group constants
    CORE_API_GROUP = ""  # Core API group (empty string)
    APPS_API_GROUP = "apps"

    # Namespace name limit (RFC 1123 label)
    MAX_NAMESPACE_LENGTH = 63

    class ResourceKind(str, Enum):
        """Resource kinds the deployer knows how to decode"""
        DEPLOYMENT = "Deployment"
        SERVICE = "Service"
        POD = "Pod"

        def __str__(self) -> str:
            """Return the kind for use in manifests and messages"""
            return self.value


class FileConstants:
    """File and directory related constants"""

    DEFAULT_MANIFEST_FILE = "configuration.yaml"
    DEFAULT_CONFIG_FILE = "yaml-deployer-config.yaml"

    # Kubeconfig location relative to the user's home directory
    KUBECONFIG_DIR = ".kube"
    KUBECONFIG_FILE = "config"

    # Number of documents read from the manifest file
    MANIFEST_DOCUMENT_COUNT = 2


class ErrorMessages:
    """Centralized error message templates"""

    # SSL
    SSL_CERT_VERIFICATION_FAILED = (
        "SSL certificate verification failed. The cluster is using self-signed certificates.\n"
        "To resolve this issue, add the --skip-tls flag to your command.\n"
        "Example: yaml-deployer --skip-tls -f configuration.yaml"
    )
    SSL_CONNECTION_ERROR = (
        "SSL connection error occurred. If using self-signed certificates, add --skip-tls flag.\n"
        "Original error: {error}"
    )

    # Authentication
    UNAUTHORIZED = (
        "Unauthorized (401). Verify that the credentials in your kubeconfig are valid "
        "and have not expired."
    )
    FORBIDDEN = (
        "Forbidden (403). Your credentials are valid but lack necessary permissions. "
        "Contact your cluster administrator to grant appropriate RBAC permissions."
    )
    KUBECONFIG_NOT_FOUND = "Kubeconfig file not found: {path}"
    NO_CLUSTER_CONFIG = (
        "Could not load cluster configuration from kubeconfig ({path}) "
        "or from the in-cluster service account."
    )
    NOT_AUTHENTICATED = "Authentication not configured. Configure authentication first."

    # Manifests
    MANIFEST_NOT_FOUND = "Manifest file not found: {path}"
    MANIFEST_INVALID_YAML = "Invalid YAML in manifest file {path}: {error}"
    MANIFEST_TOO_FEW_DOCUMENTS = (
        "Manifest file {path} must contain at least {expected} YAML documents "
        "(a Deployment followed by a Service), found {found}"
    )
    MANIFEST_NOT_A_MAPPING = "Document {index} in {path} is not a mapping"
    MISSING_TYPE_INFO = "Document is missing '{field}'; cannot determine its kind"
    UNRECOGNIZED_KIND = "No kind {gvk} is registered; recognized kinds are: {known}"
    UNEXPECTED_KIND = "Expected a {expected} document but found {found}"
    DECODE_FAILED = "Failed to decode {gvk}: {error}"

    # Cluster
    SERVICE_READ_FAILED = "Failed to read service \"{name}\": {error}"
    SERVICE_HAS_NO_PORTS = "Service \"{name}\" does not expose any ports"
    SERVICE_HAS_NO_NODE_PORT = (
        "Service \"{name}\" exposes no node port; use a NodePort or LoadBalancer Service"
    )

    # Configuration
    INVALID_NAMESPACE = "Invalid Kubernetes namespace format: {namespace}"
    CONFIG_FILE_NOT_FOUND = "Configuration file not found: {config_path}"


class OutputMessages:
    """User-facing status line templates printed to stdout"""

    GROUP_VERSION_KIND = "Group: {group}, Kind: {kind}, Version: {version}"
    CREATE = "Create {kind} \"{name}\""
    UPDATE = "Update {kind} \"{name}\""
    INFO = "Info: {error}"
    RESULT = "{kind} \"{name}\" {action}"
    VIEW_URL = "Please view: {url}"
    VIEW_URL_PLACEHOLDER = "Please help yourself and view: http://<ip-address>:{port}"
