"""
YAML Deployer Library

Applies a Deployment and a Service read from one YAML file to a cluster.
"""

__version__ = "1.0.0"
__author__ = "YAML Deployer Project"

# Core libraries
from .core import KubeconfigAuth, ConfigManager
from .core.exceptions import (
    YAMLDeployerError,
    ConfigurationError,
    AuthenticationError,
    ManifestError,
    DeploymentError,
    EndpointError,
)

# Manifest libraries
from .manifests import ManifestReader, GroupVersionKind, ResourceScheme

# Cluster libraries
from .cluster import ResourceDeployer, ApplyResult, EndpointResolver, Endpoint

# Main application
from .main_app import YAMLDeployer, create_yaml_deployer, main

__all__ = [
    # Core
    'KubeconfigAuth',
    'ConfigManager',
    'YAMLDeployerError',
    'ConfigurationError',
    'AuthenticationError',
    'ManifestError',
    'DeploymentError',
    'EndpointError',
    # Manifests
    'ManifestReader',
    'GroupVersionKind',
    'ResourceScheme',
    # Cluster
    'ResourceDeployer',
    'ApplyResult',
    'EndpointResolver',
    'Endpoint',
    # Main
    'YAMLDeployer',
    'create_yaml_deployer',
    'main'
]
