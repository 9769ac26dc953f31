"""
Core Libraries

Shared functionality and utilities for the YAML Deployer tool.
"""

from .auth import KubeconfigAuth
from .config import ConfigManager
from .exceptions import (
    YAMLDeployerError,
    ConfigurationError,
    AuthenticationError,
    ManifestError,
    DeploymentError,
    EndpointError,
)
from .utils import setup_logging, disable_ssl_warnings, default_kubeconfig_path, validate_namespace

__all__ = [
    'KubeconfigAuth',
    'ConfigManager',
    'YAMLDeployerError',
    'ConfigurationError',
    'AuthenticationError',
    'ManifestError',
    'DeploymentError',
    'EndpointError',
    'setup_logging',
    'disable_ssl_warnings',
    'default_kubeconfig_path',
    'validate_namespace'
]
