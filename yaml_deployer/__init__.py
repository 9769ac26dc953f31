"""
YAML Deployer

Reads a Deployment and a Service from a multi-document YAML file, creates
or updates them in a Kubernetes cluster and prints the service URL.
"""

__version__ = "1.0.0"
__author__ = "YAML Deployer Project"

from .libs import YAMLDeployer, ResourceScheme, ManifestReader, ResourceDeployer, EndpointResolver, main

__all__ = [
    'YAMLDeployer',
    'ResourceScheme',
    'ManifestReader',
    'ResourceDeployer',
    'EndpointResolver',
    'main'
]
