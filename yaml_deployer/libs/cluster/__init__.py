"""
Cluster Libraries

Applying resources to the cluster and resolving where they can be reached.
"""

from .deployer import ApplyResult, ResourceDeployer
from .endpoint import Endpoint, EndpointResolver

__all__ = [
    'ApplyResult',
    'ResourceDeployer',
    'Endpoint',
    'EndpointResolver'
]
