"""
Exceptions Module

Exception hierarchy for the YAML Deployer tool.
"""


class YAMLDeployerError(Exception):
    """Base exception for all YAML Deployer errors"""


class ConfigurationError(YAMLDeployerError):
    """Raised for invalid command-line values or configuration files"""


class AuthenticationError(YAMLDeployerError):
    """Raised when cluster credentials cannot be loaded or used"""


class ManifestError(YAMLDeployerError):
    """Raised when the manifest file cannot be read, split or decoded"""


class DeploymentError(YAMLDeployerError):
    """Raised when a resource can neither be created nor updated"""


class EndpointError(YAMLDeployerError):
    """Raised when the running service cannot be inspected"""
