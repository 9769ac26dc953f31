"""
Configuration Management

Handles loading and managing configuration files for the YAML Deployer tool.
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, Any

from .exceptions import ConfigurationError
from .constants import KubernetesConstants, FileConstants, ErrorMessages

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and validation"""

    # Configuration schema - defines expected structure and types
    CONFIG_SCHEMA = {
        'cluster': {
            'type': dict,
            'required': False,
            'fields': {
                'kubeconfig': {'type': str, 'required': False},
                'namespace': {'type': str, 'required': False},
                'skip_tls': {'type': bool, 'required': False}
            }
        },
        'manifest': {
            'type': dict,
            'required': False,
            'fields': {
                'file': {'type': str, 'required': False}
            }
        },
        'endpoint': {
            'type': dict,
            'required': False,
            'fields': {
                'pod_namespace': {'type': str, 'required': False},
                'pod_name': {'type': str, 'required': False}
            }
        },
        'global': {
            'type': dict,
            'required': False,
            'fields': {
                'debug': {'type': bool, 'required': False}
            }
        },
    }

    # Maps config keys (dot notation) to argparse destinations
    ARGPARSE_MAPPING = {
        'cluster.kubeconfig': 'kubeconfig',
        'cluster.namespace': 'namespace',
        'cluster.skip_tls': 'skip_tls',
        'manifest.file': 'filename',
        'endpoint.pod_namespace': 'pod_namespace',
        'endpoint.pod_name': 'pod_name',
        'global.debug': 'debug',
    }

    def __init__(self):
        """Initialize configuration manager"""
        self.config_data = {}
        self.config_file_path = None

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from YAML file

        Args:
            config_path: Path to configuration file

        Returns:
            Dict containing configuration data

        Raises:
            ConfigurationError: If configuration file cannot be loaded or is invalid
        """
        config_file = Path(config_path).expanduser()

        if not config_file.exists():
            raise ConfigurationError(ErrorMessages.CONFIG_FILE_NOT_FOUND.format(config_path=config_path))

        if not config_file.is_file():
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_file, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}") from e

        self.config_data = config_data if config_data is not None else {}
        self.config_file_path = config_path

        # Validate configuration structure
        self._validate_config()

        logger.info(f"Successfully loaded configuration from {config_path}")
        return self.config_data

    def _validate_config(self) -> None:
        """
        Validate configuration structure and values

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not isinstance(self.config_data, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        self._validate_against_schema(self.config_data, self.CONFIG_SCHEMA, "config")

    def _validate_against_schema(self, data: Dict[str, Any], schema: Dict[str, Any], path: str = "") -> None:
        """
        Validate data against schema definition

        Args:
            data: Data to validate
            schema: Schema definition
            path: Current path for error reporting

        Raises:
            ConfigurationError: If data doesn't match schema
        """
        for key, field_schema in schema.items():
            current_path = f"{path}.{key}" if path else key

            if key in data:
                value = data[key]

                # Skip None values for optional fields
                if value is None and not field_schema.get('required', False):
                    continue

                expected_type = field_schema['type']
                if not isinstance(value, expected_type):
                    type_name = expected_type.__name__
                    raise ConfigurationError(f"{current_path} must be a {type_name}")

                # Recursively validate nested dictionaries
                if expected_type == dict and 'fields' in field_schema:
                    self._validate_against_schema(value, field_schema['fields'], current_path)

            elif field_schema.get('required', False):
                raise ConfigurationError(f"Required field {current_path} is missing")

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get specific configuration section

        Args:
            section: Section name (e.g., 'cluster', 'manifest')

        Returns:
            Dict containing section data, empty dict if section doesn't exist
        """
        return self.config_data.get(section) or {}

    def get_value(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key

        Args:
            key: Configuration key (supports dot notation like 'cluster.namespace')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config_data

        try:
            for k in key.split('.'):
                value = value[k]
        except (KeyError, TypeError):
            return default

        return default if value is None else value

    def get_argparse_defaults(self) -> Dict[str, Any]:
        """
        Translate loaded configuration into argparse defaults.

        Only keys present in the configuration file are returned, so
        parser defaults stay in effect for everything else.
        """
        defaults = {}
        for config_key, dest in self.ARGPARSE_MAPPING.items():
            value = self.get_value(config_key)
            if value is not None:
                defaults[dest] = value
        return defaults

    def get_config_template_content(self) -> str:
        """
        Generate configuration template content as string without file I/O

        Returns:
            str: YAML configuration template content
        """
        lines = [
            "# YAML Deployer Configuration File",
            f"# Save as {FileConstants.DEFAULT_CONFIG_FILE} and pass it with --config.",
            "# Command-line flags take precedence over the values below.",
            "",
            "cluster:",
            "  kubeconfig: \"~/.kube/config\"",
            f"  namespace: \"{KubernetesConstants.DEFAULT_NAMESPACE}\"",
            "  skip_tls: false",
            "",
            "manifest:",
            f"  file: \"{FileConstants.DEFAULT_MANIFEST_FILE}\"",
            "",
            "endpoint:",
            "  # Pod whose host IP is shown in the service URL",
            f"  pod_namespace: \"{KubernetesConstants.ADDON_MANAGER_NAMESPACE}\"",
            f"  pod_name: \"{KubernetesConstants.ADDON_MANAGER_POD}\"",
            "",
            "global:",
            "  debug: false",
        ]
        return "\n".join(lines) + "\n"
