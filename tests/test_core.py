"""
Tests for core configuration, authentication and utilities
"""

import logging
import pytest
import yaml
from unittest.mock import patch
from kubernetes.config.config_exception import ConfigException

from yaml_deployer.libs.core import ConfigManager, KubeconfigAuth
from yaml_deployer.libs.core.constants import ErrorMessages, KubernetesConstants
from yaml_deployer.libs.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DeploymentError,
    EndpointError,
)
from yaml_deployer.libs.core.utils import (
    default_kubeconfig_path,
    format_api_error,
    handle_api_error,
    handle_ssl_error,
    mask_sensitive_info,
    setup_logging,
    validate_namespace,
)

from test_constants import CommonTestConstants, make_api_exception


class TestConfigManager:
    """Test configuration loading and validation"""

    def _write_config(self, tmp_path, content: str) -> str:
        path = tmp_path / "yaml-deployer-config.yaml"
        path.write_text(content)
        return str(path)

    def test_load_valid_config(self, tmp_path):
        config_path = self._write_config(tmp_path, (
            "cluster:\n"
            "  kubeconfig: /tmp/kubeconfig\n"
            "  namespace: demo\n"
            "  skip_tls: true\n"
            "manifest:\n"
            "  file: app.yaml\n"
        ))
        manager = ConfigManager()

        config = manager.load_config(config_path)

        assert config["cluster"]["namespace"] == "demo"
        assert manager.get_value("manifest.file") == "app.yaml"
        assert manager.get_value("endpoint.pod_name", "fallback") == "fallback"
        assert manager.get_section("global") == {}

    def test_argparse_defaults_only_include_set_values(self, tmp_path):
        config_path = self._write_config(tmp_path, "cluster:\n  namespace: demo\nglobal:\n  debug: true\n")
        manager = ConfigManager()
        manager.load_config(config_path)

        defaults = manager.get_argparse_defaults()

        assert defaults == {"namespace": "demo", "debug": True}

    def test_empty_file_is_empty_config(self, tmp_path):
        manager = ConfigManager()

        assert manager.load_config(self._write_config(tmp_path, "")) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager().load_config(str(tmp_path / "missing.yaml"))

        assert "not found" in str(exc_info.value)

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigManager().load_config(str(tmp_path))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager().load_config(self._write_config(tmp_path, "cluster: [\n"))

        assert "Invalid YAML" in str(exc_info.value)

    def test_wrong_field_type(self, tmp_path):
        config_path = self._write_config(tmp_path, "cluster:\n  skip_tls: 'yes please'\n")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager().load_config(config_path)

        assert "config.cluster.skip_tls must be a bool" in str(exc_info.value)

    def test_root_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigManager().load_config(self._write_config(tmp_path, "- a\n- b\n"))

    def test_template_is_a_valid_config(self, tmp_path):
        """The printed template loads back without errors"""
        manager = ConfigManager()
        content = manager.get_config_template_content()

        config = ConfigManager().load_config(self._write_config(tmp_path, content))

        assert config["endpoint"]["pod_name"] == KubernetesConstants.ADDON_MANAGER_POD
        assert yaml.safe_load(content) == config


class TestKubeconfigAuth:
    """Test kubeconfig and in-cluster loading"""

    @pytest.fixture
    def kubeconfig(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("apiVersion: v1\nkind: Config\n")
        return str(path)

    @patch('yaml_deployer.libs.core.auth.config')
    def test_loads_kubeconfig(self, mock_config, kubeconfig):
        # Arrange
        auth = KubeconfigAuth(kubeconfig)

        # Act
        result = auth.configure_auth()

        # Assert
        assert result is True
        assert auth.is_authenticated()
        _, kwargs = mock_config.load_kube_config.call_args
        assert kwargs["config_file"] == kubeconfig
        mock_config.load_incluster_config.assert_not_called()
        k8s_client, apps_api, core_api = auth.get_kubernetes_clients()
        assert apps_api.api_client is k8s_client
        assert core_api.api_client is k8s_client

    @patch('yaml_deployer.libs.core.auth.config')
    def test_falls_back_to_incluster(self, mock_config, tmp_path):
        auth = KubeconfigAuth(str(tmp_path / "missing"))

        auth.configure_auth()

        mock_config.load_kube_config.assert_not_called()
        mock_config.load_incluster_config.assert_called_once()

    @patch('yaml_deployer.libs.core.auth.config')
    def test_broken_kubeconfig_falls_back_to_incluster(self, mock_config, kubeconfig):
        mock_config.load_kube_config.side_effect = ConfigException("Invalid kube-config file")

        KubeconfigAuth(kubeconfig).configure_auth()

        mock_config.load_incluster_config.assert_called_once()

    @patch('yaml_deployer.libs.core.auth.config.load_incluster_config')
    def test_unparsable_kubeconfig_falls_back_to_incluster(self, mock_incluster, tmp_path):
        """A kubeconfig that is not valid YAML is treated like a missing one"""
        path = tmp_path / "config"
        path.write_text("clusters: [\n")
        auth = KubeconfigAuth(str(path))

        assert auth.configure_auth() is True

        mock_incluster.assert_called_once()
        assert auth.is_authenticated()

    @patch('yaml_deployer.libs.core.auth.config')
    def test_no_configuration_available(self, mock_config):
        mock_config.load_incluster_config.side_effect = ConfigException("Service host/port is not set.")
        auth = KubeconfigAuth("")

        with pytest.raises(AuthenticationError) as exc_info:
            auth.configure_auth()

        assert "in-cluster" in str(exc_info.value)
        assert not auth.is_authenticated()

    @patch('yaml_deployer.libs.core.auth.config')
    def test_skip_tls_disables_verification(self, mock_config, kubeconfig):
        auth = KubeconfigAuth(kubeconfig, skip_tls=True)

        auth.configure_auth()

        assert auth.configuration.verify_ssl is False

    def test_clients_require_authentication(self):
        with pytest.raises(AuthenticationError):
            KubeconfigAuth("").get_kubernetes_clients()


class TestUtils:
    """Test shared utility functions"""

    @pytest.mark.parametrize("namespace", ["default", "kube-system", "a", "team-1"])
    def test_valid_namespaces(self, namespace):
        assert validate_namespace(namespace) is True

    @pytest.mark.parametrize("namespace", ["", "Default", "-lead", "trail-", "under_score", "a" * 64])
    def test_invalid_namespaces(self, namespace):
        with pytest.raises(ConfigurationError):
            validate_namespace(namespace)

    def test_default_kubeconfig_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))

        assert default_kubeconfig_path() == str(tmp_path / ".kube" / "config")

    def test_mask_sensitive_info(self):
        text = f"connecting to {CommonTestConstants.EXAMPLE_URL} with Bearer abc.def-123"

        masked = mask_sensitive_info(text, CommonTestConstants.EXAMPLE_URL)

        assert "cluster.example" not in masked
        assert "https://api.****.com:***" in masked
        assert f"Bearer {CommonTestConstants.MASKED_TOKEN}" in masked

    def test_format_api_error_with_status_message(self):
        error = make_api_exception(409, "Conflict", 'services "web" already exists')

        assert format_api_error(error) == '(409) Conflict: services "web" already exists'

    def test_format_api_error_without_body(self):
        assert format_api_error(make_api_exception(404, "Not Found")) == "(404) Not Found"

    def test_format_plain_error(self):
        assert format_api_error(RuntimeError("boom ")) == "boom"

    def test_handle_api_error_forbidden(self):
        with pytest.raises(EndpointError) as exc_info:
            handle_api_error(make_api_exception(403, "Forbidden"), EndpointError)

        assert "Forbidden (403)" in str(exc_info.value)

    def test_handle_api_error_unauthorized(self):
        with pytest.raises(AuthenticationError):
            handle_api_error(make_api_exception(401, "Unauthorized"))

    def test_handle_api_error_default_class(self):
        with pytest.raises(DeploymentError) as exc_info:
            handle_api_error(make_api_exception(500, "Internal Server Error"))

        assert "(500) Internal Server Error" in str(exc_info.value)

    def test_ssl_error_handler_with_cert_error(self):
        with pytest.raises(AuthenticationError) as exc_info:
            handle_ssl_error(Exception("certificate verify failed"), AuthenticationError)

        assert str(exc_info.value) == ErrorMessages.SSL_CERT_VERIFICATION_FAILED

    def test_ssl_error_handler_with_ssl_error(self):
        with pytest.raises(DeploymentError) as exc_info:
            handle_ssl_error(Exception("SSLError: connection failed"), DeploymentError)

        assert "SSL connection error occurred" in str(exc_info.value)

    def test_setup_logging_replaces_handlers(self):
        root_logger = logging.getLogger()
        saved_handlers = root_logger.handlers[:]
        saved_level = root_logger.level
        try:
            setup_logging(debug=True)
            setup_logging(debug=True)

            assert root_logger.level == logging.DEBUG
            assert len(root_logger.handlers) == 1
            assert logging.getLogger('urllib3').level == logging.WARNING
        finally:
            root_logger.handlers[:] = saved_handlers
            root_logger.setLevel(saved_level)
