"""
Core Utilities

Common utility functions used across the YAML Deployer tool.
"""

import json
import logging
import os
import re
import urllib3
from typing import Type

from .constants import ErrorMessages, FileConstants, KubernetesConstants
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    DeploymentError,
    YAMLDeployerError,
)


def setup_logging(debug: bool = False) -> None:
    """
    Set up logging configuration for the application.

    Args:
        debug: Enable debug logging level
    """
    level = logging.DEBUG if debug else logging.INFO

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from the HTTP stack underneath the kubernetes client
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('kubernetes').setLevel(logging.WARNING)

    if debug:
        logger = logging.getLogger(__name__)
        logger.debug("Debug mode enabled")


def disable_ssl_warnings() -> None:
    """Disable SSL warnings when --skip-tls is used"""
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


def default_kubeconfig_path() -> str:
    """
    Get the default kubeconfig location in the user's home directory.

    Returns:
        str: ~/.kube/config expanded, or an empty string if no home directory
             can be resolved
    """
    home = os.path.expanduser("~")
    if not home or home == "~":
        return ""
    return os.path.join(home, FileConstants.KUBECONFIG_DIR, FileConstants.KUBECONFIG_FILE)


def validate_namespace(namespace: str) -> bool:
    """
    Validate if the provided string is a valid Kubernetes namespace.

    Args:
        namespace: Kubernetes namespace to validate

    Returns:
        bool: True if valid namespace

    Raises:
        ConfigurationError: If namespace is invalid
    """
    if not namespace or not isinstance(namespace, str):
        raise ConfigurationError("Namespace cannot be empty")

    # Must be lowercase alphanumeric with hyphens, max 63 chars
    if not re.match(r'^[a-z0-9]([-a-z0-9]*[a-z0-9])?$', namespace):
        raise ConfigurationError(ErrorMessages.INVALID_NAMESPACE.format(namespace=namespace))

    if len(namespace) > KubernetesConstants.MAX_NAMESPACE_LENGTH:
        raise ConfigurationError(f"Namespace too long (max 63 chars): {namespace}")

    return True


def mask_sensitive_info(text: str, url: str = None) -> str:
    """
    Mask sensitive information in text for logging and debug output.

    Args:
        text: Text to mask
        url: API server URL to mask (optional)

    Returns:
        Text with sensitive information masked
    """
    if not text:
        return text

    masked_text = text

    if url and url in masked_text:
        from urllib.parse import urlparse
        parsed = urlparse(url)
        if parsed.hostname:
            hostname_parts = parsed.hostname.split('.')
            if len(hostname_parts) >= 3:
                # api.cluster.example.com -> api.****.com
                first_part = hostname_parts[0][:3]
                masked_hostname = f"{first_part}.****.{hostname_parts[-1]}"
            elif len(hostname_parts) == 2:
                masked_hostname = f"****.{hostname_parts[-1]}"
            else:
                masked_hostname = "****"
            masked_text = masked_text.replace(url, f"{parsed.scheme}://{masked_hostname}:***")
        else:
            masked_text = masked_text.replace(url, "https://****:***")

    # Bearer and basic auth tokens
    masked_text = re.sub(r'Bearer [A-Za-z0-9+/=_.-]+', 'Bearer ***MASKED***', masked_text)
    masked_text = re.sub(r'Basic [A-Za-z0-9+/=]+', 'Basic ***MASKED***', masked_text)

    return masked_text


def handle_ssl_error(error: Exception, exception_class: Type[YAMLDeployerError] = AuthenticationError) -> None:
    """
    Centralized SSL error handling with user-friendly messages

    Args:
        error: The caught exception
        exception_class: The specific exception class to raise

    Raises:
        YAMLDeployerError: Appropriate error type with user-friendly message
    """
    error_str = str(error)

    if "certificate verify failed" in error_str or "CERTIFICATE_VERIFY_FAILED" in error_str:
        raise exception_class(ErrorMessages.SSL_CERT_VERIFICATION_FAILED) from error
    elif "SSLError" in error_str or "SSL:" in error_str:
        raise exception_class(ErrorMessages.SSL_CONNECTION_ERROR.format(error=error)) from error
    else:
        raise exception_class(f"Connection error: {error}") from error


def handle_api_error(error: Exception, exception_class: Type[YAMLDeployerError] = DeploymentError) -> None:
    """
    Centralized API error handling for Kubernetes API exceptions

    Args:
        error: The caught exception (ApiException or other)
        exception_class: The specific exception class to raise

    Raises:
        YAMLDeployerError: Appropriate error type with user-friendly message
    """
    status = getattr(error, 'status', None)
    error_str = str(error).lower()

    if status == 401 or "unauthorized" in error_str:
        raise AuthenticationError(ErrorMessages.UNAUTHORIZED) from error

    if status == 403 or "forbidden" in error_str:
        raise exception_class(ErrorMessages.FORBIDDEN) from error

    if any(ssl_indicator in error_str for ssl_indicator in ["ssl", "certificate", "tls"]):
        handle_ssl_error(error, exception_class)

    raise exception_class(f"API error: {format_api_error(error)}") from error


def format_api_error(error: Exception) -> str:
    """
    Render an API error as a single line.

    ApiException's own string form spans several lines and includes the
    response headers; this keeps the status, reason and the server's message.

    Args:
        error: The caught exception (ApiException or other)

    Returns:
        str: e.g. '(409) Conflict: deployments.apps "web" already exists'
    """
    status = getattr(error, 'status', None)
    if status is None:
        return str(error).strip()

    message = None
    body = getattr(error, 'body', None)
    if body:
        try:
            message = json.loads(body).get('message')
        except (ValueError, TypeError, AttributeError):
            message = None

    reason = getattr(error, 'reason', None) or ""
    summary = f"({status}) {reason}".strip()
    return f"{summary}: {message}" if message else summary
