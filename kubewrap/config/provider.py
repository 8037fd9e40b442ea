"""Configuration providers for the kubectl wrapper."""
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import yaml

logger = logging.getLogger("kubewrap.config")


@dataclass(frozen=True)
class KubewrapConfig:
    """Wrapper configuration."""
    kubectl_binary: str = "kubectl"
    kubeconfig_path: str = ""
    base_domain: str = "svc.cluster.local"
    command_timeout_seconds: Optional[int] = None
    log_level: str = "INFO"

    def with_overrides(self, **overrides: Any) -> "KubewrapConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_config(self) -> KubewrapConfig:
        """Get wrapper configuration."""
        ...


def _parse_timeout(value: Any, source: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        timeout = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{source} must be an integer number of seconds, got {value!r}")
    if timeout <= 0:
        raise ValueError(f"{source} must be positive, got {timeout}")
    return timeout


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_config(self) -> KubewrapConfig:
        """Get configuration from environment variables."""
        defaults = KubewrapConfig()
        return KubewrapConfig(
            kubectl_binary=os.getenv("KUBEWRAP_KUBECTL", defaults.kubectl_binary),
            kubeconfig_path=os.getenv("KUBECONFIG", defaults.kubeconfig_path),
            base_domain=os.getenv("KUBEWRAP_BASE_DOMAIN", defaults.base_domain),
            command_timeout_seconds=_parse_timeout(
                os.getenv("KUBEWRAP_COMMAND_TIMEOUT"), "KUBEWRAP_COMMAND_TIMEOUT"
            ),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        )


class YamlConfigProvider:
    """
    YAML file configuration provider.

    Expected layout (all keys optional):

        kubectlBinary: kubectl
        kubeconfigPath: /etc/kubewrap/kubeconfig
        baseDomain: svc.cluster.local
        commandTimeoutSeconds: 120
        logLevel: INFO
    """

    def __init__(self, config_path: str):
        self.config_path = Path(config_path)

    def _load(self) -> Dict[str, Any]:
        try:
            with open(self.config_path, "r") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ValueError(f"Cannot read config file {self.config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {self.config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {self.config_path} must contain a mapping")
        return data

    def get_config(self) -> KubewrapConfig:
        """Get configuration from the YAML file."""
        data = self._load()
        defaults = KubewrapConfig()
        config = KubewrapConfig(
            kubectl_binary=str(data.get("kubectlBinary", defaults.kubectl_binary)),
            kubeconfig_path=str(data.get("kubeconfigPath", defaults.kubeconfig_path)),
            base_domain=str(data.get("baseDomain", defaults.base_domain)),
            command_timeout_seconds=_parse_timeout(
                data.get("commandTimeoutSeconds"), "commandTimeoutSeconds"
            ),
            log_level=str(data.get("logLevel", defaults.log_level)).upper(),
        )
        logger.debug(f"Loaded configuration from {self.config_path}")
        return config
