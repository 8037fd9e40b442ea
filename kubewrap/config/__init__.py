from .provider import ConfigProvider, EnvConfigProvider, KubewrapConfig, YamlConfigProvider

__all__ = ["ConfigProvider", "EnvConfigProvider", "KubewrapConfig", "YamlConfigProvider"]
