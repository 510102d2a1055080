from .loader import ConfigError, StubsmithConfig, load_config_from_path

__all__ = ["ConfigError", "StubsmithConfig", "load_config_from_path"]
