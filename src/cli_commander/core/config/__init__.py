from .app_config import AppConfig, AuthConfig, PolicyConfig, UserConfig, load_config

__all__ = ["AppConfig", "AuthConfig", "PolicyConfig", "UserConfig", "load_config"]
