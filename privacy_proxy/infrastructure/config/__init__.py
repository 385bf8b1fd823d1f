from .settings import Settings, get_settings
from .proxy_config import load_proxy_config, parse_proxy_config, parse_target_url

__all__ = [
    "Settings",
    "get_settings",
    "load_proxy_config",
    "parse_proxy_config",
    "parse_target_url",
]
