from blog_api.configs.settings import (
    CONFIG_MAP,
    AuthConfig,
    HashingCost,
    LimiterConfig,
    Settings,
    settings,
)

__all__ = [
    "AuthConfig",
    "CONFIG_MAP",
    "HashingCost",
    "LimiterConfig",
    "Settings",
    "settings",
]
