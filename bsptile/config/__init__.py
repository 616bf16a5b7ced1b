"""
bsptile.config - Configuration.

    - settings : Settings dataclass and INI loader
"""

from bsptile.config.settings import ConfigError, Settings, load_settings

__all__ = ["ConfigError", "Settings", "load_settings"]
