"""romfetch: download the best-matching links for lists of game titles.

Expose convenient entry points for scripts and tests.
"""
from .config import Configuration, ConfigurationError, TitleListSettings, load_config
from .download_roms import RomFetcher

__version__ = "0.1.0"

__all__ = ["Configuration", "ConfigurationError", "TitleListSettings", "load_config", "RomFetcher"]
