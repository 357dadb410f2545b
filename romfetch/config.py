"""Run configuration for romfetch.

The configuration is read once (normally from `romfetch_config.json`) and then
handed to every component as an immutable value. Example file:

    {
        "defaults": {
            "main_language": "fr",
            "allow_english": true,
            "allow_japanese": false,
            "allow_pre_release": false
        },
        "network": {"throttle_limit": 4, "timeout": 60, "verify_ssl": true},
        "title_lists": {
            "GBA": {
                "urls": ["https://example.org/files/Nintendo%20-%20Game%20Boy%20Advance/"],
                "cross_check": true
            }
        }
    }

Keys that start with an underscore are treated as comments.
"""
import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .utils.constants import DEFAULT_THROTTLE_LIMIT, DEFAULT_TIMEOUT, LANGUAGE_COUNTRIES


class ConfigurationError(Exception):
    """Raised when the run cannot proceed: bad config, no title lists or no usable URLs."""


@dataclass(frozen=True)
class TitleListSettings:
    urls: Tuple[str, ...] = ()
    cross_check: bool = False

    def usable_urls(self) -> Tuple[str, ...]:
        """Non-empty http(s) URLs, in configured order."""
        return tuple(
            u.strip() for u in self.urls
            if isinstance(u, str) and u.strip().lower().startswith(('http://', 'https://'))
        )


@dataclass(frozen=True)
class Configuration:
    main_language: str = 'en'
    allow_english: bool = False
    allow_japanese: bool = False
    allow_pre_release: bool = False
    throttle_limit: int = DEFAULT_THROTTLE_LIMIT
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    title_lists: Mapping[str, TitleListSettings] = field(default_factory=dict)

    def __post_init__(self):
        lang = str(self.main_language or '').strip().lower()
        if lang not in LANGUAGE_COUNTRIES:
            raise ConfigurationError(f"Unsupported main language: {self.main_language!r}")
        object.__setattr__(self, 'main_language', lang)
        try:
            limit = int(self.throttle_limit)
        except (TypeError, ValueError):
            raise ConfigurationError(f"throttle_limit must be an integer, got {self.throttle_limit!r}")
        if limit < 1:
            raise ConfigurationError(f"throttle_limit must be at least 1, got {limit}")
        object.__setattr__(self, 'throttle_limit', limit)
        object.__setattr__(self, 'title_lists', MappingProxyType(dict(self.title_lists)))

    @property
    def english_enabled(self) -> bool:
        return self.allow_english or self.main_language == 'en'

    @property
    def japanese_enabled(self) -> bool:
        return self.allow_japanese or self.main_language == 'ja'

    def with_overrides(self, **changes) -> 'Configuration':
        """Return a copy with the given fields replaced; `None` values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes) if changes else self


def _section(cfg: dict, name: str) -> dict:
    value = cfg.get(name, {})
    if not isinstance(value, dict):
        raise ConfigurationError(f"'{name}' section must be an object")
    return {k: v for k, v in value.items() if not str(k).startswith('_')}


def _flag(section: dict, key: str, default: bool, where: str) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError(f"'{where}.{key}' must be true or false, got {value!r}")
    return value


def _title_lists(raw: dict) -> Dict[str, TitleListSettings]:
    lists = {}
    for name, entry in raw.items():
        if isinstance(entry, list):
            # Shorthand: a bare list of URLs
            entry = {'urls': entry}
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Title list '{name}' must be an object or a list of URLs")
        urls = entry.get('urls', [])
        if isinstance(urls, str):
            urls = [urls]
        lists[name] = TitleListSettings(
            urls=tuple(urls),
            cross_check=_flag(entry, 'cross_check', False, f"title_lists.{name}"),
        )
    return lists


def config_from_dict(cfg: dict) -> Configuration:
    if not isinstance(cfg, dict):
        raise ConfigurationError("Configuration root must be an object")
    defaults = _section(cfg, 'defaults')
    net = _section(cfg, 'network')
    return Configuration(
        main_language=defaults.get('main_language', 'en'),
        allow_english=_flag(defaults, 'allow_english', False, 'defaults'),
        allow_japanese=_flag(defaults, 'allow_japanese', False, 'defaults'),
        allow_pre_release=_flag(defaults, 'allow_pre_release', False, 'defaults'),
        throttle_limit=net.get('throttle_limit', DEFAULT_THROTTLE_LIMIT),
        timeout=float(net.get('timeout', DEFAULT_TIMEOUT)),
        verify_ssl=_flag(net, 'verify_ssl', True, 'network'),
        title_lists=_title_lists(_section(cfg, 'title_lists')),
    )


def load_config(path: Optional[Path]) -> Configuration:
    """Load configuration from a JSON file; a missing file yields the defaults."""
    if path is None or not Path(path).exists():
        return Configuration()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            cfg = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read config {path}: {e}") from e
    return config_from_dict(cfg)
