"""Shared constants for the romfetch downloader."""

# User agents to rotate (appear as normal browser traffic)
USER_AGENTS = [
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Edge/120.0.0.0',
]

# Language code -> the country name used in No-Intro/Redump region tags
LANGUAGE_COUNTRIES = {
    'en': 'USA',
    'ja': 'Japan',
    'fr': 'France',
    'de': 'Germany',
    'es': 'Spain',
    'it': 'Italy',
    'nl': 'Netherlands',
    'pt': 'Portugal',
    'sv': 'Sweden',
    'no': 'Norway',
    'da': 'Denmark',
    'fi': 'Finland',
    'pl': 'Poland',
    'ru': 'Russia',
    'ko': 'Korea',
    'zh': 'China',
}

PRE_RELEASE_WORDS = ('beta', 'demo', 'proto', 'rev')

# Dropped from normalized keys when they appear as whole words
ARTICLES = {'the', 'of', 'or', 'is', 'a', 'an'}

# Characters Windows refuses in file names
INVALID_FILENAME_CHARS = '<>:"/\\|?*'

CONFIG_FILENAME = 'romfetch_config.json'
LOG_FILENAME = 'romfetch.log'

# Network defaults (seconds / workers)
DEFAULT_THROTTLE_LIMIT = 4
DEFAULT_TIMEOUT = 60
CHUNK_SIZE = 8192
