"""Pytest configuration for romfetch tests."""
import sys
from pathlib import Path

import pytest

# Add repository root to path so tests can import the package without installing it
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from romfetch.config import Configuration, TitleListSettings  # noqa: E402
from romfetch.downloader_lib.parse import CrawledLink  # noqa: E402


@pytest.fixture
def make_config():
    def _make(**kwargs):
        return Configuration(**kwargs)
    return _make


@pytest.fixture
def link():
    def _link(text, href=None):
        return CrawledLink(href=href or f"https://example.org/files/{text}.zip", text=text)
    return _link


@pytest.fixture
def gba_config():
    return Configuration(
        main_language='en',
        throttle_limit=2,
        title_lists={'GBA': TitleListSettings(urls=('https://example.org/gba/',), cross_check=True)},
    )
