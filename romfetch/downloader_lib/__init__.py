"""Shared network and HTML helpers for romfetch.

- fetch.py: page and file fetching over a requests session
- parse.py: anchor discovery in source listing pages
"""

# No exports needed - import directly from submodules
__all__ = []
