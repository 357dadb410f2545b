import os
import re
from typing import Iterable, List, Set
from urllib.parse import unquote, urlparse

from .constants import ARTICLES, INVALID_FILENAME_CHARS, PRE_RELEASE_WORDS

# Markers are matched on lowercased text, so the patterns are lowercase too
PRE_RELEASE_TAG_RE = re.compile(
    r'[\(\[]\s*((?:' + '|'.join(PRE_RELEASE_WORDS) + r')(?:\s*\d+)?)\s*[\)\]]'
)
DISC_TAG_RE = re.compile(r'[\(\[]\s*(disc\s*\d+)\s*[\)\]]')
EXTENSION_RE = re.compile(r'\.[a-z0-9]{1,5}$', re.IGNORECASE)


def normalize_title(text: str, match_pre_release: bool = False) -> str:
    """Canonicalize a title or link label into the key used for matching.

    The key is the lowercased title with every annotation from the first
    opening bracket onward dropped, whole-word articles removed and all
    non-alphanumeric characters stripped. A pre-release tag (only when
    `match_pre_release` is set) and a disc tag are pulled out of the
    annotations before they are dropped and appended to the key, in that order.

    Returns an empty string when nothing usable is left; callers must not use
    an empty key for matching.
    """
    s = text.lower()

    release_tag = ''
    if match_pre_release:
        m = PRE_RELEASE_TAG_RE.search(s)
        if m:
            release_tag = re.sub(r'\s+', '', m.group(1))

    disc_tag = ''
    m = DISC_TAG_RE.search(s)
    if m:
        disc_tag = re.sub(r'\s+', '', m.group(1))

    # Region/language/version annotations are not part of the key
    s = re.split(r'[\(\[]', s, maxsplit=1)[0]

    words = s.split()
    kept = [w for w in words if w not in ARTICLES]
    # A title made only of articles keeps them, otherwise it would vanish
    if kept:
        words = kept
    core = re.sub(r'[^a-z0-9]', '', ''.join(words))
    if not core:
        return ''

    return core + release_tag + disc_tag


def normalize_titles(raw_titles: Iterable[str], match_pre_release: bool = False) -> List[str]:
    """Normalize a title list, keeping first-seen order and dropping empty or repeated keys."""
    keys = []
    seen = set()
    for title in raw_titles:
        key = normalize_title(title, match_pre_release)
        if key and key not in seen:
            seen.add(key)
            keys.append(key)
    return keys


def existing_file_keys(names: Iterable[str], match_pre_release: bool = False) -> Set[str]:
    """Keys for file names already present in a destination folder (extension removed)."""
    keys = set()
    for name in names:
        key = normalize_title(EXTENSION_RE.sub('', name), match_pre_release)
        if key:
            keys.add(key)
    return keys


def filename_for_label(label: str, url: str) -> str:
    """Derive a safe destination file name from a link's display label.

    Falls back to the last path segment of `url` when the label is empty and
    borrows the URL's extension when the label has none.
    """
    url_name = unquote(os.path.basename(urlparse(url).path))
    name = label.strip() or url_name

    for ch in INVALID_FILENAME_CHARS:
        name = name.replace(ch, '_')
    name = re.sub(r'[\x00-\x1f]', '', name)
    name = re.sub(r'\s+', ' ', name).strip().rstrip('. ')

    if not EXTENSION_RE.search(name):
        m = EXTENSION_RE.search(url_name)
        if m:
            name += m.group(0)

    return name or 'download'
