"""Aggregate crawled links into the best candidate per normalized key."""
from dataclasses import dataclass
from typing import Dict, Iterable

from .downloader_lib.parse import CrawledLink
from .priority import rules_for, score_with
from .utils.filenames import PRE_RELEASE_TAG_RE, normalize_title


@dataclass(frozen=True)
class ScoredCandidate:
    link: CrawledLink
    key: str
    priority: int


def has_pre_release_marker(text: str) -> bool:
    """True when the label carries a (Beta)/(Demo)/(Proto)/(Rev N) style tag."""
    return PRE_RELEASE_TAG_RE.search(text.lower()) is not None


def build_catalog(links: Iterable[CrawledLink], config) -> Dict[str, ScoredCandidate]:
    """Keep the highest-priority eligible link for every key.

    Pre-release links are dropped before scoring when the configuration does
    not allow them. Links scoring 0 are never stored. On equal priority the
    first link seen wins, so the result follows source/page order.
    """
    rules = rules_for(config)
    catalog: Dict[str, ScoredCandidate] = {}
    for link in links:
        if not config.allow_pre_release and has_pre_release_marker(link.text):
            continue
        key = normalize_title(link.text, config.allow_pre_release)
        if not key:
            continue
        priority = score_with(link.text, rules)
        if priority == 0:
            continue
        current = catalog.get(key)
        if current is None or priority > current.priority:
            catalog[key] = ScoredCandidate(link=link, key=key, priority=priority)
    return catalog
