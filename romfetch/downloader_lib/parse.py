"""HTML parsing helpers for romfetch."""
from typing import List, NamedTuple, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup


class CrawledLink(NamedTuple):
    href: str
    text: str


def resolve_href(href: str, base_url: str) -> Optional[str]:
    """Combine `href` with `base_url`; None when the result is not an absolute http(s) URL."""
    href = (href or '').strip()
    if not href or href.startswith('#'):
        return None
    try:
        absolute = urljoin(base_url, href)
        parsed = urlparse(absolute)
    except ValueError:
        return None
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        return None
    return absolute


def parse_links(html_content: str, base_url: str, logger=None) -> List[CrawledLink]:
    """Extract every anchor on a page as an absolute link plus its display label.

    Labels are the anchor's text with nested markup flattened. Anchors whose
    href cannot be resolved against `base_url` are dropped with a warning.
    """
    links = []
    soup = BeautifulSoup(html_content, 'html.parser')
    for a in soup.find_all('a', href=True):
        href = a.get('href')
        if isinstance(href, (list, tuple)):
            href = href[0] if href else ''
        text = a.get_text(' ', strip=True)
        absolute = resolve_href(str(href), base_url)
        if absolute is None:
            if logger:
                logger.warning(f"Dropping unresolvable link {href!r} ({text!r}) on {base_url}")
            continue
        links.append(CrawledLink(href=absolute, text=text))
    return links
