"""
romfetch - match title lists against source listings and download the best links.

For every title list the downloader:
- normalizes the wanted titles into match keys
- crawls the configured source pages for links
- keeps the best link per key under the configured language/region policy
- optionally cross-checks the destination folder so titles already present are skipped
- downloads the selected links in parallel, never more than `throttle_limit` at a time

Files land in `<download root>/<title list name>/`. Every outcome and every
recovered error is printed and also written to `romfetch.log` in the
download root.
"""
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Set

import requests

from .catalog import build_catalog
from .config import Configuration, ConfigurationError
from .downloader_lib.fetch import fetch_source_page, silence_insecure_warnings
from .downloader_lib.parse import CrawledLink, parse_links
from .events import EventSink, close_logger, setup_logger
from .planner import DOWNLOADED, FAILED, plan_downloads
from .scheduler import FetchScheduler
from .utils.filenames import existing_file_keys, normalize_titles


class RomFetcher:
    """Runs title lists through crawl, match, plan and download."""

    def __init__(self, download_root: str, config: Configuration, dry_run: bool = False,
                 session: Optional[requests.Session] = None, session_factory=requests.Session,
                 echo: bool = True):
        """
        Args:
            download_root: Writable folder; each title list gets a subfolder
            config: Immutable run configuration
            dry_run: Plan and report without downloading anything
            session: Session used for crawling source pages
            session_factory: Creates the per-worker download sessions
            echo: Print progress lines to stdout
        """
        self.download_root = Path(download_root)
        self.download_root.mkdir(parents=True, exist_ok=True)
        self.config = config
        self.dry_run = dry_run
        self.session = session or requests.Session()
        self.logger = setup_logger(self.download_root)
        self.sink = EventSink(self.logger, echo=echo)
        silence_insecure_warnings(config.verify_ssl)
        self.scheduler = FetchScheduler(
            config.throttle_limit, self.sink, timeout=config.timeout,
            verify_ssl=config.verify_ssl, session_factory=session_factory,
        )

    def close(self):
        close_logger(self.logger)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _fatal(self, message: str):
        self.sink.error(f"Stopping: {message}", console='')
        raise ConfigurationError(message)

    def crawl_sources(self, urls: Sequence[str]) -> List[CrawledLink]:
        """Collect links from every source page, in URL order.

        A page that cannot be fetched contributes nothing; the rest still count.
        """
        links: List[CrawledLink] = []
        for url in urls:
            try:
                response = fetch_source_page(self.session, url, timeout=self.config.timeout,
                                             verify=self.config.verify_ssl)
            except requests.RequestException as e:
                self.sink.warning(f"Could not fetch source page {url}: {e}")
                continue
            base_url = getattr(response, 'url', None) or url
            page_links = parse_links(response.text, base_url, logger=self.sink)
            self.sink.info(f"Found {len(page_links)} links on {url}",
                           console=f"  ✓ {len(page_links)} links on {url}")
            links.extend(page_links)
        return links

    def local_keys(self, folder: Path) -> Set[str]:
        """Match keys for the files already in `folder` (subfolders are ignored)."""
        if not folder.is_dir():
            return set()
        names = [p.name for p in folder.iterdir() if p.is_file()]
        return existing_file_keys(names, self.config.allow_pre_release)

    def source_urls(self, name: str):
        """Usable source URLs for a title list; stops the run when there are none."""
        settings = self.config.title_lists.get(name)
        if settings is None:
            self._fatal(f"No source URLs configured for title list '{name}'")
        urls = settings.usable_urls()
        if not urls:
            self._fatal(f"Title list '{name}' has no usable source URLs")
        return settings, urls

    def process_title_list(self, name: str, raw_titles: Sequence[str]) -> Dict[str, int]:
        """Download everything one title list asks for.

        Raises ConfigurationError when the list has no settings or no usable URL.
        Returns counts of matched/unmatched titles and download outcomes.
        """
        settings, urls = self.source_urls(name)

        self.sink.line(f"\n{'='*80}\nTITLE LIST: {name}\n{'='*80}")
        self.sink.info(f"Processing title list {name} ({len(raw_titles)} titles, {len(urls)} sources)")

        allow_pre = self.config.allow_pre_release
        title_keys = normalize_titles(raw_titles, allow_pre)
        catalog = build_catalog(self.crawl_sources(urls), self.config)

        dest_dir = self.download_root / name
        existing = self.local_keys(dest_dir) if settings.cross_check else set()
        plan = plan_downloads(title_keys, catalog, existing, settings.cross_check, dest_dir)

        for key in plan.unmatched:
            self.sink.info(f"No match found for {key} in {name}", console=f"  ℹ️  No match: {key}")
        for outcome in plan.skipped:
            self.sink.info(f"Skipped {outcome.label} (already present)",
                           console=f"  ⏭️  Skipping '{outcome.label}' (already present)")

        summary = {
            'matched': len(title_keys) - len(plan.unmatched),
            'unmatched': len(plan.unmatched),
            'skipped': len(plan.skipped),
            'planned': len(plan.tasks),
            'downloaded': 0,
            'failed': 0,
        }

        if self.dry_run:
            for task in plan.tasks:
                self.sink.info(f"Dry-run: would download {task.url} -> {task.destination_path}",
                               console=f"  • {task.display_label} -> {task.destination_path.name}")
            return summary

        if plan.tasks:
            dest_dir.mkdir(parents=True, exist_ok=True)
        outcomes = self.scheduler.run(plan.tasks)
        summary['downloaded'] = sum(1 for o in outcomes if o.outcome == DOWNLOADED)
        summary['failed'] = sum(1 for o in outcomes if o.outcome == FAILED)

        self.sink.info(
            f"Finished {name}: {summary['downloaded']} downloaded, {summary['skipped']} skipped, "
            f"{summary['failed']} failed, {summary['unmatched']} unmatched",
            console=(f"\n  Done: {summary['downloaded']} downloaded, {summary['skipped']} skipped, "
                     f"{summary['failed']} failed, {summary['unmatched']} without a match"),
        )
        return summary

    def run_all(self, title_lists: Mapping[str, Sequence[str]]) -> Dict[str, Dict[str, int]]:
        """Process every title list in order.

        Raises ConfigurationError when there are none, or when any list lacks
        usable URLs; both are checked before the first list is downloaded.
        """
        if not title_lists:
            self._fatal("No title lists found to process")
        for name in title_lists:
            self.source_urls(name)
        return {name: self.process_title_list(name, titles) for name, titles in title_lists.items()}
