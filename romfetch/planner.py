"""Turn matched titles into concrete download tasks."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping, Set

from .catalog import ScoredCandidate
from .utils.filenames import filename_for_label

DOWNLOADED = 'downloaded'
SKIPPED_EXISTING = 'skipped-existing'
FAILED = 'failed'


@dataclass(frozen=True)
class DownloadTask:
    url: str
    destination_path: Path
    display_label: str


@dataclass(frozen=True)
class FetchOutcome:
    label: str
    outcome: str
    reason: str = ''

    @property
    def ok(self) -> bool:
        return self.outcome != FAILED


@dataclass
class DownloadPlan:
    tasks: List[DownloadTask] = field(default_factory=list)
    skipped: List[FetchOutcome] = field(default_factory=list)
    unmatched: List[str] = field(default_factory=list)


def plan_downloads(title_keys: Iterable[str], catalog: Mapping[str, ScoredCandidate],
                   existing_keys: Set[str], cross_check: bool, dest_dir: Path) -> DownloadPlan:
    """Build the download plan for one title list, in title order.

    Keys missing from the catalog are collected in `unmatched` for the caller
    to report. With `cross_check` on, keys already present locally become
    skipped-existing outcomes instead of tasks.
    """
    plan = DownloadPlan()
    dest_dir = Path(dest_dir)
    used_names: Set[str] = set()
    for key in title_keys:
        candidate = catalog.get(key)
        if candidate is None:
            plan.unmatched.append(key)
            continue
        label = candidate.link.text
        if cross_check and key in existing_keys:
            plan.skipped.append(FetchOutcome(label=label, outcome=SKIPPED_EXISTING))
            continue
        filename = _unique_name(filename_for_label(label, candidate.link.href), used_names)
        used_names.add(filename.lower())
        plan.tasks.append(DownloadTask(
            url=candidate.link.href,
            destination_path=dest_dir / filename,
            display_label=label,
        ))
    return plan


def _unique_name(filename: str, used_names: Set[str]) -> str:
    """Keep every task on its own file even if two labels sanitize to the same name."""
    if filename.lower() not in used_names:
        return filename
    stem, dot, ext = filename.rpartition('.')
    if not dot:
        stem, ext = filename, ''
    n = 2
    while True:
        candidate = f"{stem} ({n}){dot}{ext}"
        if candidate.lower() not in used_names:
            return candidate
        n += 1
