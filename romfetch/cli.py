#!/usr/bin/env python3
"""
Command-line runner for romfetch.

Reads every `*.txt` title list in a folder (one title per line; blank lines
and `#` comments are ignored; the file name without extension names the list)
and downloads each list into its own subfolder of the destination.

Source URLs, language policy and throttle come from `romfetch_config.json`;
`--language`, `--throttle` and the toggles below override the file.

Typical usage:
        # Show what would be downloaded
        romfetch --titles lists/ --dest roms/ --dry-run

        # Download with French as main language and English fallback
        romfetch --titles lists/ --dest roms/ --language fr --allow-english
"""
import argparse
import sys
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List

from .config import ConfigurationError, load_config
from .download_roms import RomFetcher
from .utils.constants import CONFIG_FILENAME


def read_title_lists(folder: Path) -> Dict[str, List[str]]:
    """Load `*.txt` title lists from `folder`, keyed by file stem, in name order."""
    folder = Path(folder)
    if not folder.is_dir():
        raise ConfigurationError(f"Title list folder does not exist: {folder}")
    lists = OrderedDict()
    for path in sorted(folder.glob('*.txt')):
        titles = []
        with open(path, 'r', encoding='utf-8-sig') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#'):
                    titles.append(line)
        lists[path.stem] = titles
    return lists


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Download the best-matching links for lists of titles")
    parser.add_argument('--config', '-c', default=CONFIG_FILENAME,
                        help=f'Path to the JSON config (default: ./{CONFIG_FILENAME})')
    parser.add_argument('--titles', '-t', required=True, help='Folder holding *.txt title lists')
    parser.add_argument('--dest', '-d', required=True, help='Destination folder for downloads')
    parser.add_argument('--language', '-l', help='Main language code, e.g. fr, de, en')
    parser.add_argument('--throttle', type=int, help='Maximum concurrent downloads')
    parser.add_argument('--allow-english', action='store_true', default=None, help='Fall back to USA/English releases')
    parser.add_argument('--allow-japanese', action='store_true', default=None, help='Fall back to Japanese releases')
    parser.add_argument('--allow-pre-release', action='store_true', default=None,
                        help='Match beta/demo/proto/rev releases as their own titles')
    parser.add_argument('--dry-run', action='store_true', help='Plan and report without downloading')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(Path(args.config)).with_overrides(
            main_language=args.language,
            throttle_limit=args.throttle,
            allow_english=args.allow_english,
            allow_japanese=args.allow_japanese,
            allow_pre_release=args.allow_pre_release,
        )
        title_lists = read_title_lists(Path(args.titles))
        with RomFetcher(args.dest, config, dry_run=args.dry_run) as fetcher:
            if args.dry_run:
                print("Dry-run mode: nothing will be downloaded")
            fetcher.run_all(title_lists)
    except ConfigurationError as e:
        print(f"\n❌ {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 130
    return 0


if __name__ == '__main__':
    sys.exit(main())
