import json
from types import SimpleNamespace

import pytest

from romfetch import cli
from romfetch.cli import main, read_title_lists
from romfetch.config import ConfigurationError

LISTING = '<a href="Tetris%20(USA).zip">Tetris (USA).zip</a><a href="Metroid%20(USA).zip">Metroid (USA).zip</a>'


def _write_workspace(root, title_lists=True):
    cfg = {
        "defaults": {"main_language": "en"},
        "network": {"throttle_limit": 2},
        "title_lists": {"GB": {"urls": ["https://example.org/gb/"], "cross_check": True}},
    }
    (root / 'romfetch_config.json').write_text(json.dumps(cfg), encoding='utf-8')
    lists = root / 'lists'
    lists.mkdir()
    if title_lists:
        (lists / 'GB.txt').write_text("# wanted\nTetris\n\nMetroid\n", encoding='utf-8')
    return lists


def test_read_title_lists(tmp_path):
    (tmp_path / 'NES.txt').write_text("Zelda\n# skip\n  \nMetroid\n", encoding='utf-8')
    (tmp_path / 'GB.txt').write_text("﻿Tetris\n", encoding='utf-8')
    (tmp_path / 'notes.md').write_text("ignored", encoding='utf-8')
    lists = read_title_lists(tmp_path)
    assert list(lists) == ['GB', 'NES']
    assert lists['GB'] == ['Tetris']
    assert lists['NES'] == ['Zelda', 'Metroid']


def test_read_title_lists_missing_folder(tmp_path):
    with pytest.raises(ConfigurationError):
        read_title_lists(tmp_path / 'nope')


def test_cli_dry_run_lists_planned_downloads(tmp_path, monkeypatch, capsys):
    lists = _write_workspace(tmp_path)

    def fake_get(url, headers=None, verify=None, timeout=None):
        return SimpleNamespace(url=url, text=LISTING, raise_for_status=lambda: None)

    monkeypatch.setattr(cli.RomFetcher, '__init__', _patched_init(fake_get))
    code = main(['--config', str(tmp_path / 'romfetch_config.json'), '--titles', str(lists),
                 '--dest', str(tmp_path / 'out'), '--dry-run'])

    out = capsys.readouterr().out
    assert code == 0
    assert 'Dry-run mode' in out
    assert 'Tetris (USA).zip' in out
    assert 'Metroid (USA).zip' in out
    assert not (tmp_path / 'out' / 'GB').exists()


def test_cli_without_title_lists_exits_1(tmp_path, capsys):
    lists = _write_workspace(tmp_path, title_lists=False)
    code = main(['--config', str(tmp_path / 'romfetch_config.json'), '--titles', str(lists),
                 '--dest', str(tmp_path / 'out')])
    assert code == 1
    assert 'No title lists found' in capsys.readouterr().out


def _patched_init(fake_get):
    original = cli.RomFetcher.__init__

    def __init__(self, download_root, config, dry_run=False, **kwargs):
        original(self, download_root, config, dry_run=dry_run, session=SimpleNamespace(get=fake_get))
    return __init__
