from romfetch.catalog import build_catalog, has_pre_release_marker
from romfetch.config import Configuration


def test_keeps_exact_country_over_europe(link):
    cfg = Configuration(main_language='fr')
    catalog = build_catalog([link("Game (Europe)"), link("Game (France)")], cfg)
    assert catalog['game'].link.text == "Game (France)"
    assert catalog['game'].priority == 20


def test_tie_keeps_first_seen(link):
    cfg = Configuration(main_language='en')
    first = link("Game (USA)", href="https://a.example/Game.zip")
    second = link("Game (USA)", href="https://b.example/Game.zip")
    catalog = build_catalog([first, second], cfg)
    assert catalog['game'].link.href == "https://a.example/Game.zip"


def test_zero_priority_never_stored(link):
    cfg = Configuration(main_language='en')
    catalog = build_catalog([link("Game (Japan)"), link("Other (Korea)")], cfg)
    assert catalog == {}


def test_pre_release_excluded_even_if_only_candidate(link):
    cfg = Configuration(main_language='fr', allow_english=True)
    catalog = build_catalog([link("Game (Beta 2)"), link("Demo Disc (France) (Demo)")], cfg)
    assert 'game' not in catalog
    assert 'demodisc' not in catalog


def test_pre_release_exclusion_beats_high_score(link):
    cfg = Configuration(main_language='fr')
    catalog = build_catalog([link("Game (France) (Proto)"), link("Game (Europe)")], cfg)
    assert catalog['game'].link.text == "Game (Europe)"


def test_pre_release_allowed_gets_own_key(link):
    cfg = Configuration(main_language='en', allow_pre_release=True)
    catalog = build_catalog([link("Game (USA)"), link("Game (USA) (Beta)")], cfg)
    assert set(catalog) == {'game', 'gamebeta'}


def test_has_pre_release_marker():
    assert has_pre_release_marker("Game (Beta 2)")
    assert has_pre_release_marker("Game [DEMO]")
    assert has_pre_release_marker("Game (USA) (Rev 1)")
    assert not has_pre_release_marker("Beta Fighter (USA)")
    assert not has_pre_release_marker("Game (Revolution)")
