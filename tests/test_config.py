import json

import pytest

from romfetch.config import Configuration, ConfigurationError, TitleListSettings, config_from_dict, load_config


def test_load_config_reads_sections(tmp_path):
    cfg = {
        "_comment": "ignored",
        "defaults": {"main_language": "FR", "allow_english": True, "_note": "x"},
        "network": {"throttle_limit": 6, "timeout": 15, "verify_ssl": False},
        "title_lists": {
            "GBA": {"urls": ["https://example.org/gba/"], "cross_check": True},
            "NES": ["https://example.org/nes/", "ftp://nope"],
        },
    }
    path = tmp_path / 'romfetch_config.json'
    path.write_text(json.dumps(cfg), encoding='utf-8')

    config = load_config(path)
    assert config.main_language == 'fr'
    assert config.allow_english and not config.allow_japanese
    assert config.throttle_limit == 6
    assert config.timeout == 15.0
    assert config.verify_ssl is False
    assert config.title_lists['GBA'] == TitleListSettings(urls=("https://example.org/gba/",), cross_check=True)
    assert config.title_lists['NES'].usable_urls() == ("https://example.org/nes/",)


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / 'nope.json')
    assert config == Configuration()
    assert config.english_enabled and not config.japanese_enabled


def test_bad_json_is_configuration_error(tmp_path):
    path = tmp_path / 'romfetch_config.json'
    path.write_text('{not json', encoding='utf-8')
    with pytest.raises(ConfigurationError):
        load_config(path)


@pytest.mark.parametrize("cfg", [
    {"defaults": {"main_language": "xx"}},
    {"network": {"throttle_limit": 0}},
    {"network": {"throttle_limit": "many"}},
    {"title_lists": {"GBA": 5}},
    {"defaults": []},
    [],
])
def test_invalid_values_rejected(cfg):
    with pytest.raises(ConfigurationError):
        config_from_dict(cfg)


def test_configuration_is_immutable():
    config = Configuration(main_language='de')
    with pytest.raises(Exception):
        config.main_language = 'fr'


def test_with_overrides_revalidates_and_ignores_none():
    config = Configuration(main_language='de', throttle_limit=3)
    assert config.with_overrides(main_language=None, throttle_limit=None) is config
    changed = config.with_overrides(main_language='JA')
    assert changed.main_language == 'ja' and changed.japanese_enabled
    with pytest.raises(ConfigurationError):
        config.with_overrides(throttle_limit=0)


def test_title_lists_cannot_be_changed():
    config = Configuration(title_lists={'GB': TitleListSettings(urls=('https://example.org/gb/',))})
    with pytest.raises(TypeError):
        config.title_lists['NES'] = TitleListSettings()
    with pytest.raises(TypeError):
        del config.title_lists['GB']
    assert list(config.title_lists) == ['GB']


def test_source_dict_changes_do_not_leak_into_config():
    lists = {'GB': TitleListSettings()}
    config = Configuration(title_lists=lists)
    lists['NES'] = TitleListSettings()
    assert list(config.title_lists) == ['GB']


@pytest.mark.parametrize("cfg", [
    {"defaults": {"allow_english": "false"}},
    {"defaults": {"allow_japanese": 1}},
    {"defaults": {"allow_pre_release": "yes"}},
    {"network": {"verify_ssl": "true"}},
    {"title_lists": {"GB": {"urls": ["https://example.org/gb/"], "cross_check": "no"}}},
])
def test_non_boolean_flags_rejected(cfg):
    with pytest.raises(ConfigurationError):
        config_from_dict(cfg)
