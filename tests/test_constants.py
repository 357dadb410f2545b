from romfetch.utils.constants import LANGUAGE_COUNTRIES, PRE_RELEASE_WORDS, USER_AGENTS


def test_language_table_has_fallback_regions():
    assert LANGUAGE_COUNTRIES['en'] == 'USA'
    assert LANGUAGE_COUNTRIES['ja'] == 'Japan'
    assert LANGUAGE_COUNTRIES['fr'] == 'France'
    assert all(code == code.lower() and len(code) == 2 for code in LANGUAGE_COUNTRIES)


def test_pre_release_words():
    assert set(PRE_RELEASE_WORDS) == {'beta', 'demo', 'proto', 'rev'}


def test_user_agents_populated():
    assert isinstance(USER_AGENTS, list)
    assert len(USER_AGENTS) > 0
