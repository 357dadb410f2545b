"""Regional/language priority scoring for link labels.

Scoring is an ordered rule table: the first rule whose predicate accepts the
label decides the priority. A label no rule accepts scores 0 and is never
selected. Tiers are spaced so that any main-language match (17-20) beats any
English fallback (9-10), which in turn beats the Japanese fallback (1).
"""
import re
from functools import lru_cache
from typing import Callable, List, NamedTuple, Tuple

from .utils.constants import LANGUAGE_COUNTRIES


class PriorityRule(NamedTuple):
    name: str
    predicate: Callable[[str], bool]
    score: int


def tag_element(word: str) -> Callable[[str], bool]:
    """Match `word` as one entry of a parenthesized tag: `(France)`, `(Fr,De)`, `(USA, Europe)`."""
    pattern = re.compile(
        r'\(\s*(?:[^()]*?[,+]\s*)?' + re.escape(word) + r'\s*(?:[,+][^()]*)?\)',
        re.IGNORECASE,
    )
    return lambda text: pattern.search(text) is not None


def tag_word(word: str) -> Callable[[str], bool]:
    """Match `word` anywhere inside a parenthesized tag as a whole word."""
    pattern = re.compile(r'\([^()]*\b' + re.escape(word) + r'\b[^()]*\)', re.IGNORECASE)
    return lambda text: pattern.search(text) is not None


def marker(shorthand: str) -> Callable[[str], bool]:
    """Match a GoodTools-style shorthand such as `[U]`."""
    token = '[' + shorthand + ']'
    return lambda text: token in text.upper()


def any_of(*predicates: Callable[[str], bool]) -> Callable[[str], bool]:
    return lambda text: any(p(text) for p in predicates)


def all_of(*predicates: Callable[[str], bool]) -> Callable[[str], bool]:
    return lambda text: all(p(text) for p in predicates)


@lru_cache(maxsize=None)
def build_rules(main_language: str, allow_english: bool, allow_japanese: bool) -> Tuple[PriorityRule, ...]:
    """Build the ordered rule table for one language policy."""
    lang = main_language.lower()
    rules: List[PriorityRule] = []

    if lang not in ('en', 'ja'):
        code = lang.capitalize()
        rules += [
            PriorityRule('country', tag_element(LANGUAGE_COUNTRIES[lang]), 20),
            PriorityRule('language+europe', all_of(tag_element(code), tag_element('Europe')), 20),
            PriorityRule('language', tag_word(code), 19),
            PriorityRule('europe', tag_element('Europe'), 18),
            PriorityRule('world', any_of(tag_element('World'), marker('W')), 17),
        ]

    if allow_english:
        rules += [
            PriorityRule('usa', any_of(tag_element('USA'), marker('U')), 10),
            PriorityRule('english', tag_element('En'), 10),
            # Not tied to the main-language 'world' score; the two are tuned separately
            PriorityRule('world-fallback', any_of(tag_element('World'), marker('W')), 9),
        ]

    if allow_japanese:
        rules.append(
            PriorityRule('japan', any_of(tag_element('Japan'), marker('J'), tag_element('Ja')), 1)
        )

    return tuple(rules)


def rules_for(config) -> Tuple[PriorityRule, ...]:
    return build_rules(config.main_language, config.english_enabled, config.japanese_enabled)


def score_with(text: str, rules) -> int:
    for rule in rules:
        if rule.predicate(text):
            return rule.score
    return 0


def score(text: str, config) -> int:
    """Priority of a link label under `config`; 0 means it must not be selected."""
    return score_with(text, rules_for(config))
