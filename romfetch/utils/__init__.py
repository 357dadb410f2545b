# Utilities package for romfetch
from .filenames import normalize_title, normalize_titles, existing_file_keys, filename_for_label
from .constants import USER_AGENTS, LANGUAGE_COUNTRIES, PRE_RELEASE_WORDS

__all__ = [
    "normalize_title", "normalize_titles", "existing_file_keys", "filename_for_label",
    "USER_AGENTS", "LANGUAGE_COUNTRIES", "PRE_RELEASE_WORDS",
]
