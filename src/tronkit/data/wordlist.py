"""
Loads the BIP39 wordlist shipped with the `mnemonic` reference package
"""
from functools import lru_cache

from mnemonic import Mnemonic as _ReferenceMnemonic

__all__ = ["load_wordlist", "word_index"]

DEFAULT_LANGUAGE = "english"


@lru_cache(maxsize=None)
def load_wordlist(language: str = DEFAULT_LANGUAGE) -> tuple[str, ...]:
    """Return the 2048-word BIP39 wordlist as an immutable tuple."""
    words = tuple(_ReferenceMnemonic(language).wordlist)
    if len(words) != 2048:
        raise ValueError(f"BIP39 wordlist for {language} must hold 2048 words, found {len(words)}")
    return words


@lru_cache(maxsize=None)
def word_index(language: str = DEFAULT_LANGUAGE) -> dict:
    return {word: index for index, word in enumerate(load_wordlist(language))}
