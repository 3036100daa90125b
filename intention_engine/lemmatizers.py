"""Pluggable morphological analyzers used by the text normalizer."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from lemminflect import getLemma

logger = logging.getLogger(__name__)

PARTS_OF_SPEECH = ("verb", "noun", "adjective")

_UPOS = {"verb": "VERB", "noun": "NOUN", "adjective": "ADJ"}
_WORDNET_POS = {"verb": "v", "noun": "n", "adjective": "a"}


class Lemmatizer(Protocol):
    """Anything that can reduce a token to its lemma for a part of speech."""

    def lemmatize_as(self, part_of_speech: str, token: str) -> Optional[str]:
        ...


class NullLemmatizer:
    """Lemmatizer for languages without an analyzer: never produces a lemma."""

    def lemmatize_as(self, part_of_speech: str, token: str) -> Optional[str]:
        return None


class LemmInflectLemmatizer:
    """English lemmatizer backed by LemmInflect's bundled dictionary.

    Out-of-vocabulary tokens (typos, Italian words) produce no lemma so they
    are compared as typed.
    """

    def lemmatize_as(self, part_of_speech: str, token: str) -> Optional[str]:
        upos = _UPOS.get(part_of_speech)
        if upos is None or not token:
            return None
        lemmas = getLemma(token, upos=upos, lemmatize_oov=False)
        return lemmas[0] if lemmas else None


class WordNetLemmatizer:
    """Adapter over NLTK's WordNet lemmatizer.

    Requires the WordNet corpus (``python -m nltk.downloader wordnet``); a
    missing corpus raises ``LookupError`` on first use.
    """

    def __init__(self) -> None:
        self._lemmatizer = None

    def _load(self):
        if self._lemmatizer is None:
            from nltk.stem import WordNetLemmatizer as _NltkLemmatizer

            lemmatizer = _NltkLemmatizer()
            try:
                lemmatizer.lemmatize("tests", pos="n")
            except LookupError as exc:
                raise LookupError(
                    "WordNet corpus not installed; run `python -m nltk.downloader wordnet`"
                ) from exc
            self._lemmatizer = lemmatizer
        return self._lemmatizer

    def lemmatize_as(self, part_of_speech: str, token: str) -> Optional[str]:
        pos = _WORDNET_POS.get(part_of_speech)
        if pos is None or not token:
            return None
        return self._load().lemmatize(token, pos=pos) or None


def default_lemmatizer() -> Lemmatizer:
    """Return a fresh instance of the analyzer used when none is injected."""

    return LemmInflectLemmatizer()
