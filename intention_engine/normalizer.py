"""Text normalization for intention similarity."""

from __future__ import annotations

import re
from typing import Optional

from intention_engine.lemmatizers import PARTS_OF_SPEECH, Lemmatizer, default_lemmatizer

# English + Italian function words and filler verbs ("want", "voglio", ...).
STOPWORDS = frozenset(
    {
        "a", "about", "ad", "after", "again", "agli", "ai", "al", "all", "alla", "alle", "allo",
        "am", "an", "ancora", "and", "another", "any", "are", "as", "at",
        "be", "been", "being", "but",
        "che", "ci", "could",
        "da", "dal", "dalla", "dallo", "dei", "degli", "delle", "deve", "devi", "devo", "devono",
        "di", "did", "do", "dobbiamo", "does", "doing", "done", "dovete",
        "e", "ed",
        "for", "from",
        "gli", "go", "going", "gone", "got",
        "had", "has", "have", "having", "how",
        "i", "il", "in", "into", "is", "it", "its",
        "la", "le", "lo",
        "mi",
        "need", "needed", "needs", "no", "non", "not", "now",
        "o", "of", "off", "on", "once", "only", "or", "other", "our", "ours", "out", "over",
        "per", "posso", "puo", "puoi",
        "should", "si", "so", "some", "sta", "stai", "stanno", "state", "stiamo", "still", "sto", "su",
        "than", "that", "the", "their", "theirs", "them", "then", "there", "these", "they",
        "this", "those", "ti", "to",
        "un", "una", "uno", "us",
        "vi", "voglio", "vorrei",
        "wanna", "want", "wanted", "wants", "we", "what", "when", "where", "which", "while",
        "who", "whom", "why", "will", "with", "without", "would",
        "you", "your", "yours",
    }
)

# Anything that is not a Unicode letter, digit or whitespace.
_NON_WORD = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """Lowercase, strip punctuation/symbols and collapse whitespace."""

    if not text:
        return ""
    stripped = _NON_WORD.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", stripped).strip()


def tokenize(text: str) -> list[str]:
    """Split cleaned text into tokens, dropping stopwords."""

    cleaned = clean_text(text)
    if not cleaned:
        return []
    return [token for token in cleaned.split(" ") if token and token not in STOPWORDS]


def lemmatize_token(token: str, lemmatizer: Lemmatizer) -> str:
    """Reduce a token to its shortest lemma across verb, noun and adjective readings."""

    base = token.lower()
    best = base
    for part_of_speech in PARTS_OF_SPEECH:
        candidate = lemmatizer.lemmatize_as(part_of_speech, base)
        if candidate and len(candidate) < len(best):
            best = candidate
    return best


def normalize_for_similarity(text: str, lemmatizer: Optional[Lemmatizer] = None) -> list[str]:
    """Run the full pipeline: clean, tokenize, drop stopwords, lemmatize.

    Empty or punctuation-only input yields an empty list.
    """

    tokens = tokenize(text)
    if not tokens:
        return []
    lemmatizer = lemmatizer if lemmatizer is not None else default_lemmatizer()
    return [lemmatize_token(token, lemmatizer) for token in tokens]
