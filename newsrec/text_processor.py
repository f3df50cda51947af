"""
Text processing utilities for content analysis.

Handles Latin and Devanagari (U+0900-U+097F) text.
"""

import re
from collections import Counter
from typing import Iterable, List

from .config import Config

ENGLISH_STOPWORDS = frozenset([
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of',
    'with', 'by', 'this', 'that', 'is', 'are', 'was', 'were', 'be', 'been',
    'have', 'has', 'had', 'do', 'does', 'did', 'will', 'would', 'could',
    'should', 'it', 'they', 'them', 'their', 'there', 'where', 'when', 'what',
    'who', 'how', 'why', 'can', 'may', 'might', 'must', 'shall', 'from', 'up',
    'out', 'down', 'off', 'over', 'under', 'again', 'further', 'then', 'once',
])

# Anything that is not an ASCII word character, whitespace or Devanagari.
# Accented Latin letters count as separators.
_PUNCTUATION_RE = re.compile(r'[^a-zA-Z0-9_\s\u0900-\u097F]')
_LETTERS_RE = re.compile(r'[a-zA-Z\u0900-\u097F]+')


def preprocess_text(text: str, min_token_length: int = Config.MIN_TOKEN_LENGTH) -> List[str]:
    """
    Clean and tokenize text for analysis.

    Args:
        text: Raw article text
        min_token_length: Shortest token kept

    Returns:
        Tokens in document order, stopwords and noise removed
    """
    tokens = _PUNCTUATION_RE.sub(' ', text.lower()).split()

    return [
        token for token in tokens
        if token not in ENGLISH_STOPWORDS
        and len(token) >= min_token_length
        and _LETTERS_RE.fullmatch(token)
    ]


def calculate_term_frequency(tokens: Iterable[str]) -> Counter:
    """Count occurrences of each term in a document."""
    return Counter(tokens)


def build_vocabulary(documents: Iterable[Iterable[str]]) -> List[str]:
    """Sorted unique terms across all documents."""
    terms = set()
    for doc in documents:
        terms.update(doc)
    return sorted(terms)
