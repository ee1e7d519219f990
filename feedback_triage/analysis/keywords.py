from collections import Counter
from typing import Iterable, List
import re

from feedback_triage.analysis.lexicons import STOP_WORDS
from feedback_triage.models.schemas import Keyword, keyword_list

WORD_PATTERN = re.compile(r"\b[a-z]{3,}\b")
MAX_KEYWORDS = 10


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> List[Keyword]:
    """
    Rank the significant words of a feedback text by frequency.

    Only runs of three or more letters count as words; stop words are dropped.
    Words with equal counts keep the order in which they first appear.

    Args:
        text: Raw feedback text
        limit: Maximum number of keywords to return

    Returns:
        Keywords sorted by descending count
    """
    words = WORD_PATTERN.findall((text or "").lower())
    frequencies = Counter(word for word in words if word not in STOP_WORDS)

    ranked = sorted(frequencies.items(), key=lambda item: item[1], reverse=True)
    return [Keyword(word=word, count=count) for word, count in ranked[:limit]]


def keyword_words(keywords: Iterable) -> List[str]:
    """Plain words of a keyword list holding strings, mappings or Keyword objects."""
    return keyword_list(keywords)
