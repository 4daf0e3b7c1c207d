"""Presentation helpers for search results.

All functions returning markup HTML-escape review text before adding
highlight tags.
"""

import html
import re
from urllib.parse import urljoin

from src.logging_config import get_logger
from src.vectorstore.scoring import clamp_unit

logger = get_logger(__name__)

NO_REVIEW_TEXT = "No review text available."
MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"
FALLBACK_SENTENCES = 2

_SENTENCE_END = re.compile(r"[.!?]+")


def split_sentences(text: str) -> list[str]:
    """Split text on runs of ``.``, ``!`` and ``?``, dropping empty pieces."""
    return [s.strip() for s in _SENTENCE_END.split(text) if s.strip()]


def query_tokens(query: str) -> list[str]:
    """Lower-cased whitespace-delimited tokens of a query."""
    return query.lower().split()


def _mark(sentence: str, pattern: re.Pattern[str]) -> str:
    pieces = pattern.split(sentence)
    # re.split with one capturing group alternates text / match
    return "".join(
        f"{MARK_OPEN}{html.escape(piece)}{MARK_CLOSE}" if i % 2 else html.escape(piece)
        for i, piece in enumerate(pieces)
    )


def highlight_relevant_text(text: str | None, query: str | None) -> str:
    """Excerpt the sentences of a review that mention the query.

    Sentences containing any query token (case-insensitive substring) are
    kept and every token occurrence is wrapped in ``<mark>``. When nothing
    matches, the first two sentences are returned unhighlighted.

    Args:
        text: Review body.
        query: Search query.

    Returns:
        HTML-safe excerpt.
    """
    if not text:
        return NO_REVIEW_TEXT
    if not query:
        return html.escape(text)

    try:
        sentences = split_sentences(text)
        if not sentences:
            return html.escape(text)

        tokens = query_tokens(query)
        relevant = [
            sentence
            for sentence in sentences
            if any(token in sentence.lower() for token in tokens)
        ]

        if relevant:
            # Longest first so overlapping tokens mark the widest match
            alternatives = sorted(set(tokens), key=len, reverse=True)
            pattern = re.compile(
                "(" + "|".join(re.escape(t) for t in alternatives) + ")",
                re.IGNORECASE,
            )
            return ". ".join(_mark(sentence, pattern) for sentence in relevant)

        return html.escape(". ".join(sentences[:FALLBACK_SENTENCES]) + ".")

    except Exception as e:
        logger.warning(f"Highlighting failed, returning raw text: {e}")
        return html.escape(text)


def full_review_url(review_url: str | None, base_url: str) -> str:
    """Qualify a relative review URL against the review site's origin.

    Absolute ``http(s)`` URLs pass through unchanged; a missing URL
    becomes ``"#"``.
    """
    if not review_url:
        return "#"
    if review_url.startswith("http"):
        return review_url
    return urljoin(base_url.rstrip("/") + "/", review_url.lstrip("/"))


def similarity_percent(score: float) -> float:
    """Similarity as a percentage with two decimals, bounded to [0, 100]."""
    return round(clamp_unit(score) * 100, 2)

