"""Conversion of raw Qdrant scores into similarities in [0, 1].

Qdrant reports a similarity for Cosine and Dot collections (higher is
closer) and a distance for Euclid and Manhattan collections (lower is
closer). Callers always see a similarity.
"""

from qdrant_client.models import Distance

SIMILARITY_METRICS = frozenset({Distance.COSINE, Distance.DOT})


def clamp_unit(value: float) -> float:
    """Clamp a value to [0, 1]."""
    return min(1.0, max(0.0, value))


def similarity_from_distance(distance: float) -> float:
    """Derive a similarity as ``1 - distance``, bounded to [0, 1]."""
    return clamp_unit(1.0 - distance)


def normalize_score(raw_score: float | None, metric: Distance) -> float:
    """Turn a raw Qdrant score into a similarity in [0, 1].

    Args:
        raw_score: Score reported by Qdrant (may be missing).
        metric: Distance metric of the collection.

    Returns:
        Similarity in [0, 1].
    """
    if raw_score is None:
        return 0.0
    if metric in SIMILARITY_METRICS:
        return clamp_unit(raw_score)
    return similarity_from_distance(raw_score)
