"""Fuzzy string matching for tag search and duplicate avoidance.

Pure functions with no I/O. Scores are built from the Levenshtein edit
distance between lowercased, trimmed names.
"""

from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

EXACT_MATCH_SCORE = 1000.0
PREFIX_MATCH_SCORE = 500.0
SUBSTRING_MATCH_SCORE = 250.0
FUZZY_MATCH_WEIGHT = 100.0

# Items must score strictly above this to be returned by rank_by_relevance
RELEVANCE_THRESHOLD = 60.0


def normalize(value: str) -> str:
    """Lowercase and trim a string for comparison."""
    return value.lower().strip()


def levenshtein_distance(a: str, b: str) -> int:
    """Compute the edit distance between two strings.

    Counts the minimum number of single code point insertions, deletions
    and substitutions needed to turn ``a`` into ``b``. Comparison is case
    sensitive.

    Args:
        a: First string
        b: Second string

    Returns:
        Non-negative edit distance
    """
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j - 1] + cost,  # substitution
                    current[j - 1] + 1,  # insertion
                    previous[j] + 1,  # deletion
                )
            )
        previous = current

    return previous[-1]


def similarity_score(a: str, b: str) -> float:
    """Similarity between two strings in [0, 1], 1 being identical.

    Args:
        a: First string
        b: Second string

    Returns:
        ``1 - distance / len(longer)``, or 1.0 when both strings are empty
    """
    longer, shorter = (a, b) if len(a) > len(b) else (b, a)
    if not longer:
        return 1.0

    distance = levenshtein_distance(longer, shorter)
    return (len(longer) - distance) / len(longer)


def fuzzy_match(query: str, target: str, threshold: float = 0.6) -> bool:
    """Check whether ``target`` loosely matches ``query``.

    Args:
        query: Search query
        target: String to match against
        threshold: Minimum similarity for a fuzzy match

    Returns:
        True on an exact match, a substring match, or similarity >= threshold
    """
    normalized_query = normalize(query)
    normalized_target = normalize(target)

    if normalized_target == normalized_query:
        return True
    if normalized_query and normalized_query in normalized_target:
        return True
    return similarity_score(normalized_query, normalized_target) >= threshold


def relevance_score(query: str, name: str) -> float:
    """Score how relevant ``name`` is to ``query``.

    Exact matches score 1000, prefix matches 500 and substring matches 250.
    Anything else scores its similarity times 100.

    Args:
        query: Search query
        name: Candidate name

    Returns:
        Relevance score; 0.0 for an empty query
    """
    normalized_query = normalize(query)
    normalized_name = normalize(name)

    if not normalized_query:
        return 0.0
    if normalized_name == normalized_query:
        return EXACT_MATCH_SCORE
    if normalized_name.startswith(normalized_query):
        return PREFIX_MATCH_SCORE
    if normalized_query in normalized_name:
        return SUBSTRING_MATCH_SCORE
    return similarity_score(normalized_query, normalized_name) * FUZZY_MATCH_WEIGHT


def rank_by_relevance(
    query: str, items: Sequence[T], name_of: Callable[[T], str]
) -> list[T]:
    """Order items by relevance to a query, dropping weak matches.

    Items scoring at or below the threshold are discarded. The sort is
    stable, so items with equal scores keep their input order.

    Args:
        query: Search query
        items: Candidates to rank
        name_of: Extracts the comparison name from an item

    Returns:
        Relevant items, most relevant first
    """
    if not normalize(query):
        return []

    scored = [(relevance_score(query, name_of(item)), item) for item in items]
    relevant = [pair for pair in scored if pair[0] > RELEVANCE_THRESHOLD]
    relevant.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in relevant]
