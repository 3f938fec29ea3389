"""Pair route facts with the documentation comment that precedes them."""

from bisect import bisect_left

from route_docgen.extractor.base import DocFact, RouteFact


def merge_facts(routes: list[RouteFact], docs: list[DocFact]) -> list[tuple[RouteFact, DocFact | None]]:
    """Pair every route with its nearest strictly-preceding doc comment.

    The chosen comment is the one with the largest end position that is
    still less than the route's start position. Nothing stops two routes
    from picking the same comment when no other doc comment sits between
    them; callers get whatever the proximity rule yields.
    """
    ordered = sorted(docs, key=lambda d: d.comment_end_position)
    ends = [d.comment_end_position for d in ordered]

    pairs = []
    for route in routes:
        index = bisect_left(ends, route.source_position)
        pairs.append((route, ordered[index - 1] if index > 0 else None))
    return pairs
