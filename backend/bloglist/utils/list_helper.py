"""Aggregate helpers over lists of blogs.

Accepts dicts (e.g. JSON from the API) or objects with a `likes`
attribute such as `models.Blog`.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


def _likes(blog: Any) -> int:
    if isinstance(blog, dict):
        return blog.get("likes") or 0
    return getattr(blog, "likes", 0) or 0


def total_likes(blogs: Sequence[Any]) -> int:
    """Sum of likes over `blogs`; 0 for an empty list."""
    return sum(_likes(b) for b in blogs)


def favourite_blog(blogs: Sequence[Any]) -> Optional[Any]:
    """Return the blog with the most likes, or None for an empty list.

    On a tie the earliest blog in the sequence wins.
    """
    best = None
    for blog in blogs:
        if best is None or _likes(blog) > _likes(best):
            best = blog
    return best
