"""
Depth-first queries over the compound tree.

``collect_by_kind`` walks the raw containment structure, while
``collect_filtered`` walks only the views computed by the filter engine.
Both return pre-order sequences: every node comes before its descendants.
"""

from typing import Any, Iterable, List, Optional


def _entries(container: Any) -> Iterable[Any]:
    """Return the items of a child container (mapping values or a sequence)."""
    if container is None:
        return ()
    if isinstance(container, dict):
        return container.values()
    return container


def collect_by_kind(node: Any, container: str = "compounds", kind: Optional[str] = None) -> List[Any]:
    """Flatten every descendant held under ``node.<container>``.

    Every entry whose kind matches ``kind`` (or every entry when ``kind`` is
    None) is appended, followed by the results of recursing into that entry's
    container of the same name. The walk always descends fully; ``kind`` only
    controls inclusion.

    Args:
        node: Compound to start from (not itself included).
        container: Attribute holding the children, ``compounds`` or ``members``.
        kind: Optional kind to keep.

    Returns:
        Matching entries in pre-order.
    """
    result: List[Any] = []
    for entry in _entries(getattr(node, container, None)):
        if kind is None or getattr(entry, "kind", None) == kind:
            result.append(entry)
        result.extend(collect_by_kind(entry, container, kind))
    return result


def collect_filtered(node: Any, container: str = "compounds") -> List[Any]:
    """Flatten the filtered view under ``node`` in pre-order.

    Only entries that survived the last filter pass are visited. A node that
    has never been filtered contributes nothing.
    """
    view = getattr(node, "filtered", None)
    if view is None:
        return []

    result: List[Any] = []
    for entry in getattr(view, container, None) or ():
        result.append(entry)
        result.extend(collect_filtered(entry, container))
    return result
