"""
Filter engine for the compound tree.

Decides which members and child compounds of each node survive into the
rendered output and in which order, and stores the result on
``node.filtered``. Categories (member sections, compound kinds) are kept in
the order given by the caller; unknown categories are dropped.
"""

import logging
from typing import Any, Dict, List, Optional

from compound.config import NAMESPACE_KIND
from compound.models import FilteredView
from compound.traversal import collect_by_kind

logger = logging.getLogger(__name__)


def _has_content(item: Any) -> bool:
    view = getattr(item, "filtered", None)
    return view is not None and not view.is_empty()


def filter_collection(
    collection: Any,
    key: str,
    category_order: List[str],
    groupid: Optional[str] = None,
) -> List[Any]:
    """Bucket ``collection`` by category and rebuild it in ``category_order``.

    Args:
        collection: Members (sequence) or child compounds (mapping or sequence).
        key: Attribute used as the category, ``section`` or ``kind``.
        category_order: Categories to keep, in output order.
        groupid: When set, only items declared under this group are kept.

    Returns:
        A new list of surviving items. ``collection`` is left untouched.
    """
    items = collection.values() if isinstance(collection, dict) else collection
    categories: Dict[Any, List[Any]] = {}

    for item in items:
        if item is None:
            continue

        # namespaces with nothing left to show
        if getattr(item, "kind", None) == NAMESPACE_KIND and not _has_content(item):
            logger.debug("Skip empty namespace: %s", getattr(item, "name", ""))
            continue

        if groupid is not None and getattr(item, "groupid", None) != groupid:
            logger.debug(
                "Skip item from foreign group: %s (groupid=%s, expected=%s)",
                getattr(item, "name", ""),
                getattr(item, "groupid", None),
                groupid,
            )
            continue

        categories.setdefault(getattr(item, key, None), []).append(item)

    result: List[Any] = []
    for category in category_order:
        result.extend(categories.get(category, ()))
    return result


def _assign_view(node: Any, filters: Any, groupid: Optional[str]) -> None:
    node.filtered = FilteredView(
        members=filter_collection(node.members, "section", filters.members, groupid),
        compounds=filter_collection(node.compounds, "kind", filters.compounds, groupid),
    )


def filter_children(node: Any, filters: Any, groupid: Optional[str] = None) -> None:
    """Recompute ``filtered`` for ``node`` and every compound below it.

    Descendants are visited in reverse pre-order, so each compound is
    filtered only after all of its own descendants. The empty-namespace rule
    therefore always sees the view computed by this same pass.

    Args:
        node: Root of the subtree to filter.
        filters: Object with ``members`` and ``compounds`` category orders.
        groupid: Restrict survivors to items declared under this group.
    """
    descendants = collect_by_kind(node, "compounds")
    for compound in reversed(descendants):
        _assign_view(compound, filters, groupid)
    _assign_view(node, filters, groupid)

    logger.debug(
        "Filtered %d compounds under %s (groupid=%s)",
        len(descendants) + 1,
        getattr(node, "name", "") or getattr(node, "id", ""),
        groupid,
    )
