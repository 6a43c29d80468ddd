"""
Structure capture for template authors.

Records which compound kinds, and which attributes they expose, reach each
level of the output when running in the different modes. Enabled with
``--capture``; the result is logged and added to the run report.
"""

import logging
from typing import Any, Dict, List, Set

logger = logging.getLogger(__name__)

# Output levels, by mode
LEVEL_SINGLE = 0
LEVEL_NAMESPACE = 1
LEVEL_NAMESPACE_CHILD = 2
LEVEL_GROUP = 3
LEVEL_PAGE = 4

LEVEL_NAMES = {
    LEVEL_SINGLE: "single",
    LEVEL_NAMESPACE: "namespace",
    LEVEL_NAMESPACE_CHILD: "namespace-child",
    LEVEL_GROUP: "group",
    LEVEL_PAGE: "page",
}


def _attribute_names(compound: Any) -> List[str]:
    names = {name for name in vars(compound) if not name.startswith("_")}
    names.add("parent")
    return sorted(names)


class StructureCapture:
    """Accumulates kinds and attribute names per output level."""

    def __init__(self) -> None:
        self._kinds: Dict[int, Set[str]] = {}
        self._attributes: Dict[int, Set[str]] = {}

    def record(self, level: int, compound: Any) -> None:
        self._kinds.setdefault(level, set()).add(compound.kind)
        self._attributes.setdefault(level, set()).update(_attribute_names(compound))

    def record_all(self, level: int, compounds: List[Any]) -> None:
        for compound in compounds:
            self.record(level, compound)

    def report(self) -> Dict[str, Dict[str, List[str]]]:
        return {
            LEVEL_NAMES[level]: {
                "kinds": sorted(self._kinds[level]),
                "attributes": sorted(self._attributes.get(level, ())),
            }
            for level in sorted(self._kinds)
        }

    def log_summary(self) -> None:
        for name, entry in self.report().items():
            logger.info("Level %s kinds: %s", name, ", ".join(entry["kinds"]))
            logger.info("Level %s attributes: %s", name, ", ".join(entry["attributes"]))
