"""
Conversion orchestrator.

Decides which compounds go into which output file for the selected mode,
then drives filtering, rendering and writing for each output unit.

Units are produced lazily: every unit re-runs the filter engine over its
subtree, and compounds can appear in more than one unit (a class listed in
two groups, for instance), so each unit must be rendered before the next one
is requested.
"""

import logging
import time
from dataclasses import dataclass
from typing import Iterator, List, Optional

from compound.config import GROUP_KIND, NAMESPACE_KIND, PAGE_KIND
from compound.models import Compound
from core.options import ConfigValidationError, NoCompoundsFoundError, Options
from core.run_artifacts import RunResult, write_run_report
from core.structured_logging import get_run_id, phase_scope
from parsing.doxygen_xml import load_index
from pipeline.capture import (
    LEVEL_GROUP,
    LEVEL_NAMESPACE,
    LEVEL_NAMESPACE_CHILD,
    LEVEL_PAGE,
    LEVEL_SINGLE,
    StructureCapture,
)
from rendering.markdown import MarkdownRenderer
from rendering.writer import write_compound

logger = logging.getLogger(__name__)


@dataclass
class OutputUnit:
    """Compounds rendered into one output file.

    Attributes:
        compound: Compound that determines the output path.
        nodes: Compounds to render, in output order.
    """

    compound: Compound
    nodes: List[Compound]


def output_mode(options: Options) -> str:
    if options.groups:
        return "groups"
    if options.classes:
        return "classes"
    return "single"


def _unique(compounds: List[Compound]) -> List[Compound]:
    # groups list compounds they do not own, so a traversal can meet them twice
    seen = set()
    result = []
    for compound in compounds:
        if compound.id not in seen:
            seen.add(compound.id)
            result.append(compound)
    return result


def _require(found: List[Compound], what: str) -> None:
    if not found:
        raise NoCompoundsFoundError(f"No {what} found in the Doxygen XML")


def iter_single_file(root: Compound, options: Options, capture: Optional[StructureCapture] = None) -> Iterator[OutputUnit]:
    root.filter_children(options.filters)
    nodes = root.collect_filtered()
    if capture is not None:
        capture.record_all(LEVEL_SINGLE, nodes)
    if not options.noindex:
        nodes = [root] + nodes
    yield OutputUnit(root, nodes)


def iter_namespaces(root: Compound, options: Options, capture: Optional[StructureCapture] = None) -> Iterator[OutputUnit]:
    namespaces = _unique(root.collect_by_kind("compounds", NAMESPACE_KIND))
    _require(namespaces, "namespaces")
    for namespace in namespaces:
        namespace.filter_children(options.filters)
        descendants = namespace.collect_filtered()
        if capture is not None:
            capture.record(LEVEL_NAMESPACE, namespace)
            capture.record_all(LEVEL_NAMESPACE_CHILD, descendants)
        yield OutputUnit(namespace, [namespace] + descendants)


def iter_groups(root: Compound, options: Options, capture: Optional[StructureCapture] = None) -> Iterator[OutputUnit]:
    groups = _unique(root.collect_by_kind("compounds", GROUP_KIND))
    _require(groups, "groups")
    for group in groups:
        group.filter_children(options.filters, group.id)
        nodes = [group] + group.collect_filtered()
        if capture is not None:
            capture.record_all(LEVEL_GROUP, nodes)
        yield OutputUnit(group, nodes)


def iter_pages(root: Compound, options: Options, capture: Optional[StructureCapture] = None) -> Iterator[OutputUnit]:
    pages = _unique(root.collect_by_kind("compounds", PAGE_KIND))
    _require(pages, "pages")
    for page in pages:
        if capture is not None:
            capture.record(LEVEL_PAGE, page)
        yield OutputUnit(page, [page])


def iter_output_units(root: Compound, options: Options, capture: Optional[StructureCapture] = None) -> Iterator[OutputUnit]:
    """Yield the output units of the selected mode, then the pages if enabled.

    Raises:
        NoCompoundsFoundError: When an enabled mode finds nothing to output.
    """
    if options.groups:
        yield from iter_groups(root, options, capture)
    elif options.classes:
        yield from iter_namespaces(root, options, capture)
    else:
        yield from iter_single_file(root, options, capture)

    if options.pages:
        yield from iter_pages(root, options, capture)


def run(options: Options, report_dir: Optional[str] = None) -> RunResult:
    """Convert the Doxygen XML in ``options.directory`` to Markdown.

    Args:
        options: Validated run options.
        report_dir: When set, a JSON run report is written there.

    Raises:
        ConfigValidationError: Invalid options or nothing to output.
        DoxygenParseError: The Doxygen index cannot be read.
        TemplateRenderError: A template is missing or fails to render.
    """
    if not options.directory:
        raise ConfigValidationError("No Doxygen XML directory given")
    options.validate()

    t0 = time.time()
    result = RunResult(mode=output_mode(options))
    capture = StructureCapture() if options.capture else None

    logger.info("Doxygen XML directory : %s", options.directory)
    logger.info("Output               : %s (%s mode)", options.output, result.mode)

    renderer = MarkdownRenderer(options)
    with phase_scope("parse"):
        parser = load_index(options.directory)
    result.files_parsed = parser.files_parsed
    result.files_failed = parser.files_failed

    units = iter_output_units(parser.root, options, capture)
    while True:
        with phase_scope("filter"):
            unit = next(units, None)
        if unit is None:
            break
        result.units += 1
        with phase_scope("render"):
            contents = renderer.render_array(unit.nodes)
        with phase_scope("write"):
            path = write_compound(unit.compound, contents, parser.references, options)
        if path is not None:
            result.files.append(path)

    result.elapsed_s = time.time() - t0
    if capture is not None:
        capture.log_summary()
        result.capture = capture.report()

    logger.info(
        "Converted %d units into %d files in %.2fs (%d compound files failed)",
        result.units,
        len(result.files),
        result.elapsed_s,
        result.files_failed,
    )

    if report_dir:
        report_path = write_run_report(result.as_report(), get_run_id(), report_dir)
        logger.info("Run report: %s", report_path)
    return result
