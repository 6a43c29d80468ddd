#!/usr/bin/env python3
"""
Doxygen XML to Markdown converter.

Reads the XML output of Doxygen (``GENERATE_XML = YES``) and writes Markdown
API documentation: one file, one file per group, or one file per namespace,
optionally with one file per page.

Usage:
    python run_pipeline.py ./doxygen/xml
    python run_pipeline.py -g -o docs/api_%s.md ./doxygen/xml
    python run_pipeline.py -c -p -a --config doxy2md.yml ./doxygen/xml
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from core.options import DEFAULT_LOGFILE, ConfigValidationError, load_options
from core.structured_logging import configure_structured_logging, log_level_for, set_run_id
from parsing.doxygen_xml import DoxygenParseError
from rendering.markdown import TemplateRenderError

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Flags left unset stay ``None`` so that options files and environment
    variables are not overridden.
    """
    parser = argparse.ArgumentParser(
        description="Doxygen XML to Markdown converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_pipeline.py ./doxygen/xml\n"
            "  python run_pipeline.py --groups --output docs/api_%s.md ./doxygen/xml\n"
        ),
    )

    parser.add_argument("directory", help="Doxygen XML output directory (contains index.xml).")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help='Output file; must contain "%%s" with --groups or --classes. Default: api.md (api_%%s.md when split).',
    )
    parser.add_argument("-g", "--groups", action="store_true", default=None, help="Output doxygen groups into separate files.")
    parser.add_argument("-c", "--classes", action="store_true", default=None, help="Output doxygen classes into separate files.")
    parser.add_argument("-p", "--pages", action="store_true", default=None, help="Output doxygen pages into separate files.")
    parser.add_argument("-n", "--noindex", action="store_true", default=None, help="Disable generation of the index (single file mode only).")
    parser.add_argument("-a", "--anchors", action="store_true", default=None, help="Add anchors to internal links.")
    parser.add_argument("-H", "--html-anchors", action="store_true", default=None, help="Add HTML anchors to internal links.")
    parser.add_argument("-l", "--language", default=None, help="Language of the built-in templates. Default: cpp")
    parser.add_argument("-t", "--templates", default=None, metavar="DIR", help="Directory of templates overriding the built-in ones.")
    parser.add_argument("-L", "--logfile", default=None, metavar="FILE", help="Also write logs to FILE.")
    parser.add_argument(
        "--log",
        dest="logfile",
        action="store_const",
        const=DEFAULT_LOGFILE,
        help=f"Also write logs to {DEFAULT_LOGFILE}.",
    )
    parser.add_argument("-q", "--quiet", action="store_true", default=False, help="Only log warnings and errors.")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Verbose (debug) logging.")
    parser.add_argument("--config", default=None, help="YAML or JSON options file.")
    parser.add_argument("--capture", action="store_true", default=None, help="Log the compound structure seen at each output level.")
    parser.add_argument("--report-dir", default=None, help="Write a JSON run report into this directory.")

    return parser.parse_args(argv)


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "directory": args.directory,
        "output": args.output,
        "groups": args.groups,
        "classes": args.classes,
        "pages": args.pages,
        "noindex": args.noindex,
        "anchors": args.anchors,
        "html_anchors": args.html_anchors,
        "language": args.language,
        "templates": args.templates,
        "logfile": args.logfile,
        "capture": args.capture,
    }


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the converter."""
    args = parse_args(argv)
    configure_structured_logging(level=log_level_for(args.verbose, args.quiet))
    run_id = set_run_id()

    try:
        options = load_options(args.config, _overrides(args))
        if options.logfile:
            configure_structured_logging(level=log_level_for(args.verbose, args.quiet), logfile=options.logfile)

        logger.info("Starting doxy2md run %s", run_id)

        from pipeline.orchestrator import run

        result = run(options, report_dir=args.report_dir)
        if not result.files:
            logger.warning("No Markdown files were written.")
        logger.info("Finished: %d files written.", len(result.files))

    except ConfigValidationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except DoxygenParseError as e:
        logger.error(f"Doxygen XML error: {e}")
        sys.exit(1)
    except TemplateRenderError as e:
        logger.error(f"Template error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Conversion failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
