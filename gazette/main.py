"""Command-line entry point: decompose scanned gazette pages and map them onto a form.

    python -m gazette.main page-1.png page-2.png --form decree

Runs extraction, mapping and validation in one session and prints the session
status and the fields that still need review as JSON.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from gazette import dependencies
from gazette.app_logging import configure_logging
from gazette.application.commands.create_session import CreateSessionCommand
from gazette.application.commands.run_extraction import RunExtractionCommand
from gazette.application.commands.run_mapping import RunMappingCommand
from gazette.application.commands.run_validation import RunValidationCommand
from gazette.application.queries.get_session_status import GetSessionStatusQuery
from gazette.application.queries.list_low_confidence_fields import ListLowConfidenceFieldsQuery
from gazette.domain.exceptions import DomainException
from gazette.domain.value_objects.form_schema import FormType
from gazette.infrastructure.imaging.raster import load_raster


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gazette", description=__doc__.splitlines()[0])
    parser.add_argument("pages", nargs="+", help="Page images of one document, in page order")
    parser.add_argument(
        "--form",
        default=FormType.DECREE.value,
        help=f"Target form type ({', '.join(item.value for item in FormType)})",
    )
    parser.add_argument("--name", help="Document name recorded on the session (defaults to the first page path)")
    parser.add_argument("--output", help="Write the JSON report to this file instead of stdout")
    parser.add_argument("--plain-logs", action="store_true", help="Human-readable logs instead of JSON lines")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(structured=not args.plain_logs)

    try:
        rasters = [load_raster(path) for path in args.pages]
        created = dependencies.get_create_session_handler().handle(
            CreateSessionCommand(args.name or args.pages[0])
        )
        session_id = created["session_id"]
        dependencies.get_run_extraction_handler().handle(RunExtractionCommand(session_id, rasters))
        dependencies.get_run_mapping_handler().handle(RunMappingCommand(session_id, args.form))
        validation = dependencies.get_run_validation_handler().handle(RunValidationCommand(session_id))
    except DomainException as exc:
        print(f"gazette: {exc}", file=sys.stderr)
        return 1

    status = dependencies.get_session_status_handler().handle(GetSessionStatusQuery(session_id))
    review: List[dict] = [
        item.to_dict()
        for item in dependencies.get_list_low_confidence_fields_handler().handle(
            ListLowConfidenceFieldsQuery(limit=None, session_id=session_id)
        )
    ]
    report = json.dumps(
        {"status": status.to_dict(), "validation": validation, "needs_review": review},
        ensure_ascii=False,
        indent=2,
    )
    if args.output:
        Path(args.output).write_text(report + "\n", encoding="utf-8")
    else:
        print(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
