# SPDX-License-Identifier: Apache-2.0
"""syscontracts CLI entrypoint.

Commands:

- check: structural + cross-reference validation of bundles/documents
- check-doc: validate one document against already known documents
- validate: structural validation of documents of any contract kind

Exit codes: 0 valid, 1 defects found, 2 documents could not be loaded.
"""

from __future__ import annotations

import argparse
import json
import os
import sys

from syscontracts import __version__
from syscontracts.check import CheckReport, run_checks, structural_issues
from syscontracts.loader import DocumentLoadError, collect_bundles, load_document
from syscontracts.refs import (
    CrossValidationResult,
    DocumentKind,
    EntityRegistry,
    register_documents,
    validate_document_refs,
)
from syscontracts.schemas import ContractValidator, DocumentSet
from syscontracts.utils.env import env_bool


def _print_references(result: CrossValidationResult) -> None:
    for err in result.errors:
        print(
            f"error: {err.type} {err.source_schema}:{err.source_id} "
            f"{err.field} -> {err.target_schema}:{err.target_id}: {err.message}"
        )
    for warn in result.warnings:
        print(f"warning: {warn.type}: {warn.message}")


def _print_report(report: CheckReport) -> None:
    for issue in report.structural:
        label = f"{issue.kind}[{issue.index}]"
        if issue.document_id:
            label += f" ({issue.document_id})"
        for err in issue.errors:
            print(f"structural: {label} {err.path}: {err.message}")
    if report.references is not None:
        _print_references(report.references)


def _exit_code(ok: bool, warnings: int, strict: bool) -> int:
    if not ok:
        return 1
    if strict and warnings:
        return 1
    return 0


def _summary(name: str, code: int, errors: int, warnings: int) -> str:
    status = "PASSED" if code == 0 else "FAILED"
    return f"{name}: {status} - {errors} error(s), {warnings} warning(s)"


def _cmd_check(ns: argparse.Namespace) -> int:
    """Run the structural and reference passes over the given files."""
    try:
        bundle = collect_bundles(ns.paths)
    except DocumentLoadError as exc:
        print(f"check: {exc}", file=sys.stderr)
        return 2
    report = run_checks(bundle)
    strict = ns.strict or env_bool("STRICT", False)
    code = _exit_code(report.ok, report.warning_count, strict)
    if ns.json:
        print(json.dumps(report.to_dict(), indent=2))
        return code
    _print_report(report)
    errors = sum(len(s.errors) for s in report.structural)
    if report.references is not None:
        errors += len(report.references.errors)
    print(_summary("check", code, errors, report.warning_count))
    return code


def _cmd_check_doc(ns: argparse.Namespace) -> int:
    """Validate one document against the documents given with --against."""
    kind = DocumentKind(ns.kind)
    try:
        known = collect_bundles(ns.against or [])
        doc = load_document(ns.document)
    except DocumentLoadError as exc:
        print(f"check-doc: {exc}", file=sys.stderr)
        return 2

    shape = ContractValidator().validate(kind.value, doc)
    if not shape.valid:
        for err in shape.errors:
            print(f"structural: {kind.value} {err.path}: {err.message}")
        print(_summary("check-doc", 1, len(shape.errors), 0))
        return 1

    known_issues = structural_issues(known)
    if known_issues:
        _print_report(CheckReport(structural=known_issues))
        print("check-doc: FAILED - --against documents are structurally invalid")
        return 1

    registry = EntityRegistry()
    register_documents(registry, DocumentSet.model_validate(known))
    result = validate_document_refs(registry, kind, doc)
    strict = ns.strict or env_bool("STRICT", False)
    code = _exit_code(result.valid, len(result.warnings), strict)
    if ns.json:
        print(result.model_dump_json(indent=2))
        return code
    _print_references(result)
    print(_summary("check-doc", code, len(result.errors), len(result.warnings)))
    return code


def _cmd_validate(ns: argparse.Namespace) -> int:
    """Check the shape of each document against the contract for --kind."""
    validator = ContractValidator()
    results = {}
    try:
        for path in ns.documents:
            results[path] = validator.validate(ns.kind, load_document(path))
    except DocumentLoadError as exc:
        print(f"validate: {exc}", file=sys.stderr)
        return 2
    errors = sum(len(res.errors) for res in results.values())
    code = 1 if errors else 0
    if ns.json:
        payload = {
            path: {"valid": res.valid, "errors": [e.to_dict() for e in res.errors]}
            for path, res in results.items()
        }
        print(json.dumps(payload, indent=2))
        return code
    for path, res in results.items():
        for err in res.errors:
            print(f"structural: {path} {err.path}: {err.message}")
    print(_summary("validate", code, errors, 0))
    return code


def _add_output_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--json", action="store_true", help="Emit a JSON report")
    p.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures (env: SYSCONTRACTS_STRICT)",
    )


def register_cli(subparsers: argparse._SubParsersAction) -> None:
    """Register validation commands on a subparsers action."""
    p = subparsers.add_parser(
        "check",
        help="Validate document shapes and cross-document references",
        description=(
            "Each path is either a bundle (a mapping with envelopes/plans/receipts "
            "lists) or a single envelope, plan or receipt document. All paths are "
            "checked together as one document set."
        ),
    )
    p.add_argument("paths", nargs="+", help="JSON or YAML bundle/document files")
    _add_output_flags(p)
    p.set_defaults(func=_cmd_check)

    pd = subparsers.add_parser(
        "check-doc",
        help="Validate one document against already known documents",
    )
    pd.add_argument(
        "--kind",
        required=True,
        choices=[k.value for k in DocumentKind],
        help="Kind of the document being checked",
    )
    pd.add_argument(
        "--against",
        action="append",
        metavar="PATH",
        help="Bundle/document file with known documents (repeatable)",
    )
    pd.add_argument("document", help="JSON or YAML document to check")
    _add_output_flags(pd)
    pd.set_defaults(func=_cmd_check_doc)

    pv = subparsers.add_parser(
        "validate",
        help="Validate document shapes for one contract kind",
    )
    pv.add_argument(
        "--kind",
        required=True,
        choices=ContractValidator().kinds,
        help="Contract kind of every document",
    )
    pv.add_argument("documents", nargs="+", help="JSON or YAML documents to check")
    pv.add_argument("--json", action="store_true", help="Emit a JSON report")
    pv.set_defaults(func=_cmd_validate)


def main(argv: list[str] | None = None) -> int:
    args_list = argv if argv is not None else sys.argv[1:]
    if any(a in {"--version", "-V"} for a in args_list):
        print(f"syscontracts {__version__}")
        return 0
    parser = argparse.ArgumentParser(prog="syscontracts")
    vgrp = parser.add_mutually_exclusive_group()
    vgrp.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (sets SYSCONTRACTS_VERBOSITY=debug)",
    )
    vgrp.add_argument(
        "--quiet",
        action="store_true",
        help="Quiet output (sets SYSCONTRACTS_VERBOSITY=quiet)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)
    register_cli(sub)

    args = parser.parse_args(args_list)
    if args.verbose:
        os.environ["SYSCONTRACTS_VERBOSITY"] = "debug"
    elif args.quiet:
        os.environ["SYSCONTRACTS_VERBOSITY"] = "quiet"
    else:
        os.environ.setdefault("SYSCONTRACTS_VERBOSITY", "info")
    from syscontracts.utils.cli_helpers import configure_logging_from_env

    configure_logging_from_env(default=os.environ.get("SYSCONTRACTS_VERBOSITY", "info"))
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
