from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


_ensure_backend_on_path()

import structlog  # noqa: E402
import yaml  # noqa: E402

from common.contrast_engine import Channel, RuleSet, RuleSetError, load  # noqa: E402
from pipelines.config import NOTIFIER_KINDS, get_contrast_config  # noqa: E402
from pipelines.contrast_service import ContrastService, build_contrast_service  # noqa: E402

RELOAD_COMMAND = ":reload"
QUIT_COMMAND = ":quit"


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # sys.stderr is looked up per logger, not once at configure time.
    return structlog.PrintLogger(sys.stderr)


def setup_logging(verbose: bool = False, log_format: str = "console") -> None:
    """Configure structured logging for diagnostics (the audit trail is separate)."""
    log_level = "DEBUG" if verbose else "WARNING"
    renderer = structlog.processors.JSONRenderer() if log_format == "json" else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level)),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def describe_rules(ruleset: RuleSet) -> dict[str, Any]:
    described: dict[str, Any] = {}
    for channel in Channel:
        described[channel.section] = [
            {"position": rule.position, "label": rule.label, "pattern": rule.text}
            for rule in ruleset.rules_for(channel)
        ]
    return described


def _dump(data: dict[str, Any], fmt: str) -> str:
    if fmt == "json":
        return json.dumps(data, indent=2)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def run_interactive(service: ContrastService, stdin: TextIO, stdout: TextIO) -> int:
    """Read serial/label pairs line by line until EOF or ``:quit``."""
    pending_sn: str | None = None
    for raw_line in stdin:
        line = raw_line.rstrip("\r\n")
        command = line.strip()
        if command == QUIT_COMMAND:
            break
        if command == RELOAD_COMMAND:
            try:
                ruleset = service.reload_rules()
            except RuleSetError as exc:
                print(f"Error: {exc}", file=stdout)
                continue
            print(
                f"Reloaded rules: {len(ruleset.identifier)} serial, {len(ruleset.reference)} label.",
                file=stdout,
            )
            continue
        if pending_sn is None:
            pending_sn = line
            continue
        try:
            message = service.contrast_message(pending_sn, line)
        except RuleSetError as exc:
            message = f"Error: {exc}"
        print(message, file=stdout)
        pending_sn = None
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract identifiers from a scanned serial and a paper label and check that they match."
    )
    parser.add_argument("--rules", default=None, help="Rules file (.toml, .yaml, .json). Default: CONTRAST_RULES_PATH.")
    parser.add_argument("--sn", default=None, help="Scanned serial number text.")
    parser.add_argument("--paper", default=None, help="Paper label text.")
    parser.add_argument(
        "--interactive",
        action="store_true",
        help=f"Read serial/label line pairs from stdin ({RELOAD_COMMAND} reloads rules, {QUIT_COMMAND} exits).",
    )
    parser.add_argument("--check", action="store_true", help="Load the rules, print them and exit.")
    parser.add_argument("--format", choices=("yaml", "json"), default="yaml", help="Output format for --check.")
    parser.add_argument("--notifier", choices=NOTIFIER_KINDS, default=None, help="Override CONTRAST_NOTIFIER.")
    parser.add_argument("--log-path", default=None, help="Override CONTRAST_LOG_PATH.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    parser.add_argument("--log-format", choices=("console", "json"), default="console")
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, log_format=args.log_format)

    try:
        config = get_contrast_config()
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    overrides: dict[str, Any] = {}
    if args.rules:
        overrides["rules_path"] = Path(args.rules)
    if args.notifier:
        overrides["notifier"] = args.notifier
    if args.log_path:
        overrides["log_path"] = Path(args.log_path)
    if overrides:
        config = dataclasses.replace(config, **overrides)

    if args.check:
        try:
            ruleset = load(config.rules_path, create_missing=config.create_missing_rules)
        except RuleSetError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 2
        print(_dump(describe_rules(ruleset), args.format))
        return 0

    if not args.interactive and (args.sn is None or args.paper is None):
        parser.error("either --interactive or both --sn and --paper are required")

    service = build_contrast_service(config)
    try:
        try:
            service.reload_rules()
        except RuleSetError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 2

        if args.interactive:
            return run_interactive(service, sys.stdin, sys.stdout)

        reply = service.run(args.sn, args.paper)
        print(reply.message)
        return 0 if reply.result.is_match else 1
    finally:
        service.close()


if __name__ == "__main__":
    raise SystemExit(main())
