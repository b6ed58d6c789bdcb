from __future__ import annotations

import json
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

import structlog
import yaml

from .errors import InvalidSectionError, MissingSectionError, RuleCompileError, RuleSourceError
from .models import Channel, PatternRule, RuleSet

logger = structlog.get_logger(__name__)

RuleSource = Union[str, Path, Mapping[str, Any]]

DEFAULT_RULES_TOML = """\
# Rules are tried in the order written; the first pattern that matches wins.
# If a pattern has a capturing group, group 1 is the extracted value.
# An empty section passes its input through unchanged (whitespace-trimmed).

[sn_rules]

[paper_rules]
"""


def load(source: RuleSource, *, create_missing: bool = False) -> RuleSet:
    """Build a RuleSet from a parsed rules document or a rules file path.

    Fails as a whole: either both channels compile, or an error is raised.
    """
    if isinstance(source, Mapping):
        return load_document(source)
    return load_path(Path(source), create_missing=create_missing)


def load_document(document: Mapping[str, Any]) -> RuleSet:
    identifier = _compile_section(document, Channel.IDENTIFIER)
    reference = _compile_section(document, Channel.REFERENCE)
    logger.bind(service="contrast").debug(
        "rules_loaded",
        identifier_rules=len(identifier),
        reference_rules=len(reference),
    )
    return RuleSet(identifier=identifier, reference=reference)


def load_path(path: Path, *, create_missing: bool = False) -> RuleSet:
    if not path.exists():
        if not create_missing:
            raise RuleSourceError(str(path), "file not found")
        write_default_rules(path)
        logger.bind(service="contrast").info("default_rules_created", path=str(path))
    return load_document(read_document(path))


def read_document(path: Path) -> Mapping[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuleSourceError(str(path), str(exc)) from exc

    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            document = yaml.safe_load(text)
        elif suffix == ".json":
            document = json.loads(text)
        else:
            document = tomllib.loads(text)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as exc:
        raise RuleSourceError(str(path), f"parse error: {exc}") from exc

    if document is None:
        document = {}
    if not isinstance(document, Mapping):
        raise RuleSourceError(str(path), "top level must be a table of sections")
    return document


def write_default_rules(path: Path) -> None:
    """Write an empty-but-valid rules document in the format implied by the suffix."""
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        text = yaml.safe_dump({Channel.IDENTIFIER.section: {}, Channel.REFERENCE.section: {}})
    elif suffix == ".json":
        text = json.dumps({Channel.IDENTIFIER.section: {}, Channel.REFERENCE.section: {}}, indent=2)
    else:
        text = DEFAULT_RULES_TOML
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _compile_section(document: Mapping[str, Any], channel: Channel) -> tuple[PatternRule, ...]:
    if channel.section not in document:
        raise MissingSectionError(channel)
    section = document[channel.section]
    # YAML renders an empty section as null.
    if section is None:
        return ()
    if not isinstance(section, Mapping):
        raise InvalidSectionError(channel, section)

    rules: list[PatternRule] = []
    for position, (label, raw_pattern) in enumerate(section.items()):
        if not isinstance(raw_pattern, str):
            raise RuleCompileError(channel, raw_pattern, "pattern must be a string", label=str(label))
        try:
            compiled = re.compile(raw_pattern)
        except re.error as exc:
            raise RuleCompileError(channel, raw_pattern, str(exc), label=str(label)) from exc
        rules.append(PatternRule(channel=channel, position=position, label=str(label), pattern=compiled))
    return tuple(rules)
