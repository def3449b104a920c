"""Parse gherkin feature files into Feature / Scenario records.

The grammar itself belongs to gherkin-official; this module only flattens
its AST: backgrounds are prepended, rules are inlined and scenario outlines
are expanded one scenario per example row.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gherkin.parser import Parser
from gherkin.token_matcher import TokenMatcher
from gherkin.token_scanner import TokenScanner

from featurebridge.types import Feature, Scenario

if TYPE_CHECKING:
    from featurebridge.localisation import Language

PLACEHOLDER_RE = re.compile(r"<([^<>]+)>")


def parse_annotations(tags: list[dict[str, Any]]) -> dict[str, Any]:
    """``@only`` -> {"only": True}; ``@owner=bob`` -> {"owner": "bob"}."""
    annotations: dict[str, Any] = {}
    for tag in tags:
        name = tag["name"].lstrip("@")
        key, sep, value = name.partition("=")
        annotations[key] = value if sep else True
    return annotations


def _step_text(step: dict[str, Any]) -> str:
    lines = [step["keyword"] + step["text"]]
    doc_string = step.get("docString")
    if doc_string:
        lines.append(doc_string["content"])
    data_table = step.get("dataTable")
    if data_table:
        for row in data_table["rows"]:
            lines.append("| " + " | ".join(c["value"] for c in row["cells"]) + " |")
    return "\n".join(lines)


def _substitute(text: str, values: dict[str, str]) -> str:
    return PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), text)


def _expand_scenario(
    raw: dict[str, Any],
    background: list[str],
    inherited: dict[str, Any],
) -> list[Scenario]:
    annotations = {**inherited, **parse_annotations(raw.get("tags", []))}
    steps = background + [_step_text(s) for s in raw.get("steps", [])]
    examples = raw.get("examples") or []
    if not examples:
        return [Scenario(title=raw["name"], annotations=annotations, steps=steps)]

    scenarios: list[Scenario] = []
    for block in examples:
        header = block.get("tableHeader")
        if not header:
            continue
        keys = [c["value"] for c in header["cells"]]
        block_annotations = {**annotations, **parse_annotations(block.get("tags", []))}
        for row in block.get("tableBody", []):
            values = dict(zip(keys, (c["value"] for c in row["cells"]), strict=False))
            title = _substitute(raw["name"], values)
            if title == raw["name"]:
                title = f'{raw["name"]} ({", ".join(values.values())})'
            scenarios.append(Scenario(
                title=title,
                annotations=dict(block_annotations),
                steps=[_substitute(s, values) for s in steps],
            ))
    return scenarios


def _collect_scenarios(
    children: list[dict[str, Any]],
    background: list[str],
    inherited: dict[str, Any],
) -> list[Scenario]:
    scenarios: list[Scenario] = []
    for child in children:
        if "background" in child:
            background = background + [_step_text(s) for s in child["background"].get("steps", [])]
        elif "scenario" in child:
            scenarios.extend(_expand_scenario(child["scenario"], background, inherited))
        elif "rule" in child:
            rule = child["rule"]
            rule_annotations = {**inherited, **parse_annotations(rule.get("tags", []))}
            scenarios.extend(_collect_scenarios(rule.get("children", []), background, rule_annotations))
    return scenarios


def parse_feature_text(content: str, language: Language, path: Path | None = None) -> list[Feature]:
    """Parse one document. Malformed input raises gherkin's parser errors."""
    document = Parser().parse(TokenScanner(content), TokenMatcher(language.dialect))
    raw = document.get("feature")
    if not raw:
        return []
    return [Feature(
        title=raw["name"],
        annotations=parse_annotations(raw.get("tags", [])),
        scenarios=_collect_scenarios(raw.get("children", []), [], {}),
        description=(raw.get("description") or "").strip(),
        path=path,
    )]


def parse_feature_file(path: str | Path, language: Language) -> list[Feature]:
    feature_path = Path(path)
    return parse_feature_text(feature_path.read_text(encoding="utf-8"), language, feature_path)
