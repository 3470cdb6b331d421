"""Report rendering and exit-code policy for lint runs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable, Iterable, Literal

from .diff_core import Finding, Report

OutputFormat = Literal["text", "json", "github"]
OUTPUT_FORMATS: tuple[str, ...] = ("text", "json", "github")
PROGRAM = "i18n-lint"
EXIT_OK = 0
EXIT_LINT_FAILED = 1


@dataclass(frozen=True, slots=True)
class FailurePolicy:
    """Decide whether a report fails the run.

    Missing keys always fail. Extra keys and placeholder mismatches only fail
    in strict mode or when escalated individually.
    """

    strict: bool = False
    fail_on_extra: bool = False
    fail_on_placeholder: bool = False

    def exit_code(self, report: Report) -> int:
        if self.strict:
            return EXIT_LINT_FAILED if report.has_findings else EXIT_OK
        if report.missing:
            return EXIT_LINT_FAILED
        if self.fail_on_extra and report.extra:
            return EXIT_LINT_FAILED
        if self.fail_on_placeholder and report.placeholder_mismatch:
            return EXIT_LINT_FAILED
        return EXIT_OK


def _totals_line(report: Report) -> str:
    totals = report.totals
    return (
        f"missing={totals.missing}, extra={totals.extra}, "
        f"placeholder_mismatch={totals.placeholder_mismatch}"
    )


def render_text(report: Report) -> str:
    lines = [f"{PROGRAM}: base={report.base}, langs={', '.join(report.langs)}"]
    if not report.has_findings:
        lines.append("ok: no issues found")
        return "\n".join(lines)

    sections = (
        ("missing keys", report.missing),
        ("extra keys", report.extra),
        ("placeholder mismatches", report.placeholder_mismatch),
    )
    for title, findings in sections:
        if not findings:
            continue
        lines.append("")
        lines.append(f"{title}: {len(findings)}")
        lines.extend(f"  [{f.lang}] {f.key} -> {f.file}" for f in findings)

    lines.append("")
    lines.append(f"summary: {_totals_line(report)}")
    return "\n".join(lines)


def render_json(report: Report) -> str:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def github_annotation(finding: Finding) -> str:
    message = finding.message.replace("\r", " ").replace("\n", " ")
    return f"::error file={finding.file},line=1,col=1::{message}"


def _annotations(groups: Iterable[Iterable[Finding]]) -> list[str]:
    return [github_annotation(finding) for group in groups for finding in group]


def render_github(report: Report) -> str:
    lines = _annotations((report.missing, report.extra, report.placeholder_mismatch))
    lines.append(f"{PROGRAM}: {_totals_line(report)}")
    return "\n".join(lines)


RENDERERS: dict[str, Callable[[Report], str]] = {
    "text": render_text,
    "json": render_json,
    "github": render_github,
}


def render(report: Report, fmt: str = "text") -> str:
    try:
        renderer = RENDERERS[fmt]
    except KeyError as exc:
        expected = ", ".join(OUTPUT_FORMATS)
        raise ValueError(
            f"Unknown output format '{fmt}'. Expected one of: {expected}"
        ) from exc
    return renderer(report)


__all__ = [
    "EXIT_OK",
    "EXIT_LINT_FAILED",
    "OUTPUT_FORMATS",
    "PROGRAM",
    "OutputFormat",
    "FailurePolicy",
    "render",
    "render_text",
    "render_json",
    "render_github",
    "github_annotation",
]
