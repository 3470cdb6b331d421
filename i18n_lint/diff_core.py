"""Key and placeholder diffing of locale maps against the base language."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from .flatten import FlatMap
from .loaders import LocaleSet
from .placeholders import extract_placeholders, format_placeholders

FindingKind = Literal["missing_key", "extra_key", "placeholder_mismatch"]


@dataclass(frozen=True, slots=True)
class Finding:
    """One discrepancy between a candidate language and the base."""

    kind: FindingKind
    lang: str
    key: str
    file: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "lang": self.lang,
            "key": self.key,
            "file": self.file,
            "message": self.message,
        }


@dataclass(frozen=True, slots=True)
class Totals:
    missing: int = 0
    extra: int = 0
    placeholder_mismatch: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "missing": self.missing,
            "extra": self.extra,
            "placeholder_mismatch": self.placeholder_mismatch,
        }


@dataclass(frozen=True, slots=True)
class Report:
    """Findings of a lint run, in language-then-key order."""

    base: str
    langs: tuple[str, ...]
    missing: tuple[Finding, ...] = ()
    extra: tuple[Finding, ...] = ()
    placeholder_mismatch: tuple[Finding, ...] = ()
    totals: Totals = field(default_factory=Totals)

    @property
    def has_findings(self) -> bool:
        return bool(self.missing or self.extra or self.placeholder_mismatch)

    def to_dict(self) -> dict[str, Any]:
        return {
            "base": self.base,
            "langs": list(self.langs),
            "missing": [finding.to_dict() for finding in self.missing],
            "extra": [finding.to_dict() for finding in self.extra],
            "placeholder_mismatch": [
                finding.to_dict() for finding in self.placeholder_mismatch
            ],
            "totals": self.totals.to_dict(),
        }


def diff_locales(
    base_map: FlatMap,
    base_lang: str,
    others: Mapping[str, FlatMap],
    files: Mapping[str, str] | None = None,
) -> Report:
    """Compare every language in *others* against *base_map*.

    Parameters
    ----------
    base_map:
        Flattened base language.
    base_lang:
        Identifier of the base language; skipped if present in *others*.
    others:
        Flattened candidate languages keyed by identifier.
    files:
        Optional source label per language used in findings; defaults to the
        language identifier.
    """

    files = files or {}
    base_keys = sorted(base_map)
    base_key_set = set(base_map)
    missing: list[Finding] = []
    extra: list[Finding] = []
    mismatched: list[Finding] = []

    for lang in sorted(others):
        if lang == base_lang:
            continue
        candidate = others[lang]
        file = files.get(lang, lang)

        for key in base_keys:
            if key not in candidate:
                missing.append(
                    Finding(
                        kind="missing_key",
                        lang=lang,
                        key=key,
                        file=file,
                        message=f"key '{key}' is missing (base: {base_lang})",
                    )
                )
                continue
            expected = extract_placeholders(base_map[key])
            actual = extract_placeholders(candidate[key])
            if expected != actual:
                mismatched.append(
                    Finding(
                        kind="placeholder_mismatch",
                        lang=lang,
                        key=key,
                        file=file,
                        message=(
                            f"placeholders mismatch for key '{key}': "
                            f"base={format_placeholders(expected)}, "
                            f"{lang}={format_placeholders(actual)}"
                        ),
                    )
                )

        for key in sorted(candidate):
            if key not in base_key_set:
                extra.append(
                    Finding(
                        kind="extra_key",
                        lang=lang,
                        key=key,
                        file=file,
                        message=(
                            f"key '{key}' exists in {lang}, but not in base {base_lang}"
                        ),
                    )
                )

    return Report(
        base=base_lang,
        langs=tuple(sorted(set(others) | {base_lang})),
        missing=tuple(missing),
        extra=tuple(extra),
        placeholder_mismatch=tuple(mismatched),
        totals=Totals(
            missing=len(missing),
            extra=len(extra),
            placeholder_mismatch=len(mismatched),
        ),
    )


def build_report(locales: LocaleSet) -> Report:
    """Flatten a loaded :class:`LocaleSet` and diff it against its base."""

    maps = locales.flat_maps()
    base_map = maps.pop(locales.base)
    return diff_locales(base_map, locales.base, maps, locales.files())


__all__ = ["Finding", "FindingKind", "Totals", "Report", "diff_locales", "build_report"]
