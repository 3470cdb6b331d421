"""Tests for the locale diff engine."""

from __future__ import annotations

import json
from pathlib import Path

from i18n_lint import diff_core, loaders
from i18n_lint.flatten import flatten

BASE = {
    "ui": {
        "buttons": {"save": "Save {item}", "cancel": "Cancel"},
        "messages": {"welcome": "Welcome {user}"},
    }
}
UK = {
    "ui": {
        "buttons": {"save": "Зберегти"},
        "messages": {"welcome": "Ласкаво просимо {username}"},
    }
}


def test_missing_key_and_placeholder_mismatch() -> None:
    report = diff_core.diff_locales(flatten(BASE), "en", {"uk": flatten(UK)})
    assert [f.key for f in report.missing] == ["ui.buttons.cancel"]
    assert [f.key for f in report.placeholder_mismatch] == [
        "ui.buttons.save",
        "ui.messages.welcome",
    ]
    assert report.extra == ()
    welcome = report.placeholder_mismatch[1]
    assert welcome.kind == "placeholder_mismatch"
    assert "base={user}" in welcome.message
    assert "uk={username}" in welcome.message
    assert report.totals == diff_core.Totals(missing=1, extra=0, placeholder_mismatch=2)


def test_extra_keys_are_reported() -> None:
    base = {"save": "Save", "cancel": "Cancel"}
    other = {"save": "Зберегти", "cancel": "Скасувати", "delete": "Видалити"}
    report = diff_core.diff_locales(base, "en", {"uk": other}, {"uk": "i18n/uk.ron"})
    assert len(report.extra) == 1
    finding = report.extra[0]
    assert finding.kind == "extra_key"
    assert finding.key == "delete"
    assert finding.file == "i18n/uk.ron"
    assert finding.message == "key 'delete' exists in uk, but not in base en"


def test_matching_languages_have_no_findings() -> None:
    base = {"save": "Save {item}", "cancel": "Cancel"}
    other = {"save": "Зберегти {item}", "cancel": "Скасувати"}
    report = diff_core.diff_locales(base, "en", {"uk": other})
    assert not report.has_findings
    assert report.langs == ("en", "uk")


def test_finding_kinds_follow_key_membership() -> None:
    base = {"a": "{x}", "b": "b", "c": "{y} {z}"}
    candidate = {"a": "{x}", "c": "{z} {y} {y}", "d": "d"}
    report = diff_core.diff_locales(base, "en", {"fr": candidate})
    assert {f.key for f in report.missing} == {"b"}
    assert {f.key for f in report.extra} == {"d"}
    assert report.placeholder_mismatch == ()


def test_findings_ordered_by_language_then_key() -> None:
    base = {"b": "B", "a": "A"}
    others = {"uk": {}, "de": {}, "en": {"ignored": "base"}}
    report = diff_core.diff_locales(base, "en", others)
    assert [(f.lang, f.key) for f in report.missing] == [
        ("de", "a"),
        ("de", "b"),
        ("uk", "a"),
        ("uk", "b"),
    ]
    # the base language is never compared with itself
    assert report.extra == ()
    assert report.langs == ("de", "en", "uk")


def test_diff_is_deterministic() -> None:
    base = flatten(BASE)
    others = {"uk": flatten(UK), "de": flatten({"ui": {"extra": "x"}})}
    first = diff_core.diff_locales(base, "en", others)
    second = diff_core.diff_locales(base, "en", dict(reversed(list(others.items()))))
    assert first == second
    assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())


def test_default_file_label_is_language() -> None:
    report = diff_core.diff_locales({"a": "A"}, "en", {"uk": {}})
    assert report.missing[0].file == "uk"
    assert report.missing[0].message == "key 'a' is missing (base: en)"


def test_report_to_dict_shape() -> None:
    report = diff_core.diff_locales({"a": "A"}, "en", {"uk": {"b": "B"}})
    payload = report.to_dict()
    assert list(payload) == [
        "base",
        "langs",
        "missing",
        "extra",
        "placeholder_mismatch",
        "totals",
    ]
    assert payload["totals"] == {"missing": 1, "extra": 1, "placeholder_mismatch": 0}
    assert payload["missing"][0] == {
        "kind": "missing_key",
        "lang": "uk",
        "key": "a",
        "file": "uk",
        "message": "key 'a' is missing (base: en)",
    }


def test_build_report_from_locale_set(tmp_path: Path) -> None:
    (tmp_path / "en.json").write_text(json.dumps(BASE), encoding="utf-8")
    (tmp_path / "uk.json").write_text(json.dumps(UK), encoding="utf-8")
    report = diff_core.build_report(loaders.load_locale_set(tmp_path, base="en"))
    assert report.langs == ("en", "uk")
    assert report.missing[0].file == str(tmp_path / "uk.json")
    assert report.totals.missing == 1
