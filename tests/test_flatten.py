"""Tests for document flattening."""

from __future__ import annotations

import json
import logging

from i18n_lint import ron
from i18n_lint.flatten import flatten
from i18n_lint.tree import MapNode, NumberNode, TextNode, from_python


def test_flat_document_is_unchanged() -> None:
    assert flatten({"a": "x", "b": "y"}) == {"a": "x", "b": "y"}


def test_nested_keys_are_dot_joined() -> None:
    document = {"ui": {"buttons": {"save": "Save {item}"}}}
    assert flatten(document) == {"ui.buttons.save": "Save {item}"}


def test_scalars_are_rendered_as_text() -> None:
    document = {"count": 3, "ratio": 0.5, "whole": 1.0, "on": True, "off": False}
    assert flatten(document) == {
        "count": "3",
        "ratio": "0.5",
        "whole": "1.0",
        "on": "true",
        "off": "false",
    }


def test_null_and_arrays_are_ignored() -> None:
    document = {"a": None, "b": ["x", "y"], "c": {"d": [{"e": "f"}]}, "g": "h"}
    assert flatten(document) == {"g": "h"}


def test_root_scalar_produces_no_entry() -> None:
    assert flatten("just text") == {}
    assert flatten(42) == {}
    assert flatten([1, 2]) == {}


def test_empty_maps_produce_no_entries() -> None:
    assert flatten({"ui": {}}) == {}


def test_key_order_does_not_change_result() -> None:
    left = flatten(json.loads('{"b": {"y": "2", "x": "1"}, "a": "0"}'))
    right = flatten(json.loads('{"a": "0", "b": {"x": "1", "y": "2"}}'))
    assert left == right
    assert list(left) == ["a", "b.x", "b.y"]


def test_tree_nodes_are_accepted_directly() -> None:
    tree = MapNode((("n", NumberNode(7)), ("t", TextNode("x"))))
    assert flatten(tree) == {"n": "7", "t": "x"}


def test_json_and_ron_flatten_identically() -> None:
    from_json = flatten(
        json.loads('{"ui": {"n": 1, "f": 2.5, "ok": true, "label": "Hi {name}"}}')
    )
    from_ron = flatten(ron.loads('(ui: {n: 1, f: 2.5, ok: true, label: "Hi {name}"})'))
    assert from_json == from_ron


def test_non_string_keys_use_scalar_text() -> None:
    tree = from_python({1: "one", False: {"x": "y"}})
    assert flatten(tree) == {"1": "one", "false.x": "y"}


def test_skipped_arrays_are_logged(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="i18n_lint.flatten"):
        flatten({"menu": {"items": ["a", "b"]}})
    assert "menu.items" in caplog.text


def test_deeply_nested_tree() -> None:
    node = TextNode("leaf")
    for _ in range(5000):
        node = MapNode((("k", node),))
    assert flatten(node) == {".".join(["k"] * 5000): "leaf"}
