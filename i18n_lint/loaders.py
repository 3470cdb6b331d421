"""Discovery and parsing helpers for locale directories."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, Mapping

import yaml

from . import ron
from .errors import (
    BaseLanguageNotFound,
    DuplicateLanguage,
    LocaleDirNotFound,
    LocaleDirUnreadable,
    NoLocaleFilesFound,
    ParseError,
    UnsupportedExtension,
)
from .flatten import FlatMap, flatten
from .tree import MapNode, Node, from_python

logger = logging.getLogger(__name__)

DEFAULT_FORMATS: tuple[str, ...] = ("json", "ron")


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid JSON literal: {name}")


def parse_json(text: str) -> Node:
    # NaN and Infinity are not JSON
    return from_python(json.loads(text, parse_constant=_reject_constant))


def parse_yaml(text: str) -> Node:
    data = yaml.safe_load(text)
    if data is None:
        return MapNode(())
    return from_python(data)


def parse_ron(text: str) -> Node:
    return ron.loads(text)


PARSERS: dict[str, Callable[[str], Node]] = {
    "json": parse_json,
    "ron": parse_ron,
    "yaml": parse_yaml,
    "yml": parse_yaml,
}


@dataclass(frozen=True, slots=True)
class LocaleDocument:
    """A parsed locale file."""

    lang: str
    path: Path
    tree: Node

    def flat_map(self) -> FlatMap:
        return flatten(self.tree)


@dataclass(frozen=True)
class LocaleSet:
    """All locale documents found under ``root``, keyed by language."""

    root: Path
    base: str
    documents: Mapping[str, LocaleDocument] = field(default_factory=dict)

    @property
    def langs(self) -> list[str]:
        return sorted(self.documents)

    @property
    def base_document(self) -> LocaleDocument:
        return self.documents[self.base]

    def flat_maps(self) -> dict[str, FlatMap]:
        return {lang: self.documents[lang].flat_map() for lang in self.langs}

    def files(self) -> dict[str, str]:
        return {lang: str(doc.path) for lang, doc in self.documents.items()}


def extension_of(path: Path) -> str:
    return Path(path).suffix[1:]


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield files below *root* in sorted order, following symlinks once.

    A directory that cannot be listed aborts the walk with
    :class:`~i18n_lint.errors.LocaleDirUnreadable`.
    """

    def _unreadable(exc: OSError) -> None:
        raise LocaleDirUnreadable(exc.filename or root, exc) from exc

    seen: set[str] = set()
    walker = os.walk(root, onerror=_unreadable, followlinks=True)
    for dirpath, dirnames, filenames in walker:
        real = os.path.realpath(dirpath)
        if real in seen:
            # symlink cycle or a directory reachable twice
            dirnames[:] = []
            continue
        seen.add(real)
        dirnames.sort()
        for name in sorted(filenames):
            yield Path(dirpath) / name


def discover_locale_files(
    root: Path, formats: Iterable[str] = DEFAULT_FORMATS
) -> list[Path]:
    """Return every file under *root* whose extension is in *formats*."""

    root = Path(root)
    if not root.is_dir():
        raise LocaleDirNotFound(root)
    wanted = set(formats)
    found: list[Path] = []
    for path in _walk_files(root):
        if extension_of(path) not in wanted or not path.is_file():
            continue
        logger.debug("Discovered locale file %s", path)
        found.append(path)
    return found


def lang_from_filename(path: Path) -> str | None:
    stem = Path(path).stem
    return stem or None


def parse_document(path: Path) -> Node:
    """Read *path* and parse it with the parser registered for its extension."""

    path = Path(path)
    parser = PARSERS.get(extension_of(path))
    if parser is None:
        raise UnsupportedExtension(path)
    try:
        # utf-8-sig tolerates editors that write a BOM
        text = path.read_text(encoding="utf-8-sig")
        return parser(text)
    except (
        OSError,
        UnicodeDecodeError,
        ValueError,
        TypeError,
        RecursionError,
        yaml.YAMLError,
    ) as exc:
        raise ParseError(path, exc) from exc


def load_document(path: Path, lang: str | None = None) -> LocaleDocument:
    path = Path(path)
    lang = lang or lang_from_filename(path) or ""
    return LocaleDocument(lang=lang, path=path, tree=parse_document(path))


def index_by_language(files: Iterable[Path]) -> dict[str, Path]:
    """Map language identifiers to files, rejecting duplicate identifiers."""

    by_lang: dict[str, Path] = {}
    for path in files:
        lang = lang_from_filename(path)
        if lang is None:
            continue
        if lang in by_lang:
            raise DuplicateLanguage(lang, by_lang[lang], path)
        by_lang[lang] = path
    return dict(sorted(by_lang.items()))


def load_locale_set(
    root: Path,
    base: str = "en",
    formats: Iterable[str] = DEFAULT_FORMATS,
) -> LocaleSet:
    """Discover, parse and index the locale files found under *root*.

    Raises
    ------
    LocaleDirNotFound
        *root* is not a directory.
    NoLocaleFilesFound
        No file with a supported extension exists below *root*.
    DuplicateLanguage
        Two files share a language identifier (e.g. ``en.json``/``en.ron``).
    BaseLanguageNotFound
        *base* is not among the discovered languages.
    ParseError
        Any file fails to parse; the whole run is aborted.
    """

    root = Path(root)
    formats = tuple(formats)
    files = discover_locale_files(root, formats)
    if not files:
        raise NoLocaleFilesFound(root, formats)

    by_lang = index_by_language(files)
    if base not in by_lang:
        raise BaseLanguageNotFound(base, root)

    documents = {lang: load_document(path, lang) for lang, path in by_lang.items()}
    logger.info(
        "Loaded %d locale file(s) from %s (base: %s)", len(documents), root, base
    )
    return LocaleSet(root=root, base=base, documents=documents)


__all__ = [
    "DEFAULT_FORMATS",
    "PARSERS",
    "LocaleDocument",
    "LocaleSet",
    "discover_locale_files",
    "lang_from_filename",
    "parse_document",
    "load_document",
    "index_by_language",
    "load_locale_set",
]
