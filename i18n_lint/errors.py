"""Fatal errors raised before a lint report can be produced."""

from __future__ import annotations

from pathlib import Path


class LintError(Exception):
    """Base class for setup failures that abort a lint run."""


class LocaleDirNotFound(LintError):
    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        super().__init__(f"locale directory not found: {self.root}")


class LocaleDirUnreadable(LintError):
    """A directory below the locale root could not be listed."""

    def __init__(self, directory: Path, cause: OSError) -> None:
        self.directory = Path(directory)
        self.cause = cause
        super().__init__(f"cannot read directory {self.directory}: {cause}")


class NoLocaleFilesFound(LintError):
    def __init__(self, root: Path, formats: tuple[str, ...] = ()) -> None:
        self.root = Path(root)
        self.formats = tuple(formats)
        message = f"no locale files found in {self.root}"
        if self.formats:
            message += f" (looked for: {', '.join(self.formats)})"
        super().__init__(message)


class ParseError(LintError):
    """A locale file could not be read or parsed."""

    def __init__(self, file: Path, cause: BaseException) -> None:
        self.file = Path(file)
        self.cause = cause
        super().__init__(f"failed to parse {self.file}: {cause}")


class UnsupportedExtension(LintError):
    def __init__(self, file: Path) -> None:
        self.file = Path(file)
        super().__init__(f"unsupported file extension: {self.file}")


class BaseLanguageNotFound(LintError):
    def __init__(self, base: str, root: Path) -> None:
        self.base = base
        self.root = Path(root)
        super().__init__(f"base language '{base}' not found in {self.root}")


class DuplicateLanguage(LintError):
    """Two locale files resolve to the same language identifier."""

    def __init__(self, lang: str, first: Path, second: Path) -> None:
        self.lang = lang
        self.first = Path(first)
        self.second = Path(second)
        super().__init__(
            f"language '{lang}' is defined twice: {self.first} and {self.second}"
        )


class ConfigError(LintError):
    """Invalid configuration supplied via flags, environment or config file."""


__all__ = [
    "LintError",
    "LocaleDirNotFound",
    "LocaleDirUnreadable",
    "NoLocaleFilesFound",
    "ParseError",
    "UnsupportedExtension",
    "BaseLanguageNotFound",
    "DuplicateLanguage",
    "ConfigError",
]
