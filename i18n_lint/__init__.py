"""i18n-lint package initialization."""

__version__ = "0.1.0"

from .diff_core import Finding, Report, Totals, build_report, diff_locales  # noqa: E402
from .errors import (  # noqa: E402
    BaseLanguageNotFound,
    ConfigError,
    DuplicateLanguage,
    LintError,
    LocaleDirNotFound,
    LocaleDirUnreadable,
    NoLocaleFilesFound,
    ParseError,
    UnsupportedExtension,
)
from .flatten import FlatMap, flatten  # noqa: E402
from .loaders import (  # noqa: E402
    LocaleDocument,
    LocaleSet,
    discover_locale_files,
    load_locale_set,
)
from .placeholders import extract_placeholders, placeholders_compatible  # noqa: E402
from .reporters import FailurePolicy, render  # noqa: E402

__all__ = [
    "__version__",
    "BaseLanguageNotFound",
    "ConfigError",
    "DuplicateLanguage",
    "FailurePolicy",
    "Finding",
    "FlatMap",
    "LintError",
    "LocaleDirNotFound",
    "LocaleDirUnreadable",
    "LocaleDocument",
    "LocaleSet",
    "NoLocaleFilesFound",
    "ParseError",
    "Report",
    "Totals",
    "UnsupportedExtension",
    "build_report",
    "diff_locales",
    "discover_locale_files",
    "extract_placeholders",
    "flatten",
    "load_locale_set",
    "placeholders_compatible",
    "render",
]
