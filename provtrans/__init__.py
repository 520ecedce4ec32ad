"""
provtrans - provisioning config translator

Translates human-authored machine provisioning configs (local files,
inline contents, directory trees, automatic mount units) into the fully
explicit config consumed by the first-boot provisioning agent.
"""

__version__ = "0.1.0"

from .core import (
    ContextPath,
    Diagnostic,
    Report,
    Severity,
    TranslateOptions,
    Translation,
    TranslationKind,
    TranslationSet,
    Translator,
)
from .exceptions import (
    ProvtransError,
    TranslationError,
    PathTraversalError,
    TemplateRenderError,
    UsageError,
)
from .translate import translate_config

__all__ = [
    "__version__",
    # Core
    "ContextPath",
    "Diagnostic",
    "Report",
    "Severity",
    "TranslateOptions",
    "Translation",
    "TranslationKind",
    "TranslationSet",
    "Translator",
    # Errors
    "ProvtransError",
    "TranslationError",
    "PathTraversalError",
    "TemplateRenderError",
    "UsageError",
    # Translate
    "translate_config",
]
