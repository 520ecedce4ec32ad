"""provtrans translation core"""

from .path import ContextPath, Segment
from .report import Diagnostic, Report, Severity
from .translation import Translation, TranslationKind, TranslationSet
from .options import TranslateOptions
from .translator import (
    CustomTranslator,
    Translator,
    check_field_coverage,
    field_key,
    unwrap_annotation,
)

__all__ = [
    # Path
    "ContextPath",
    "Segment",
    # Report
    "Diagnostic",
    "Report",
    "Severity",
    # Translations
    "Translation",
    "TranslationKind",
    "TranslationSet",
    # Options
    "TranslateOptions",
    # Engine
    "CustomTranslator",
    "Translator",
    "check_field_coverage",
    "field_key",
    "unwrap_annotation",
]
