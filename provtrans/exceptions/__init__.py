"""provtrans exception module

Provides all exception classes and diagnostic sentinel errors
"""

from .errors import (
    ProvtransError,
    TranslationError,
    PathTraversalError,
    TemplateRenderError,
    DataURLError,
    UsageError,
    DiagnosticError,
    ErrNoFilesDir,
    ErrTreeNotDirectory,
    ErrNodeExists,
    ErrFileType,
)

__all__ = [
    "ProvtransError",
    "TranslationError",
    "PathTraversalError",
    "TemplateRenderError",
    "DataURLError",
    "UsageError",
    "DiagnosticError",
    "ErrNoFilesDir",
    "ErrTreeNotDirectory",
    "ErrNodeExists",
    "ErrFileType",
]
