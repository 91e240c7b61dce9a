"""Specalyzer - Analyze specifications built with Spec-Up and Spec-Up-T.

This package fetches a deployed specification site, locates its source
repository and classifies the build tool and version that produced it.
"""

__version__ = "0.1.0"
__author__ = "Specalyzer Contributors"

from specalyzer.models import (
    AnalysisResult,
    ClassificationResult,
    SourceReference,
    StructuredSource,
    UrlSource,
    VersionArchive,
)

__all__ = [
    "__version__",
    "AnalysisResult",
    "ClassificationResult",
    "SourceReference",
    "StructuredSource",
    "UrlSource",
    "VersionArchive",
]
