"""Extractors for configuration embedded in specification pages.

This module provides helpers that read the ``window.specConfig`` object
out of a rendered page without executing any script.
"""

from specalyzer.extractors.jsliteral import (
    LiteralSyntaxError,
    parse_assigned_literal,
    parse_literal,
)
from specalyzer.extractors.spec_config import (
    extract_source_reference,
    extract_spec_config,
    source_reference_from_config,
)

__all__ = [
    "LiteralSyntaxError",
    "extract_source_reference",
    "extract_spec_config",
    "parse_assigned_literal",
    "parse_literal",
    "source_reference_from_config",
]
