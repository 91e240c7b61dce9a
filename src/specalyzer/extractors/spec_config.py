"""Extraction of ``window.specConfig`` from a rendered specification page.

Spec-Up and Spec-Up-T embed their configuration in an inline script that
assigns ``window.specConfig``. The ``source`` entry of that object points
at the repository the specification was built from.
"""

import logging
from typing import Any, Optional

from bs4 import BeautifulSoup

from specalyzer.extractors.jsliteral import LiteralSyntaxError, parse_assigned_literal
from specalyzer.models import SourceReference, StructuredSource, UrlSource

logger = logging.getLogger(__name__)

SPEC_CONFIG_MARKER = "window.specConfig"


def find_spec_config_script(html: str) -> Optional[str]:
    """Return the text of the first script that mentions ``window.specConfig``.

    Args:
        html: HTML document.

    Returns:
        Script source, or None if no script contains the marker.
    """
    soup = BeautifulSoup(html, "html.parser")
    for script in soup.find_all("script"):
        text = script.string or script.get_text()
        if text and SPEC_CONFIG_MARKER in text:
            return text
    return None


def extract_spec_config(html: str) -> Optional[dict[str, Any]]:
    """Extract the ``window.specConfig`` object from an HTML document.

    The script is parsed, never executed; a value that is not a plain
    object literal is treated as missing.

    Args:
        html: HTML document.

    Returns:
        The configuration mapping, or None if absent or unreadable.
    """
    script = find_spec_config_script(html)
    if script is None:
        logger.debug("No script assigning %s found", SPEC_CONFIG_MARKER)
        return None

    try:
        config = parse_assigned_literal(script, SPEC_CONFIG_MARKER)
    except LiteralSyntaxError as e:
        logger.debug("Could not parse %s: %s", SPEC_CONFIG_MARKER, e)
        return None

    if not isinstance(config, dict):
        logger.debug("%s is not an object literal", SPEC_CONFIG_MARKER)
        return None
    return config


def source_reference_from_config(
    config: Optional[dict[str, Any]],
) -> Optional[SourceReference]:
    """Build a repository pointer from the ``source`` entry of a config.

    Accepted shapes:
    - ``"https://github.com/org/repo"``
    - ``{"url": "https://github.com/org/repo"}``
    - ``{"host": "github", "account": "org", "repo": "repo"}``

    Args:
        config: Parsed ``window.specConfig`` mapping.

    Returns:
        UrlSource or StructuredSource, or None if the entry is missing or
        has an unknown shape.
    """
    if not config:
        return None

    source = config.get("source")
    if isinstance(source, str) and source:
        return UrlSource(url=source)

    if isinstance(source, dict):
        url = source.get("url")
        if isinstance(url, str) and url:
            return UrlSource(url=url)

        host = source.get("host")
        account = source.get("account")
        repo = source.get("repo")
        if all(isinstance(v, str) and v for v in (host, account, repo)):
            return StructuredSource(host=host, account=account, repo=repo)

    logger.debug("Unrecognised specConfig.source: %r", source)
    return None


def extract_source_reference(html: str) -> Optional[SourceReference]:
    """Extract the repository pointer of a specification page."""
    return source_reference_from_config(extract_spec_config(html))
