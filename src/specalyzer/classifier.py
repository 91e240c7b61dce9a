"""Build-tool classifier for Spec-Up and Spec-Up-T sites.

Given a parsed package.json, decides whether a specification was built
with the original ``spec-up`` tool or its successor ``spec-up-t``, and
which version of it.

Decision order (first match wins):

1. ``spec-up-t`` declared as a dependency: successor, with the declared
   range returned verbatim.
2. The manifest is ``spec-up`` itself: original.
3. An ``edit`` or ``render`` script calls ``require('spec-up')``: original.
4. All core dependencies present and at least ``min_typical_matches`` of
   the typical spec-up dependencies: original.
5. ``repository.url`` points at the spec-up repository: original.
6. Otherwise: successor.
"""

import logging
import re
from typing import Any, Optional

from specalyzer.models import ClassificationResult, Manifest

logger = logging.getLogger(__name__)

SPEC_UP = "spec-up"
SPEC_UP_T = "spec-up-t"

SPEC_UP_REPOSITORY = "decentralized-identity/spec-up"

FINGERPRINT_SCRIPTS = ("edit", "render")

# require('spec-up') but not require('spec-up-t')
SCRIPT_SIGNATURE = re.compile(r"""require\(\s*['"]spec-up['"]\s*\)""")

REPOSITORY_PATTERN = re.compile(re.escape(SPEC_UP_REPOSITORY) + r"(?![\w-])")

# /v1.2.3 path segment inside a repository URL
REPOSITORY_TAG_PATTERN = re.compile(r"/v(\d+\.\d+\.\d+)(?=[/#?]|$)")

CORE_DEPENDENCIES = frozenset(
    {
        "markdown-it",
        "gulp",
        "gulp-concat",
        "markdown-it-anchor",
    }
)

# markdown processor + task runner
CORE_SIGNATURE = ("markdown-it", "gulp")

TYPICAL_DEPENDENCIES = (
    "axios",
    "diff",
    "find-pkg-dir",
    "fs-extra",
    "gulp",
    "gulp-clean-css",
    "gulp-concat",
    "gulp-terser",
    "markdown-it",
    "markdown-it-anchor",
    "markdown-it-attrs",
    "markdown-it-chart",
    "markdown-it-container",
    "markdown-it-deflist",
    "markdown-it-icons",
    "markdown-it-ins",
    "markdown-it-mark",
    "markdown-it-modify-token",
    "markdown-it-multimd-table",
    "markdown-it-prism",
    "markdown-it-sub",
    "markdown-it-sup",
    "markdown-it-toc-and-anchor",
)

DEFAULT_MIN_TYPICAL_MATCHES = 10


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def declared_dependency(manifest: Optional[Manifest], name: str) -> Optional[str]:
    """Return the version range declared for a dependency.

    Looks in ``dependencies`` first, then ``devDependencies``.

    Args:
        manifest: Parsed package.json, or None.
        name: Dependency name.

    Returns:
        The declared range string as written, or None if not declared.
    """
    if not manifest:
        return None
    for section in ("dependencies", "devDependencies"):
        version = _string(_mapping(manifest.get(section)).get(name))
        if version:
            return version
    return None


def all_dependencies(manifest: Manifest) -> set[str]:
    """Return the names of all direct and development dependencies."""
    names = set(_mapping(manifest.get("dependencies")))
    names.update(_mapping(manifest.get("devDependencies")))
    return names


def repository_url(manifest: Manifest) -> Optional[str]:
    """Return the manifest's own repository URL.

    Both the object form ``{"url": ...}`` and the npm shorthand string
    form are accepted.
    """
    repository = manifest.get("repository")
    if isinstance(repository, dict):
        return _string(repository.get("url"))
    return _string(repository)


class BuildToolClassifier:
    """Classifies a manifest as spec-up or spec-up-t.

    The classifier holds no state besides its threshold; ``classify`` is a
    pure function of the manifest.

    Attributes:
        min_typical_matches: Minimum number of typical spec-up dependencies
            required by the dependency fingerprint.
    """

    def __init__(self, min_typical_matches: int = DEFAULT_MIN_TYPICAL_MATCHES) -> None:
        self.min_typical_matches = min_typical_matches

    def classify(self, manifest: Optional[Manifest]) -> ClassificationResult:
        """Classify the build tool declared by a manifest.

        Args:
            manifest: Parsed package.json, or None if it was not obtainable.

        Returns:
            The classification. Missing signals fall back to spec-up-t
            with an undetermined version; nothing is raised.
        """
        if not manifest:
            logger.debug("No manifest available, defaulting to %s", SPEC_UP_T)
            return ClassificationResult(is_spec_up_t=True, version=None)

        declared = declared_dependency(manifest, SPEC_UP_T)
        if declared:
            logger.debug("%s declared as dependency: %s", SPEC_UP_T, declared)
            return ClassificationResult(is_spec_up_t=True, version=declared)

        if self._matches_name(manifest):
            logger.debug("Manifest is %s itself", SPEC_UP)
        elif self._matches_scripts(manifest):
            logger.debug("Script fingerprint matches %s", SPEC_UP)
        elif self._matches_dependencies(manifest):
            logger.debug("Dependency fingerprint matches %s", SPEC_UP)
        elif self._matches_repository(manifest):
            logger.debug("Repository URL matches %s", SPEC_UP)
        else:
            return ClassificationResult(is_spec_up_t=True, version=declared)

        return ClassificationResult(
            is_spec_up_t=False, version=self.spec_up_version(manifest)
        )

    def spec_up_version(self, manifest: Manifest) -> Optional[str]:
        """Determine the spec-up version of a manifest classified as spec-up.

        Precedence: the manifest's own version when it is spec-up itself,
        then a ``/vX.Y.Z`` tag in ``repository.url``, then the manifest's
        version prefixed with ``~`` when the core signature holds.

        Args:
            manifest: Parsed package.json.

        Returns:
            Version string, or None if undetermined.
        """
        own_version = _string(manifest.get("version"))

        if self._matches_name(manifest) and own_version:
            return own_version

        url = repository_url(manifest)
        if url:
            match = REPOSITORY_TAG_PATTERN.search(url)
            if match:
                return match.group(1)

        dependencies = all_dependencies(manifest)
        if own_version and all(name in dependencies for name in CORE_SIGNATURE):
            return f"~{own_version}"

        return None

    def typical_match_count(self, manifest: Manifest) -> int:
        """Return how many typical spec-up dependencies the manifest declares."""
        dependencies = all_dependencies(manifest)
        return sum(1 for name in TYPICAL_DEPENDENCIES if name in dependencies)

    def _matches_name(self, manifest: Manifest) -> bool:
        return manifest.get("name") == SPEC_UP

    def _matches_scripts(self, manifest: Manifest) -> bool:
        scripts = _mapping(manifest.get("scripts"))
        for script_name in FINGERPRINT_SCRIPTS:
            command = _string(scripts.get(script_name))
            if command and SCRIPT_SIGNATURE.search(command):
                return True
        return False

    def _matches_dependencies(self, manifest: Manifest) -> bool:
        if not CORE_DEPENDENCIES.issubset(all_dependencies(manifest)):
            return False
        return self.typical_match_count(manifest) >= self.min_typical_matches

    def _matches_repository(self, manifest: Manifest) -> bool:
        url = repository_url(manifest)
        return bool(url and REPOSITORY_PATTERN.search(url))
