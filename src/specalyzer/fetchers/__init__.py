"""Fetchers for specification sites and repository manifests.

This module provides the network layer of specalyzer: the site fetcher
for pages and existence probes, the manifest fetcher with its branch
fallback and the version archive probe.
"""

from specalyzer.fetchers.base import BaseFetcher
from specalyzer.fetchers.http import HttpFetcher
from specalyzer.fetchers.manifest import ManifestFetcher
from specalyzer.fetchers.site import SiteFetcher
from specalyzer.fetchers.versions import VersionArchiveProbe
from specalyzer.fetchers.waterfall import CandidateOutcome, first_success

__all__ = [
    "BaseFetcher",
    "CandidateOutcome",
    "HttpFetcher",
    "ManifestFetcher",
    "SiteFetcher",
    "VersionArchiveProbe",
    "first_success",
]
