"""Pytest configuration and shared fixtures."""

import json
from typing import Any

import pytest

SITE_URL = "https://example.com/spec"


@pytest.fixture
def site_url() -> str:
    """Return the normalized URL of the sample specification site."""
    return SITE_URL


@pytest.fixture
def spec_up_t_manifest() -> dict[str, Any]:
    """Return a package.json of a Spec-Up-T specification."""
    return {
        "name": "my-spec",
        "version": "1.0.0",
        "scripts": {
            "render": "node -e \"require('spec-up-t/index.js')({ nowatch: true })\"",
        },
        "dependencies": {"spec-up-t": "^1.0.8"},
    }


@pytest.fixture
def spec_up_manifest() -> dict[str, Any]:
    """Return the package.json of the spec-up tool itself."""
    return {
        "name": "spec-up",
        "version": "0.10.6",
        "repository": {
            "type": "git",
            "url": "git+https://github.com/decentralized-identity/spec-up.git",
        },
        "dependencies": {
            "markdown-it": "13.0.1",
            "gulp": "4.0.2",
        },
    }


@pytest.fixture
def spec_config_html() -> str:
    """Return an index.html with a structured specConfig source."""
    config = {
        "specs": [{"title": "My Spec", "spec_directory": "./spec"}],
        "source": {"host": "github", "account": "foo", "repo": "bar"},
    }
    return (
        "<!DOCTYPE html><html><head><title>My Spec</title>"
        "<script>console.log('analytics');</script>"
        f"<script>window.specConfig = {json.dumps(config)};</script>"
        "</head><body><main>Spec</main></body></html>"
    )
