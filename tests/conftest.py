"""Shared fixtures."""

import pytest

from mpn_mcp.registry import PatternRegistry


@pytest.fixture
def registry_for():
    """Build an isolated, frozen registry holding one handler's rules."""
    def _build(handler):
        registry = PatternRegistry()
        handler.initialize_patterns(registry)
        registry.freeze()
        return registry
    return _build
