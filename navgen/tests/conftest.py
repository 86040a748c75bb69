"""Shared test configuration and fixtures."""

import pytest

from navgen.generator.aggregate import aggregate
from navgen.generator.parser import parse, scan
from navgen.generator.universe import DeclaredTypeUniverse


def pytest_configure(config):
    """Keep test output short."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def build_groups():
    """Parse declarations and group their required fields by owning class."""

    def _build(text):
        _, types, classes = parse(text)
        return aggregate(scan(classes), DeclaredTypeUniverse(types))

    return _build
