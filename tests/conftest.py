from collections.abc import Callable

import pytest
from bs4 import BeautifulSoup
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def soup() -> Callable[[str], BeautifulSoup]:
    """Parses rendered HTML fragments for structural assertions."""

    def _parse(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    return _parse
