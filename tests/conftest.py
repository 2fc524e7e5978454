import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a Click CLI runner for invoking `crate-readme`."""
    return CliRunner()
