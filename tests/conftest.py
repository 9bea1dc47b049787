"""Shared pytest fixtures for stellar-snaps tests."""

import sys
from pathlib import Path

import pytest

# Add the package to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

DESTINATION = "GBZXN7PIRZGNMHGA7MUUUF4GWPY5AYPV6LY4UV2GL6VJGIQRXFDNMADI"
CREATOR = "GCEZWKCA5VLDNRLN3RPRJMRZOX3Z6G5CHCGSNFHEYVXM3XOJMDS674JZ"


@pytest.fixture(autouse=True)
def isolated_dirs(monkeypatch, tmp_path):
    """Keep config and data files of every test inside its tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("STELLAR_SNAPS_DATA_DIR", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def destination() -> str:
    return DESTINATION


@pytest.fixture
def creator() -> str:
    return CREATOR
