"""
Pytest configuration and shared fixtures for the lifesim test suite.
"""

import sys
import tempfile
from pathlib import Path

import pytest
import yaml

# Ensure project root is on PYTHONPATH so 'lifesim' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from lifesim.core.engine_registry import create_engine  # noqa: E402
from lifesim.core.grid import Grid  # noqa: E402

ENGINE_NAMES = ["naive", "hash", "parallel"]

BLINKER_ROWS = [
    ".....",
    "..O..",
    "..O..",
    "..O..",
    ".....",
]

BLINKER_PHASE_2_ROWS = [
    ".....",
    ".....",
    ".OOO.",
    ".....",
    ".....",
]

BLOCK_ROWS = [
    "......",
    "......",
    "..OO..",
    "..OO..",
    "......",
    "......",
]

GLIDER_ROWS = [
    ".O......",
    "..O.....",
    "OOO.....",
    "........",
    "........",
    "........",
]


@pytest.fixture
def blinker_grid():
    return Grid.from_text(BLINKER_ROWS)


@pytest.fixture
def blinker_phase_2_grid():
    return Grid.from_text(BLINKER_PHASE_2_ROWS)


@pytest.fixture
def block_grid():
    return Grid.from_text(BLOCK_ROWS)


@pytest.fixture
def glider_grid():
    return Grid.from_text(GLIDER_ROWS)


@pytest.fixture(params=ENGINE_NAMES)
def engine(request):
    """
    Fixture yielding each registered engine in turn.

    The parallel engine runs with two workers so the band split is exercised.
    """
    kwargs = {"workers": 2} if request.param == "parallel" else {}
    with create_engine(request.param, **kwargs) as eng:
        yield eng


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


@pytest.fixture
def valid_lifesim_config_dict():
    """
    Fixture providing a complete valid lifesim configuration dictionary.
    """
    return {
        "topology": "bounded",
        "random": {"density": 0.25, "seed": 7},
        "parallel": {"workers": 4, "chunks": 8},
        "output": {
            "directory": "out",
            "filename": "life_{width}x{height}_{iterations}.txt",
        },
        "logging": {"level": "debug", "progress_every": 10},
    }


@pytest.fixture
def temp_config_yaml_file(temp_yaml_file, valid_lifesim_config_dict):
    """
    Fixture that creates a temporary YAML file with valid configuration.

    Args:
        temp_yaml_file: Path object for temporary file
        valid_lifesim_config_dict: Valid configuration dictionary

    Yields:
        Path: Path to the temporary YAML file with valid config
    """
    with open(temp_yaml_file, "w", encoding="utf-8") as f:
        yaml.dump(valid_lifesim_config_dict, f)

    yield temp_yaml_file
