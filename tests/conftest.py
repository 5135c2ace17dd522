"""
pytest configuration for stackpos tests.
"""

import sys
from pathlib import Path

import pandas as pd
import pytest

# Add the parent directory to sys.path to ensure imports work
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def mixed_elements():
    """Elements at two x-positions with both signs and a label column."""
    return pd.DataFrame(
        {
            "x": ["a", "a", "a", "b", "b"],
            "y": [1.0, 2.0, -1.0, 3.0, 1.0],
            "group": [1, 2, 2, 1, 2],
            "label": ["x", "y", "y", "x", "y"],
        }
    )


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
