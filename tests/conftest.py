"""Pytest configuration and shared fixtures for regex circuit tests."""

import sys
from pathlib import Path

import pytest

# tests/ is inside the repository root, so parent is the root
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))


@pytest.fixture
def scenario():
    """Reference capture: group 2 tagged at its first (3) and last (7) byte.

    Returns (haystack, capture_ids, capture_starts).
    """
    haystack = [0, 1, 2, 3, 4, 5, 6, 7, 8, 9]
    capture_ids = [0, 0, 0, 2, 0, 0, 0, 2, 0, 0]
    capture_starts = [0, 0, 0, 1, 0, 0, 0, 0, 0, 0]
    return haystack, capture_ids, capture_starts
