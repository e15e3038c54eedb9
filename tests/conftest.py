import sys
from pathlib import Path

import numpy as np
import pytest

# Ensure the project root is on sys.path so `linsolve` and `backend` are importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


@pytest.fixture
def simple_system() -> np.ndarray:
    """2x + y = 3, x + 3y = 5  ->  x = 0.8, y = 1.4"""
    return np.array([[2.0, 1.0, 3.0],
                     [1.0, 3.0, 5.0]])


@pytest.fixture
def three_by_three() -> np.ndarray:
    """Classic textbook system with solution (2, 3, -1)."""
    return np.array([[2.0, 1.0, -1.0, 8.0],
                     [-3.0, -1.0, 2.0, -11.0],
                     [-2.0, 1.0, 2.0, -3.0]])


def well_conditioned_system(n: int, seed: int) -> np.ndarray:
    """Random diagonally dominant n x (n+1) system."""
    rng = np.random.default_rng(seed)
    a = rng.uniform(-1.0, 1.0, size=(n, n)) + n * np.eye(n)
    b = rng.uniform(-10.0, 10.0, size=n)
    return np.hstack([a, b.reshape(-1, 1)])


@pytest.fixture
def make_system():
    return well_conditioned_system
