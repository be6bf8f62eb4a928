"""Pytest configuration for primitive tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. f64 is used by the
    double-precision primitives, so the CPU backend is required.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_shape_store():
    """Clear the shape store before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the store's fields are created after ti.init()
    from src.primitives.scene.store import clear_shapes

    clear_shapes()
    yield
    clear_shapes()
