"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. Fast math is off so
    that NaN and infinity propagate exactly as on the host.
    """
    ti.init(arch=ti.cpu, fast_math=False)
    yield


@pytest.fixture(autouse=True)
def clear_device_scene():
    """Clear the uploaded device scene before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the scene fields are created after Taichi is initialized
    from whitted.scene.intersection import clear_scene

    clear_scene()
    yield
    clear_scene()
