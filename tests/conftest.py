"""Pytest configuration and fixtures for LightRender tests."""

import pytest

from lightrender import RenderConfig, Runtime, create_document, reset_runtime


@pytest.fixture(autouse=True)
def default_runtime():
    """Give every test a fresh default runtime in development mode."""
    return reset_runtime(RenderConfig())


@pytest.fixture
def runtime():
    """An isolated development-mode runtime."""
    return Runtime(RenderConfig())


@pytest.fixture
def prod_runtime():
    """An isolated production-mode runtime (minification, quiet validation)."""
    return Runtime(RenderConfig(mode="prod"))


@pytest.fixture
def small_runtime():
    """Runtime with tiny pool and cache limits for eviction tests."""
    return Runtime(RenderConfig(pool_size=2, cache_limit=3))


@pytest.fixture
def doc(runtime):
    """A document bound to the isolated runtime."""
    return create_document(runtime=runtime)
