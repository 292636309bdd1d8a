"""Fixtures for the runnable examples.

Every example directory holds an ``app.py`` that renders its pages at import
time and a ``test_<name>.py`` that asserts on the results. ``example_app``
executes that ``app.py`` afresh for each test, under its own runtime.
"""

import itertools
import sys
from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path
from types import ModuleType

import pytest

_load_counter = itertools.count()


def load_app(directory: Path) -> ModuleType:
    """Execute ``directory/app.py`` as a new, uniquely named module."""
    source = directory / "app.py"
    if not source.is_file():
        raise FileNotFoundError(f"No app.py next to {directory}")
    name = f"lightrender_examples.{directory.name}_{next(_load_counter)}"
    spec = spec_from_file_location(name, source)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load {source}")
    module = module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[name]
        raise
    return module


@pytest.fixture
def example_app(request: pytest.FixtureRequest):
    module = load_app(Path(request.path).parent)
    yield module
    sys.modules.pop(module.__name__, None)
