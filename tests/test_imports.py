import importlib
import pytest

@pytest.mark.parametrize("module", [
    "kcentroid",
    "kcentroid.algorithms",
    "kcentroid.assignments",
    "kcentroid.base",
    "kcentroid.updates",
    "kcentroid.distances",
    "kcentroid.initialization",
    "kcentroid.utils",
])
def test_submodules_exist(module):
    mod = importlib.import_module(module)
    assert mod is not None
