"""
Test that every module of the package imports cleanly
"""
import importlib

import pytest

MODULES = [
    "funding_checker",
    "funding_checker.config",
    "funding_checker.models",
    "funding_checker.rules_evaluator",
    "funding_checker.services",
    "funding_checker.utils",
    "funding_checker.routes",
    "funding_checker.preprocess",
    "funding_checker.main",
]


@pytest.mark.parametrize("name", MODULES)
def test_module_imports(name):
    assert importlib.import_module(name) is not None


def test_third_party_stack_available():
    import fastapi
    import pydantic
    import pydantic_settings
    import uvicorn

    assert pydantic.VERSION.startswith("2")
    assert fastapi and pydantic_settings and uvicorn
