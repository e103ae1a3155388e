"""Shared fixtures: seeded random sources and namespaces."""

import pytest

from blaster.generators.namespace import build_default_namespace
from blaster.generators.source import RandomSource
from blaster.templates.compiler import PayloadCompiler


@pytest.fixture
def source():
    return RandomSource(seed=1234)


@pytest.fixture
def namespace(source):
    return build_default_namespace(source)


@pytest.fixture
def compiler(namespace):
    return PayloadCompiler(namespace)
