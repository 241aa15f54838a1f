"""
Shared fixtures for language front-end tests.
"""

import pytest

from tests.infrastructure import require_grammar


@pytest.fixture
def java_grammar():
    require_grammar("tree_sitter_java")


@pytest.fixture
def cpp_grammar():
    require_grammar("tree_sitter_cpp")
