from pathlib import Path

import pytest

from tokctx.facade import AnnotatedTokenizer

from tests.infrastructure import require_grammar, write


@pytest.fixture
def python_annotated() -> AnnotatedTokenizer:
    require_grammar("tree_sitter_python")
    return AnnotatedTokenizer.for_language("python")


@pytest.fixture
def java_annotated() -> AnnotatedTokenizer:
    require_grammar("tree_sitter_java")
    return AnnotatedTokenizer.for_language("java")


@pytest.fixture
def cpp_annotated() -> AnnotatedTokenizer:
    require_grammar("tree_sitter_cpp")
    return AnnotatedTokenizer.for_language("cpp")


@pytest.fixture
def java_project(tmp_path: Path) -> Path:
    """Two parseable Java files, a broken one and a non-Java file."""
    write(tmp_path / "src" / "A.java", "class A { int x; }\n")
    write(tmp_path / "src" / "Empty.java", "")
    write(tmp_path / "src" / "Broken.java", "class Broken { int x = ; }\n")
    write(tmp_path / "README.md", "# not code\n")
    return tmp_path
