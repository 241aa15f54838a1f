"""
End-to-end tests for the tokctx command.
"""

from pathlib import Path

from tests.infrastructure import jlines, jload, require_grammar, run_cli, write, write_source


def test_cli_languages(tmp_path: Path):
    cp = run_cli(tmp_path, "languages")
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == {"languages": ["cpp", "java", "python"]}


def test_cli_annotate_jsonl(java_project: Path):
    require_grammar("tree_sitter_java")
    cp = run_cli(java_project, "annotate", "src/A.java", "src/Empty.java")
    assert cp.returncode == 0, cp.stderr

    first, empty = jlines(cp.stdout)
    assert first["path"] == str(Path("src/A.java"))
    assert first["ok"] is True
    assert first["tokens"][0] == {"pos": -1, "text": "<SENTENCE>", "kind": "<SENTENCE>"}
    assert {"pos": 14, "text": "x->{in:identifier,parent:variable_declarator}", "kind": "identifier"} in first["tokens"]
    assert [t["text"] for t in empty["tokens"]] == ["<SENTENCE>", "</SENTENCE>"]


def test_cli_annotate_text(java_project: Path):
    require_grammar("tree_sitter_java")
    cp = run_cli(java_project, "annotate", "--format", "text", "src/A.java")
    assert cp.returncode == 0, cp.stderr
    line = cp.stdout.strip()
    assert line.startswith("<SENTENCE> class->{in:class_declaration,parent:program}")
    assert line.endswith("</SENTENCE>")


def test_cli_failures_set_exit_code(java_project: Path):
    require_grammar("tree_sitter_java")
    cp = run_cli(java_project, "annotate", "src/Broken.java", "src/A.java", "README.md")
    assert cp.returncode == 1

    broken, good, readme = jlines(cp.stdout)
    assert broken["ok"] is False
    assert "line 1" in broken["error"]
    assert good["ok"] is True
    assert readme == {"path": "README.md", "ok": False, "error": "unknown language"}
    assert "README.md: unknown language" in cp.stderr


def test_cli_text_keeps_one_line_per_file(java_project: Path):
    require_grammar("tree_sitter_java")
    cp = run_cli(
        java_project, "annotate", "--format", "text",
        "src/Broken.java", "src/A.java", "src/Missing.java",
    )
    assert cp.returncode == 1

    lines = cp.stdout.split("\n")
    assert lines[-1] == ""
    broken, good, missing = lines[:-1]
    assert broken == ""
    assert good.startswith("<SENTENCE> class->")
    assert missing == ""


def test_cli_lang_override(tmp_path: Path):
    require_grammar("tree_sitter_cpp")
    write(tmp_path / "snippet.inc", "int x;\n")
    cp = run_cli(tmp_path, "annotate", "--lang", "cpp", "--format", "text", "snippet.inc")
    assert cp.returncode == 0, cp.stderr
    assert "x_i:identifier_p:declaration" in cp.stdout


def test_cli_settings_file_in_cwd(tmp_path: Path):
    require_grammar("tree_sitter_cpp")
    write_source(tmp_path / "tokctx.yaml", """
        languages:
          cpp:
            tokenizer: type
    """)
    write(tmp_path / "a.cpp", "int x;\n")
    cp = run_cli(tmp_path, "annotate", "--format", "text", "a.cpp")
    assert cp.returncode == 0, cp.stderr
    assert "%IDENTIFIER%_i:identifier_p:declaration" in cp.stdout


def test_cli_configuration_errors(tmp_path: Path):
    write(tmp_path / "a.py", "x = 1\n")

    cp = run_cli(tmp_path, "annotate", "--config", "missing.yaml", "a.py")
    assert cp.returncode == 2
    assert "Settings file not found" in cp.stderr

    cp = run_cli(tmp_path, "annotate", "--lang", "cobol", "a.py")
    assert cp.returncode == 2
    assert "Unknown language: 'cobol'" in cp.stderr


def test_cli_unreadable_file(tmp_path: Path):
    require_grammar("tree_sitter_python")
    cp = run_cli(tmp_path, "annotate", "nope.py")
    assert cp.returncode == 1
    [outcome] = jlines(cp.stdout)
    assert outcome["ok"] is False
    assert outcome["error"].startswith("cannot read file")
