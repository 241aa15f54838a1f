from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigurationError
from .facade import AnnotatedTokenizer, AnnotationOutcome
from .registry import language_for_path, list_languages
from .settings import Settings, load_settings
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tokctx",
        description="Token streams annotated with syntax context",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="debug logging on stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_annotate = sub.add_parser("annotate", help="annotate source files (JSON lines or text)")
    sp_annotate.add_argument("paths", nargs="+", type=Path, help="source files")
    sp_annotate.add_argument(
        "--lang",
        help="language for every file (default: detected from the extension)",
    )
    sp_annotate.add_argument(
        "--config",
        type=Path,
        help="settings file (default: ./tokctx.yaml when present)",
    )
    sp_annotate.add_argument(
        "--format",
        dest="output",
        choices=["jsonl", "text"],
        default="jsonl",
        help="jsonl: one JSON object per file; text: annotated token texts, one line per file (empty when it fails)",
    )

    sub.add_parser("languages", help="list supported languages (JSON)")
    return p


def _setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    log = logging.getLogger("tokctx")
    log.handlers[:] = [handler]
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _outcome_json(outcome: AnnotationOutcome) -> Dict[str, Any]:
    if outcome.tokens is None:
        return {"path": outcome.source, "ok": False, "error": outcome.error}
    return {
        "path": outcome.source,
        "ok": True,
        "tokens": [
            {"pos": pos, "text": token.text, "kind": token.kind}
            for pos, token in outcome.tokens.items()
        ],
    }


def _run_annotate(paths: List[Path], lang: Optional[str], settings: Settings, output: str) -> int:
    tokenizers: Dict[str, AnnotatedTokenizer] = {}
    failed = False

    for path in paths:
        name = lang or language_for_path(path)
        if name is None:
            sys.stderr.write(f"{path}: unknown language, use --lang\n")
            outcome = AnnotationOutcome(str(path), error="unknown language")
        else:
            if name not in tokenizers:
                tokenizers[name] = AnnotatedTokenizer.for_language(name, settings)
            # --lang may name files the language's filter would reject
            outcome = tokenizers[name].annotate_path(path)

        failed = failed or not outcome.ok
        if output == "jsonl":
            sys.stdout.write(json.dumps(_outcome_json(outcome), ensure_ascii=False) + "\n")
        else:
            # Failed files keep their line, empty
            texts = outcome.tokens.texts() if outcome.tokens is not None else []
            sys.stdout.write(" ".join(texts) + "\n")

    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(ns.verbose))

    try:
        if ns.cmd == "languages":
            sys.stdout.write(json.dumps({"languages": list_languages()}) + "\n")
            return 0

        if ns.cmd == "annotate":
            settings = load_settings(ns.config)
            return _run_annotate(ns.paths, ns.lang, settings, ns.output)

    except ConfigurationError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
