"""
Span-overlay annotation of token streams with syntax context.

Each token's text is extended with the kind of the deepest syntax node that
contains it and the kind of that node's parent. The deepest node wins because
nodes are visited in pre-order and every visit overwrites the tokens in its
span: a child is always visited after its parent.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable

from .errors import ConfigurationError
from .model import PositionedTokens, Token
from .syntax import SyntaxNode, walk_preorder

__all__ = [
    "annotate",
    "AnnotationFormatter",
    "IgnorablePredicate",
    "compact_format",
    "braced_format",
    "FORMATTERS",
    "get_formatter",
    "never_ignorable",
    "is_whitespace_token",
    "kinds_predicate",
    "WHITESPACE_KIND",
    "WHITESPACE_PREFIX",
]

AnnotationFormatter = Callable[[str, str, str], str]
IgnorablePredicate = Callable[[Token], bool]

# Kind and text prefix of synthesized whitespace tokens.
WHITESPACE_KIND = "WHITESPACE"
WHITESPACE_PREFIX = "WS_"


# ============================================================================
# Formatters
# ============================================================================

def compact_format(text: str, node_kind: str, parent_kind: str) -> str:
    return f"{text}_i:{node_kind}_p:{parent_kind}"


def braced_format(text: str, node_kind: str, parent_kind: str) -> str:
    return f"{text}->{{in:{node_kind},parent:{parent_kind}}}"


FORMATTERS: Dict[str, AnnotationFormatter] = {
    "compact": compact_format,
    "braced": braced_format,
}


def get_formatter(name: str) -> AnnotationFormatter:
    try:
        return FORMATTERS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown annotation format: '{name}'. Supported: {', '.join(sorted(FORMATTERS))}"
        ) from None


# ============================================================================
# Ignorable-token predicates
# ============================================================================

def never_ignorable(token: Token) -> bool:
    return False


def is_whitespace_token(token: Token) -> bool:
    return token.kind == WHITESPACE_KIND


def kinds_predicate(kinds: Iterable[str]) -> IgnorablePredicate:
    """Predicate that treats tokens of the given kinds as ignorable."""
    frozen = frozenset(kinds)

    def _is_ignorable(token: Token) -> bool:
        return token.kind in frozen

    return _is_ignorable


# ============================================================================
# Overlay
# ============================================================================

def annotate(
    baseline: PositionedTokens,
    tree: SyntaxNode,
    *,
    is_ignorable: IgnorablePredicate = never_ignorable,
    formatter: AnnotationFormatter = compact_format,
) -> PositionedTokens:
    """
    Overlay syntax context from `tree` onto `baseline`.

    Args:
        baseline: Position-keyed tokens of the buffer, sentinels included
        tree: Root of the syntax tree, spans in the same offset space
        is_ignorable: Tokens passing this predicate are copied unchanged
        formatter: Renders (text, node kind, parent kind) into the new text

    Returns:
        New stream with exactly the keys of `baseline`

    Baseline and tree must describe the same buffer. That is not verified:
    mismatched inputs give meaningless annotations over the same key set.
    """
    annotated: Dict[int, Token] = dict(baseline.items())

    for node in walk_preorder(tree):
        if node.length <= 0:
            continue
        node_kind = node.kind
        parent_kind = node.parent_kind
        for position, token in baseline.span(node.start, node.end):
            if token.is_sentinel or is_ignorable(token):
                continue
            # Always derived from the baseline text: a deeper node replaces,
            # never extends, an earlier annotation.
            annotated[position] = token.with_text(formatter(token.text, node_kind, parent_kind))

    if len(annotated) != len(baseline):
        raise RuntimeError(
            f"Annotation changed the token count: {len(baseline)} -> {len(annotated)}"
        )
    return PositionedTokens(annotated)
