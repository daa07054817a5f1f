"""Doc comment association and text normalisation.

Grouping follows the Go parser: comments on consecutive lines form one
group, and a group is a node's doc comment when its last line sits directly
above the node's first line. A comment trailing code on the same line never
starts or joins a doc group.

Text follows ``go/ast.CommentGroup.Text``.
"""

from __future__ import annotations

import re
from typing import Any

from godecl.extract.source import SpanSource

# Anonymous statement terminators the Go grammar keeps in the tree
_TERMINATORS = frozenset({"\n", "\r\n", "\x00"})

# "//line ", "//extern ", "//export ", or "//[a-z0-9]+:[a-z0-9]" (tool directives)
_DIRECTIVE_RE = re.compile(r"^(?:line |extern |export |[a-z0-9]+:[a-z0-9])")


def _prev_token(node: Any) -> Any:
    prev = node.prev_sibling
    while prev is not None and not prev.is_named and prev.type in _TERMINATORS:
        prev = prev.prev_sibling
    return prev


def _is_trailing(comment: Any) -> bool:
    """True when the comment shares its first line with preceding code."""
    before = _prev_token(comment)
    return (
        before is not None
        and before.type != "comment"
        and before.end_point[0] == comment.start_point[0]
    )


def leading_comment_nodes(node: Any) -> list[Any]:
    """Comment nodes forming ``node``'s doc comment, in source order."""
    group: list[Any] = []
    next_row = node.start_point[0]
    prev = _prev_token(node)
    while prev is not None and prev.type == "comment":
        end_row = prev.end_point[0]
        if group:
            adjacent = end_row in (next_row - 1, next_row)
        else:
            adjacent = end_row == next_row - 1
        if not adjacent or _is_trailing(prev):
            break
        group.append(prev)
        next_row = prev.start_point[0]
        prev = _prev_token(prev)
    group.reverse()
    return group


def comment_text(raw_comments: list[str]) -> str:
    """Doc text of a comment group.

    Removes comment markers and the first space of a line comment, drops tool
    directives, trims trailing whitespace, removes leading and trailing blank
    lines and collapses interior blank runs. Non-empty results end in a newline.
    """
    lines: list[str] = []
    for c in raw_comments:
        if c.startswith("//"):
            c = c[2:]
            if c.startswith(" "):
                c = c[1:]
            elif _DIRECTIVE_RE.match(c):
                continue
        elif c.startswith("/*"):
            c = c[2:-2] if c.endswith("*/") else c[2:]
        lines.extend(line.rstrip(" \t\r\n") for line in c.split("\n"))

    kept: list[str] = []
    for line in lines:
        if line or (kept and kept[-1]):
            kept.append(line)

    if kept and kept[-1]:
        kept.append("")
    return "\n".join(kept)


def doc_text(node: Any, source: SpanSource) -> str:
    """Doc comment text of ``node``, or "" when it has none.

    Raises:
        SpanReadError: A comment span cannot be read back.
    """
    comments = leading_comment_nodes(node)
    if not comments:
        return ""
    return comment_text([source.read_span(c.start_byte, c.end_byte) for c in comments])
