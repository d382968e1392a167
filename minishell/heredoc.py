"""Reading heredoc bodies and making them readable as file descriptors."""

from __future__ import annotations

import os
import tempfile
from typing import Iterable, Iterator, Mapping, Optional

from .syntax_tree import Node, Redirection, iter_redirections
from .tokens import TokenType
from .variables import expand_heredoc_line

INTERRUPTED_STATUS = 130


class HeredocInterrupted(Exception):
    """Reading a heredoc was interrupted; ``status`` is the exit status to report."""

    def __init__(self, status: int = INTERRUPTED_STATUS) -> None:
        super().__init__("heredoc interrupted")
        self.status = status


def collect_heredoc(
    delimiter: str,
    lines: Iterable[str],
    env: Mapping[str, Optional[str]],
    exit_status: int = 0,
    expand: bool = True,
) -> str:
    """Read lines up to ``delimiter`` or end of input and return the body.

    Each line ends with a newline in the result. With ``expand`` set,
    variables in each line are expanded.
    """
    body: list[str] = []
    source: Iterator[str] = iter(lines)
    try:
        for raw in source:
            line = raw[:-1] if raw.endswith("\n") else raw
            if line == delimiter:
                break
            if expand:
                line = expand_heredoc_line(line, env, exit_status)
            body.append(line + "\n")
    except KeyboardInterrupt as exc:
        raise HeredocInterrupted() from exc
    return "".join(body)


def open_heredoc(content: str) -> int:
    """Return a descriptor open for reading, positioned at the start of ``content``."""
    with tempfile.TemporaryFile() as handle:
        handle.write(content.encode())
        handle.flush()
        handle.seek(0)
        return os.dup(handle.fileno())


def prepare_heredocs(
    tree: Optional[Node],
    lines: Iterable[str],
    env: Mapping[str, Optional[str]],
    exit_status: int = 0,
) -> list[Redirection]:
    """Read the body of every heredoc in the tree, left to right.

    Each heredoc's ``fd`` is set to a readable descriptor of its body, with
    expansion unless its delimiter was quoted. Returns the prepared
    redirections. On interruption the descriptors already opened are closed
    and HeredocInterrupted is raised.
    """
    source = iter(lines)
    prepared: list[Redirection] = []
    try:
        for redirection in iter_redirections(tree):
            if redirection.type is not TokenType.HEREDOC:
                continue
            content = collect_heredoc(
                redirection.filename,
                source,
                env,
                exit_status,
                not redirection.quoted,
            )
            redirection.fd = open_heredoc(content)
            prepared.append(redirection)
    except HeredocInterrupted:
        for redirection in prepared:
            if redirection.fd is not None:
                os.close(redirection.fd)
                redirection.fd = None
        raise
    return prepared