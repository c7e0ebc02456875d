# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clusterconf/assembly/prompt.py

from __future__ import annotations

import sys
from typing import Callable, Iterable, List, Optional, Protocol, TextIO

import typer

from clusterconf.errors import InputIOError

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


class LineReader(Protocol):
    """
    Line-based input source. Must raise InputIOError (or let the
    underlying OSError through) when no further line can be read.
    """

    def read_line(self) -> str: ...


class StreamReader:
    """Reads answers from a text stream, stdin by default."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream if stream is not None else sys.stdin

    def read_line(self) -> str:
        line = self._stream.readline()
        if line == "":
            raise InputIOError("unexpected end of input while reading answer")
        return line


class ScriptedReader:
    """Replays a fixed list of answers; used for non-interactive runs."""

    def __init__(self, answers: Iterable[str]):
        self._answers: List[str] = list(answers)
        self.consumed = 0

    def read_line(self) -> str:
        if self.consumed >= len(self._answers):
            raise InputIOError("no more scripted answers")
        line = self._answers[self.consumed]
        self.consumed += 1
        return line + "\n"


def get_config(
    reader: LineReader,
    text: str,
    default: str,
    echo: Callable[..., None] = typer.echo,
) -> str:
    """
    Ask one question. A blank answer selects the default. Read errors
    propagate unchanged.
    """
    echo(f"[+] {text} [{default or 'none'}]: ", nl=False)
    answer = reader.read_line().strip()
    if answer:
        return answer
    return default


def is_yes(answer: str) -> bool:
    """Strict y/Y check used by the role and boolean service prompts."""
    return answer in ("y", "Y")


def is_affirmative(answer: str) -> bool:
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS
