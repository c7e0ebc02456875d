import io

import pytest

from clusterconf.assembly.prompt import (
    ScriptedReader,
    StreamReader,
    get_config,
    is_affirmative,
    is_yes,
)
from clusterconf.errors import InputIOError


class Echo:
    def __init__(self): self.lines = []
    def __call__(self, msg="", nl=True): self.lines.append(msg)


def test_blank_answer_returns_default():
    echo = Echo()
    assert get_config(ScriptedReader(["   "]), "Cluster domain", "cluster.local", echo=echo) == "cluster.local"
    assert echo.lines == ["[+] Cluster domain [cluster.local]: "]


def test_answer_is_trimmed():
    assert get_config(ScriptedReader(["  calico \t"]), "Plugin", "canal", echo=Echo()) == "calico"


def test_empty_default_shows_none():
    echo = Echo()
    get_config(ScriptedReader(["x"]), "SSH Address of host (1)", "", echo=echo)
    assert echo.lines == ["[+] SSH Address of host (1) [none]: "]


def test_stream_reader_eof_raises_input_error():
    reader = StreamReader(io.StringIO("first\n"))
    assert get_config(reader, "q", "", echo=Echo()) == "first"
    with pytest.raises(InputIOError):
        get_config(reader, "q", "d", echo=Echo())


def test_scripted_reader_exhausted_raises():
    reader = ScriptedReader([])
    with pytest.raises(InputIOError):
        reader.read_line()


@pytest.mark.parametrize("answer,expected", [
    ("y", True), ("Y", True), ("yes", False), ("n", False), ("", False),
])
def test_is_yes_is_strict(answer, expected):
    assert is_yes(answer) is expected


@pytest.mark.parametrize("answer,expected", [
    ("y", True), ("Yes", True), ("YES", True), (" yes ", True),
    ("no", False), ("n", False), ("nay", False), ("", False), ("yesterday", False),
])
def test_is_affirmative_exact_tokens(answer, expected):
    assert is_affirmative(answer) is expected
