"""Unit tests for the interactive choosers (cubecli.prompt)."""

from __future__ import annotations

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from cubecli.prompt import RichChooser, StaticChooser

pytestmark = pytest.mark.unit

CHOICES = ["postgres", "mysql", "bigquery"]


@pytest.fixture
def quiet_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


class TestRichChooser:
    def test_answer_by_number(self, quiet_console):
        with patch("cubecli.prompt.Prompt.ask", return_value="2") as ask:
            answer = RichChooser(quiet_console).choose("Select database", CHOICES)

        assert answer == "mysql"
        accepted = ask.call_args.kwargs["choices"]
        assert "1" in accepted and "3" in accepted
        assert "bigquery" in accepted

    def test_answer_by_name(self, quiet_console):
        with patch("cubecli.prompt.Prompt.ask", return_value="bigquery"):
            answer = RichChooser(quiet_console).choose("Select database", CHOICES)
        assert answer == "bigquery"

    def test_lists_every_choice(self, quiet_console):
        with patch("cubecli.prompt.Prompt.ask", return_value="1"):
            RichChooser(quiet_console).choose("Select database", CHOICES)

        printed = quiet_console.file.getvalue()
        assert "Select database" in printed
        for choice in CHOICES:
            assert choice in printed

    def test_reads_from_input(self, quiet_console):
        with patch("builtins.input", return_value="3"):
            answer = RichChooser(quiet_console).choose("Select database", CHOICES)
        assert answer == "bigquery"

    def test_no_choices(self, quiet_console):
        with pytest.raises(ValueError):
            RichChooser(quiet_console).choose("Select database", [])


class TestStaticChooser:
    def test_returns_answer_and_records(self):
        chooser = StaticChooser("mysql")
        assert chooser.choose("Select database", CHOICES) == "mysql"
        assert chooser.calls == [("Select database", CHOICES)]

    def test_answer_must_be_a_choice(self):
        with pytest.raises(ValueError):
            StaticChooser("oracle").choose("Select database", CHOICES)
