"""Tests for overwrite policy decisions."""

from __future__ import annotations

import pytest

from edkit.files.errors import DestinationExists
from edkit.files.policy import check_overwrite, decide_overwrite
from edkit.files.prompt import AlwaysNo, AlwaysYes, ScriptedPrompter


@pytest.mark.parametrize(
    ("policy", "exists", "expected"),
    [
        ("ask", False, "proceed"),
        ("force", False, "proceed"),
        ("skip", False, "proceed"),
        ("ask", True, "ask"),
        ("force", True, "proceed"),
        ("skip", True, "refuse"),
    ],
)
def test_decide_overwrite(policy, exists, expected):
    assert decide_overwrite(policy, exists) == expected


def test_check_overwrite_absent_never_prompts():
    prompter = ScriptedPrompter([])
    check_overwrite("ask", "/tmp/x", exists=False, prompter=prompter)
    assert prompter.asked == []


def test_check_overwrite_ask_confirmed():
    check_overwrite("ask", "/tmp/x", exists=True, prompter=AlwaysYes())


def test_check_overwrite_ask_declined():
    with pytest.raises(DestinationExists, match="/tmp/x"):
        check_overwrite("ask", "/tmp/x", exists=True, prompter=AlwaysNo())


def test_check_overwrite_skip_ignores_prompter():
    prompter = ScriptedPrompter([])
    with pytest.raises(DestinationExists):
        check_overwrite("skip", "/tmp/x", exists=True, prompter=prompter)
    assert prompter.asked == []
