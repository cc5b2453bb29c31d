import io

import pytest

from atomic_commit.errors import WorkflowCancelled
from atomic_commit.review import ConsolePrompter


def _prompter(answers, **kwargs):
    stdout = io.StringIO()
    return ConsolePrompter(stdin=io.StringIO(answers), stdout=stdout, **kwargs), stdout


@pytest.mark.parametrize(
    "answers, default, expected",
    [
        ("\n", True, True),
        ("\n", False, False),
        ("y\n", False, True),
        ("YES\n", False, True),
        ("n\n", True, False),
        ("no\n", True, False),
    ],
)
def test_confirm_answers(answers, default, expected):
    prompter, _ = _prompter(answers)
    assert prompter.confirm("Commit?", default) is expected


def test_confirm_shows_default_in_prompt():
    prompter, stdout = _prompter("\n\n")
    prompter.confirm("Commit?", True)
    prompter.confirm("Commit?", False)
    assert stdout.getvalue() == "Commit? [Y/n] Commit? [y/N] "


def test_confirm_asks_again_on_unrecognised_answer():
    prompter, stdout = _prompter("maybe\ny\n")
    assert prompter.confirm("Commit?", False) is True
    assert "Please answer 'y' or 'n'." in stdout.getvalue()


def test_closed_input_cancels():
    prompter, _ = _prompter("")
    with pytest.raises(WorkflowCancelled):
        prompter.confirm("Commit?", True)
    with pytest.raises(WorkflowCancelled):
        prompter.read_line(">>> ")


def test_read_line_returns_stripped_text():
    prompter, stdout = _prompter("  focus only on the parser changes  \n")
    assert prompter.read_line(">>> ") == "focus only on the parser changes"
    assert stdout.getvalue() == ">>> "


def test_assume_yes_never_reads_input():
    prompter, stdout = _prompter("", assume_yes=True)
    assert prompter.confirm("Commit?", False) is True
    assert stdout.getvalue() == ""
