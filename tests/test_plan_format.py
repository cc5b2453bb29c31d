import pytest

from atomic_commit.domain import Action
from atomic_commit.errors import PlanFormatError
from atomic_commit.plan_format import parse_commit_plan, render_plan_summary

from conftest import plan_json

PATCH = (
    "diff --git a/app.py b/app.py\n"
    "--- a/app.py\n"
    "+++ b/app.py\n"
    "@@ -1,2 +1,2 @@\n"
    " def greet():\n"
    "-    return 'hello'\n"
    "+    return 'hi'"
)


def test_parse_commit_plan_keeps_action_order():
    plan = parse_commit_plan(
        plan_json(
            ("app.py", PATCH, "fix(app): shorten greeting"),
            ("README.md", "diff --git a/README.md b/README.md\n", "docs(readme): expand intro"),
        )
    )

    assert plan.actions == [
        Action(file_path="app.py", patch=PATCH, commit_message="fix(app): shorten greeting"),
        Action(
            file_path="README.md",
            patch="diff --git a/README.md b/README.md\n",
            commit_message="docs(readme): expand intro",
        ),
    ]


def test_parse_commit_plan_rejects_fenced_json():
    text = "```json\n" + plan_json(("app.py", PATCH, "fix(app): x")) + "\n```"

    with pytest.raises(PlanFormatError, match="failed to unmarshal commit plan"):
        parse_commit_plan(text)


def test_parse_commit_plan_accepts_empty_plan():
    assert parse_commit_plan('{"commitPlan": []}').actions == []


@pytest.mark.parametrize(
    "text, message",
    [
        ("not json at all", "failed to unmarshal commit plan"),
        ('{"commitPlan": [', "failed to unmarshal commit plan"),
        ("[]", "must be a JSON object"),
        ('{"plan": []}', "missing the 'commitPlan' list"),
        ('{"commitPlan": {"filePath": "x"}}', "missing the 'commitPlan' list"),
        ('{"commitPlan": ["x"]}', "entry 1 is not an object"),
        ('{"commitPlan": [{"filePath": "x", "patch": "p"}]}', "no string 'commitMessage'"),
        (
            '{"commitPlan": [{"filePath": "x", "patch": 3, "commitMessage": "m"}]}',
            "no string 'patch'",
        ),
        ("Here is your plan: {\"commitPlan\": []}", "failed to unmarshal commit plan"),
    ],
)
def test_parse_commit_plan_rejects_malformed_payloads(text, message):
    with pytest.raises(PlanFormatError, match=message):
        parse_commit_plan(text)


def test_action_normalized_patch_appends_missing_newline():
    action = Action(file_path="app.py", patch=PATCH, commit_message="m")
    assert action.normalized_patch() == PATCH + "\n"


def test_action_normalized_patch_is_idempotent():
    action = Action(file_path="app.py", patch=PATCH + "\n", commit_message="m")
    assert action.normalized_patch() == PATCH + "\n"
    again = Action(file_path="app.py", patch=action.normalized_patch(), commit_message="m")
    assert again.normalized_patch() == action.normalized_patch()


def test_render_plan_summary_lists_messages_only():
    plan = parse_commit_plan(
        plan_json(
            ("app.py", PATCH, "fix(app): shorten greeting"),
            ("README.md", "diff\n", "docs(readme): expand intro"),
        )
    )

    assert render_plan_summary(plan) == [
        "Commit Plan:",
        "\tfix(app): shorten greeting",
        "\tdocs(readme): expand intro",
    ]
