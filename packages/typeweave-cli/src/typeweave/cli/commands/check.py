from pathlib import Path

import typer

from typeweave.analysis import check_completion
from typeweave.cli.factories import load_module, make_config
from typeweave.common import bus
from typeweave.spec import CheckProblem

_ISSUE_MESSAGES = {
    CheckProblem.NOT_COMPLETE: "check.issue.not_complete",
    CheckProblem.CHANGED_CODE: "check.issue.changed_code",
    CheckProblem.CHANGED_COMMENTS: "check.issue.changed_comments",
}


def check_command(
    original: Path = typer.Argument(..., help="The file with annotation holes."),
    completed: Path = typer.Argument(..., help="The model's completion of it."),
    allow_comment_changes: bool = typer.Option(
        False,
        "--allow-comment-changes",
        help="Accept completions that only added or removed comments.",
    ),
):
    config = make_config()
    check = check_completion(load_module(original), load_module(completed), config)

    problems = list(check.problems)
    if allow_comment_changes and CheckProblem.CHANGED_COMMENTS in problems:
        problems.remove(CheckProblem.CHANGED_COMMENTS)
        bus.warning("check.issue.changed_comments_allowed")

    for problem in problems:
        bus.error(_ISSUE_MESSAGES[problem])

    if problems:
        bus.error("check.run.fail", score=check.score)
        raise typer.Exit(code=1)
    bus.success("check.run.success", score=check.score)
