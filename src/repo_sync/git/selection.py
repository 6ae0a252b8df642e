"""Remote and default-branch selection."""

from collections.abc import Sequence

from repo_sync.core.exceptions import GuardFailure
from repo_sync.prompts import Prompter


def pick_by_priority(candidates: Sequence[str], priority: Sequence[str]) -> str | None:
    """Return the first name in ``priority`` that appears in ``candidates``.

    The order of ``candidates`` does not matter.
    """
    available = set(candidates)
    for name in priority:
        if name in available:
            return name
    return None


def choose_exact(prompter: Prompter, question: str, options: list[str], what: str) -> str:
    """Ask the operator to pick one of ``options``; anything else is fatal."""
    answer = prompter.choose(question, options)
    if answer not in options:
        raise GuardFailure(
            f"'{answer}' is not one of the listed {what}s",
            details={"answer": answer, "options": options},
        )
    return answer


def select_remote(remotes: list[str], primary: str, prompter: Prompter) -> str:
    """Pick the target remote from a non-empty remote list."""
    if primary in remotes:
        return primary
    return choose_exact(prompter, "Which remote should be used?", remotes, "remote")


def select_default_branch(
    branches: list[str],
    priority: Sequence[str],
    prompter: Prompter,
) -> str:
    """Pick the authoritative branch from the remote's branch list."""
    found = pick_by_priority(branches, priority)
    if found is not None:
        return found
    return choose_exact(
        prompter,
        "No default branch recognised. Which branch should be synced?",
        branches,
        "branch",
    )
