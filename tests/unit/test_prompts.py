"""Tests for the console prompter."""

import pytest
from click.testing import CliRunner

from repo_sync.prompts import ClickPrompter


def answer(prompt_input: str, options: list[str]) -> tuple[str, str]:
    """Run ``choose`` with ``prompt_input`` on stdin; return answer and output."""
    runner = CliRunner()
    with runner.isolation(input=prompt_input) as streams:
        result = ClickPrompter().choose("Which remote?", options)
        output = streams[0].getvalue().decode()
    return result, output


@pytest.mark.unit
class TestClickPrompter:
    """Tests for ClickPrompter."""

    def test_choose_lists_options(self) -> None:
        result, output = answer("mirror\n", ["fork", "mirror"])
        assert result == "mirror"
        assert "  - fork" in output
        assert "  - mirror" in output

    def test_choose_strips_surrounding_whitespace(self) -> None:
        result, _ = answer("  mirror \n", ["fork", "mirror"])
        assert result == "mirror"

    def test_choose_keeps_case(self) -> None:
        result, _ = answer("Mirror\n", ["fork", "mirror"])
        assert result == "Mirror"

    @pytest.mark.parametrize("typed, expected", [("y\n", True), ("n\n", False), ("\n", False)])
    def test_confirm_defaults_to_no(self, typed: str, expected: bool) -> None:
        with CliRunner().isolation(input=typed):
            assert ClickPrompter().confirm("Add remote?") is expected
