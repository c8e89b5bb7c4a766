"""Tests for create_ent_stack.core.naming module."""

import pytest

from create_ent_stack.core.errors import InputStreamError
from create_ent_stack.core.naming import (
    PACKAGE_NAME_PATTERN,
    PROMPT_TEXT,
    is_valid_project_name,
    prompt_project_name,
)


def scripted(*lines):
    """Return a read_line callable that replays ``lines`` and records prompts."""
    answers = list(lines)
    prompts = []

    def read_line(prompt):
        prompts.append(prompt)
        if not answers:
            raise EOFError
        return answers.pop(0)

    read_line.prompts = prompts
    return read_line


class TestIsValidProjectName:
    """Tests for the package.json name pattern."""

    @pytest.mark.parametrize("name", [
        "my-app",
        "app",
        "a",
        "my.app_v2",
        "~tilde",
        "123",
        "@scope/pkg",
        "@my-org/my-app",
        "@/pkg",
    ])
    def test_accepts_valid_names(self, name):
        assert is_valid_project_name(name) is True

    @pytest.mark.parametrize("name", [
        "",
        "MyApp",
        "my-App",
        ".hidden",
        "_private",
        "my app",
        "@scope",
        "scope/pkg",
        "my-app\n",
    ])
    def test_rejects_invalid_names(self, name):
        assert is_valid_project_name(name) is False

    def test_pattern_source(self):
        assert PACKAGE_NAME_PATTERN.pattern == (
            r"^(?:@(?:[a-z0-9-*~][a-z0-9-*._~]*)?/)?[a-z0-9-~][a-z0-9-._~]*$"
        )


class TestPromptProjectName:
    """Tests for the interactive prompt loop."""

    def test_accepts_first_valid_answer(self, console):
        read_line = scripted("my-app")
        assert prompt_project_name(read_line, console) == "my-app"
        assert read_line.prompts == [PROMPT_TEXT]
        assert console.file.getvalue() == ""

    def test_reprompts_until_valid(self, console):
        read_line = scripted("", "Bad", ".dot", "good-name")
        assert prompt_project_name(read_line, console) == "good-name"
        assert len(read_line.prompts) == 4

        output = console.file.getvalue()
        assert output.count('Project name must match package.json "name" criteria:') == 3
        assert PACKAGE_NAME_PATTERN.pattern in output

    def test_eof_is_input_stream_error(self, console):
        with pytest.raises(InputStreamError):
            prompt_project_name(scripted(), console)

    def test_os_error_is_input_stream_error(self, console):
        def broken(prompt):
            raise OSError("stdin closed")

        with pytest.raises(InputStreamError, match="stdin closed"):
            prompt_project_name(broken, console)
