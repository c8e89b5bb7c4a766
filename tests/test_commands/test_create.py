"""Tests for the create-ent-stack command."""

import json
from pathlib import Path

from create_ent_stack.cli import main
from create_ent_stack.commands.create import create_cmd
from create_ent_stack.core.config import HOME_ENV, PackagingStrategy
from create_ent_stack.ui import Symbols


class TestCreateCommand:
    """Tests for `create-ent-stack`."""

    def test_entry_point_is_create_command(self):
        assert main is create_cmd

    def test_scaffolds_project(self, cli_runner, make_install_root, tmp_path):
        root = make_install_root(PackagingStrategy.TAR)

        with cli_runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
            result = cli_runner.invoke(create_cmd, [], input="my-app\n", env={HOME_ENV: str(root)})

            assert result.exit_code == 0, result.output
            assert "Enter your project name:" in result.output
            assert "Project scaffolded at:" in result.output
            assert "Some files were not personalized" not in result.output

            project = Path(cwd) / "my-app"
            package = json.loads((project / "package.json").read_text())
            assert package["name"] == "my-app"
            assert (project / "README.md").is_file()
            assert (project / ".gitignore").is_file()

    def test_invalid_name_reprompts(self, cli_runner, make_install_root, tmp_path):
        root = make_install_root()

        with cli_runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
            result = cli_runner.invoke(
                create_cmd, [], input="My App\n.hidden\nok-app\n", env={HOME_ENV: str(root)}
            )

            assert result.exit_code == 0, result.output
            assert result.output.count('Project name must match package.json "name" criteria:') == 2
            assert (Path(cwd) / "ok-app").is_dir()

    def test_closed_input_exits_1(self, cli_runner, make_install_root, tmp_path):
        root = make_install_root()

        with cli_runner.isolated_filesystem(temp_dir=tmp_path):
            result = cli_runner.invoke(create_cmd, [], input="", env={HOME_ENV: str(root)})

        assert result.exit_code == 1
        assert "Error reading project name" in result.output

    def test_corrupt_archive_exits_1(self, cli_runner, make_install_root, tmp_path):
        root = make_install_root(PackagingStrategy.ZIP)
        (root / "source.zip").write_bytes(b"not a zip")

        with cli_runner.isolated_filesystem(temp_dir=tmp_path):
            result = cli_runner.invoke(create_cmd, [], input="my-app\n", env={HOME_ENV: str(root)})

        assert result.exit_code == 1
        assert "Error copying source directory" in result.output
        assert "Project scaffolded at:" not in result.output

    def test_project_path_taken_by_file_exits_1(self, cli_runner, make_install_root, tmp_path):
        root = make_install_root()

        with cli_runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
            (Path(cwd) / "my-app").write_text("occupied")
            result = cli_runner.invoke(create_cmd, [], input="my-app\n", env={HOME_ENV: str(root)})

        assert result.exit_code == 1
        assert "Error copying source directory" in result.output
        assert "Traceback" not in result.output

    def test_degraded_run_still_succeeds(self, cli_runner, tmp_path):
        root = tmp_path / "install"
        (root / "source").mkdir(parents=True)
        (root / "source/package.json").write_text('{"name": "t"}')

        with cli_runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
            result = cli_runner.invoke(create_cmd, [], input="my-app\n", env={HOME_ENV: str(root)})

            assert result.exit_code == 0, result.output
            assert "Project scaffolded at:" in result.output
            assert "Some files were not personalized" in result.output
            assert "backend .env: file not found" in result.output
            assert f"{Symbols.SKIPPED} backend .env" in result.output
            assert (Path(cwd) / "my-app/README.md").is_file()

    def test_version_option(self, cli_runner):
        result = cli_runner.invoke(create_cmd, ["--version"])
        assert result.exit_code == 0
        assert "create-ent-stack" in result.output

    def test_rejects_arguments(self, cli_runner):
        result = cli_runner.invoke(create_cmd, ["my-app"])
        assert result.exit_code == 2
