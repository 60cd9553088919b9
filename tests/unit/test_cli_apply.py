"""Unit tests for the CLI apply command.

The transport is replaced with the in-memory one so that every exit path of
`gcms-migrate apply` can be exercised without a backend.
"""

import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner
import pytest

from gcms_migrate.cli import main
from gcms_migrate.cli.apply import apply_command
from gcms_migrate.core import MigrationStatus, TransportConfigurationError
from gcms_migrate.transport import MockTransport

BLOG_PLAN = """
name: blog
steps:
  - createModel: {apiId: Post, displayName: Post}
    fields:
      - addSimpleField: {apiId: title, type: STRING}
  - updateModel: {apiId: Author}
"""


@pytest.fixture
def plan_file(tmp_path):
    """Write the blog plan to a temporary file."""
    path = tmp_path / "blog.yaml"
    path.write_text(BLOG_PLAN, encoding="utf-8")
    return path


@pytest.fixture
def mock_settings():
    """Replace CLI settings with fast polling."""
    with patch("gcms_migrate.cli.apply.settings") as settings:
        settings.poll_interval_seconds = 0
        settings.run_timeout_seconds = 5
        yield settings


@pytest.fixture
def transport(mock_settings):
    """Route the CLI to an in-memory transport."""
    mock_transport = MockTransport()
    with patch(
        "gcms_migrate.cli.apply.create_transport", return_value=mock_transport
    ) as mock_create:
        yield mock_transport
        mock_create.assert_called_once_with(mock_settings.transport)


class TestApplyCommandOptions:
    """Test argument parsing."""

    @patch("gcms_migrate.cli.apply._apply_implementation", new_callable=AsyncMock)
    def test_default_args(self, mock_impl):
        """Test apply command with default arguments."""
        CliRunner().invoke(apply_command, [])

        mock_impl.assert_called_once_with(
            "migration.yaml", False, False, "table", False, False
        )

    @patch("gcms_migrate.cli.apply._apply_implementation", new_callable=AsyncMock)
    def test_all_options(self, mock_impl):
        """Test apply command with all options specified."""
        CliRunner().invoke(
            apply_command,
            ["blog.yaml", "--dry-run", "--background", "--format", "json", "-v"],
        )

        mock_impl.assert_called_once_with(
            "blog.yaml", True, True, "json", True, False
        )

    def test_group_lists_apply(self):
        """Test that apply is registered on the command group."""
        result = CliRunner().invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "apply" in result.output


class TestApplyErrors:
    """Test exit codes of failing applies."""

    def test_file_not_found(self):
        """Test apply with non-existent file."""
        result = CliRunner().invoke(apply_command, ["nonexistent-plan.yaml"])

        assert result.exit_code == 2
        assert "not found" in result.output.lower()

    def test_invalid_plan(self, tmp_path):
        """Test that plan errors exit 1 and name the step."""
        path = tmp_path / "bad.yaml"
        path.write_text("steps:\n  - dropTable: Post\n", encoding="utf-8")

        result = CliRunner().invoke(apply_command, [str(path)])

        assert result.exit_code == 1
        assert "Invalid plan" in result.output
        assert "Step 1" in result.output

    def test_invalid_plan_json(self, tmp_path):
        """Test the JSON error report."""
        path = tmp_path / "bad.yaml"
        path.write_text("steps: []\n", encoding="utf-8")

        result = CliRunner().invoke(apply_command, [str(path), "--format", "json"])

        assert result.exit_code == 1
        report = json.loads(result.output)
        assert report["status"] == "failed"
        assert report["error_type"] == "invalid_plan"

    def test_nothing_to_submit(self, tmp_path, transport):
        """Test that a plan without effective changes exits 1."""
        path = tmp_path / "noop.yaml"
        path.write_text("steps:\n  - updateModel: {apiId: Post}\n", encoding="utf-8")

        result = CliRunner().invoke(apply_command, [str(path)])

        assert result.exit_code == 1
        assert "Invalid migration" in result.output
        assert transport.submissions == {}

    def test_transport_configuration_error(self, plan_file, mock_settings):
        """Test that transport errors exit 3."""
        with patch(
            "gcms_migrate.cli.apply.create_transport",
            side_effect=TransportConfigurationError("Auth token is required"),
        ):
            result = CliRunner().invoke(apply_command, [str(plan_file), "-v"])

        assert result.exit_code == 3
        assert "Auth token is required" in result.output
        assert "Suggestions:" in result.output

    def test_internal_error(self, plan_file):
        """Test that unexpected failures exit 4."""
        with patch(
            "gcms_migrate.cli.apply.load_plan", side_effect=RuntimeError("kaboom")
        ):
            result = CliRunner().invoke(apply_command, [str(plan_file)])

        assert result.exit_code == 4
        assert "Internal error: kaboom" in result.output


class TestApplyDryRun:
    """Test dry-run output."""

    def test_dry_run_table(self, plan_file):
        """Test plain-text dry-run output."""
        result = CliRunner().invoke(apply_command, [str(plan_file), "--dry-run"])

        assert result.exit_code == 0
        assert "Dry-run results" in result.output
        assert "1. createModel: Post" in result.output
        assert "2. createSimpleField: Post.title" in result.output
        assert "Summary: 2 changes, 1 updates without effect skipped" in result.output

    def test_dry_run_table_names_migration(self, plan_file):
        """Test that plain-text output shows the migration name like the rich one."""
        result = CliRunner().invoke(apply_command, [str(plan_file), "--dry-run"])

        assert result.exit_code == 0
        assert f"File: {plan_file}" in result.output
        assert "Migration: blog" in result.output

    def test_dry_run_rich_table(self, plan_file):
        """Test the rich dry-run table."""
        result = CliRunner().invoke(
            apply_command, [str(plan_file), "--dry-run", "--force-colors"]
        )

        assert result.exit_code == 0
        assert "createSimpleField" in result.output

    def test_dry_run_json(self, plan_file):
        """Test JSON dry-run output."""
        result = CliRunner().invoke(
            apply_command, [str(plan_file), "--dry-run", "--format", "json"]
        )

        assert result.exit_code == 0
        report = json.loads(result.output)
        assert report["status"] == "dry_run"
        assert report["migration"] == "blog"
        assert report["changes"][1] == {
            "createSimpleField": {
                "apiId": "title",
                "modelApiId": "Post",
                "type": "STRING",
                "formRenderer": "GCMS_SINGLE_LINE",
            }
        }
        assert report["summary"] == {"change_count": 2, "skipped_count": 1}

    def test_dry_run_compact(self, plan_file):
        """Test compact dry-run output."""
        result = CliRunner().invoke(
            apply_command, [str(plan_file), "--dry-run", "--format", "compact"]
        )

        assert result.exit_code == 0
        assert "DRY-RUN (changes=2, skipped=1)" in result.output

    def test_dry_run_submits_nothing(self, plan_file):
        """Test that dry-run never creates a transport."""
        with patch("gcms_migrate.cli.apply.create_transport") as mock_create:
            CliRunner().invoke(apply_command, [str(plan_file), "--dry-run"])

        mock_create.assert_not_called()


class TestApplyRun:
    """Test submitting plans."""

    def test_successful_apply(self, plan_file, transport):
        """Test a foreground apply that succeeds."""
        result = CliRunner().invoke(apply_command, [str(plan_file)])

        assert result.exit_code == 0
        assert "Migration successful" in result.output
        assert "Changes: 2" in result.output
        assert len(transport.last_submission) == 2
        assert transport.closed

    def test_failed_migration_exits_1(self, plan_file, transport):
        """Test that a migration failed by the backend exits 1."""
        transport.final_status = MigrationStatus.FAILED
        transport.errors = [{"message": "apiId Post already exists"}]

        result = CliRunner().invoke(apply_command, [str(plan_file)])

        assert result.exit_code == 1
        assert "Migration failed" in result.output
        assert "apiId Post already exists" in result.output

    def test_background_apply(self, plan_file, transport):
        """Test that a background apply reports the queued migration."""
        transport.get_migration = AsyncMock()

        result = CliRunner().invoke(apply_command, [str(plan_file), "--background"])

        assert result.exit_code == 0
        assert "Migration submitted" in result.output
        assert "QUEUED" in result.output
        transport.get_migration.assert_not_called()

    def test_apply_json(self, plan_file, transport):
        """Test JSON apply output."""
        result = CliRunner().invoke(apply_command, [str(plan_file), "--format", "json"])

        assert result.exit_code == 0
        report = json.loads(result.output)
        assert report["status"] == "SUCCESS"
        assert report["migration"]["id"] == "mock-1"
        assert report["migration"]["name"] == "blog"
        assert report["summary"]["change_count"] == 2

    def test_apply_compact(self, plan_file, transport):
        """Test compact apply output."""
        result = CliRunner().invoke(
            apply_command, [str(plan_file), "--format", "compact"]
        )

        assert result.exit_code == 0
        assert "SUCCESS (id=mock-1, changes=2" in result.output

