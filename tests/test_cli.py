"""
Tests for the drivefs command line interface.
"""
import pytest
from click.testing import CliRunner

from drivefs import FileSystem
from drivefs.cli import main, parse_line, run_script


SCRIPT = r"""
# build a small tree
create folder docs drive
create text_file a.txt drive\docs
write drive\docs\a.txt "hello world"
create zip-file z drive
move drive\docs\a.txt drive\z\a.txt
size drive\z
"""


@pytest.fixture
def runner():
    return CliRunner()


def test_parse_line_keeps_backslashes():
    assert parse_line(r"move drive\docs\a.txt drive\z") == ["move", "drive\\docs\\a.txt", "drive\\z"]


def test_parse_line_quotes_and_comments():
    assert parse_line('write drive\\a "two words"  # trailing') == ["write", "drive\\a", "two words"]
    assert parse_line("   ") == []
    assert parse_line("# only a comment") == []


def test_parse_line_unbalanced_quote():
    with pytest.raises(ValueError):
        parse_line('write drive\\a "oops')


def test_run_script_applies_commands():
    fs = FileSystem()
    output = []

    failures = run_script(fs, SCRIPT.splitlines(keepends=True), echo=output.append)

    assert failures == 0
    assert fs.read_file("drive\\z\\a.txt") == "hello world"
    assert output == ["5.5"]


def test_run_script_stops_on_error():
    fs = FileSystem()
    script = [
        "create folder docs drive\n",
        "create folder docs drive\n",
        "create folder later drive\n",
    ]

    failures = run_script(fs, script, echo=lambda line: None)

    assert failures == 1
    assert not fs.exists("drive\\later")


def test_run_script_keep_going():
    fs = FileSystem()
    script = [
        "delete drive\\missing\n",
        "frobnicate drive\n",
        "create folder later drive\n",
    ]

    failures = run_script(fs, script, keep_going=True, echo=lambda line: None)

    assert failures == 2
    assert fs.exists("drive\\later")


def test_run_command(runner):
    result = runner.invoke(main, ["run"], input=SCRIPT)

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "5.5",
        "drive (size:5.5)",
        " name: docs, size:0.0",
        " name: z, size:5.5",
        "\t name: a.txt, size:11.0",
    ]


def test_run_command_from_file(runner, tmp_path):
    script_path = tmp_path / "script.txt"
    script_path.write_text("create folder docs C:\nls C:\n")

    result = runner.invoke(main, ["run", "--drive", "C:", "--no-tree", str(script_path)])

    assert result.exit_code == 0
    assert result.output == "docs\n"


def test_run_command_reports_errors(runner):
    result = runner.invoke(main, ["run", "--no-tree"], input="write drive \"text\"\n")

    assert result.exit_code == 1
    assert "Error: line 1: NotATextFile" in result.output


def test_run_command_usage_error(runner):
    result = runner.invoke(main, ["run", "--no-tree"], input="move drive\n")

    assert result.exit_code == 1
    assert "usage: move SOURCE DEST" in result.output


def test_run_command_invalid_drive_name(runner):
    result = runner.invoke(main, ["run", "--drive", "a\\b"], input="")

    assert result.exit_code == 2
