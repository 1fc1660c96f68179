"""Unit tests for the code-ferret command line."""

import json
import logging
from pathlib import Path

import pytest

from code_ferret import cli


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put the original handlers back."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.unit
class TestArgumentParser:
    def test_search_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        args = cli.build_argument_parser().parse_args(["search", "-q", "email"])

        assert args.directory == str(Path.cwd())
        assert args.top is None
        assert args.files_only is False

    def test_index_requires_directory(self):
        with pytest.raises(SystemExit):
            cli.build_argument_parser().parse_args(["index"])

    def test_multiple_extensions(self):
        args = cli.build_argument_parser().parse_args(["index", "-d", "src", "-e", ".ts", ".js"])

        assert args.extensions == [".ts", ".js"]


@pytest.mark.unit
class TestMain:
    def test_index(self, sample_project: Path, capsys):
        exit_code = cli.main(["index", "-d", str(sample_project), "-e", ".ts"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert out.startswith("Indexed 3 files in ")
        assert "extensions=.ts" in out

    def test_search_text_output(self, sample_project: Path, capsys):
        exit_code = cli.main(["search", "-q", "add", "-d", str(sample_project)])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "Search Results:" in out
        assert "Rank: 1" in out
        assert "math.ts" in out
        assert "export function add" in out

    def test_search_files_only(self, sample_project: Path, capsys):
        exit_code = cli.main(["search", "-q", "user", "-d", str(sample_project), "--files-only"])

        assert exit_code == 0
        lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("- ")]
        assert [Path(line[2:]).name for line in lines] == ["UserManagement.ts", "EmailService.ts"]

    def test_search_top(self, sample_project: Path, capsys):
        cli.main(["search", "-q", "user", "-d", str(sample_project), "--files-only", "--top", "1"])

        lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("- ")]
        assert len(lines) == 1

    def test_search_json(self, sample_project: Path, capsys):
        exit_code = cli.main(["search", "-q", "user", "-d", str(sample_project), "--json"])

        assert exit_code == 0
        payloads = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert [payload["rank"] for payload in payloads] == [1, 2]
        assert set(payloads[0]) == {"file", "rank", "similarityScore", "code"}

    def test_search_json_files_only_omits_code(self, sample_project: Path, capsys):
        cli.main(["search", "-q", "user", "-d", str(sample_project), "--json", "-f"])

        payload = json.loads(capsys.readouterr().out.splitlines()[0])
        assert "code" not in payload

    def test_info(self, sample_project: Path, capsys):
        exit_code = cli.main(["info", str(sample_project / "src" / "EmailService.ts")])

        assert exit_code == 0
        info = json.loads(capsys.readouterr().out)
        assert info["services"] == ["export class EmailService"]

    def test_search_empty_directory_fails(self, tmp_path: Path, capsys):
        exit_code = cli.main(["search", "-q", "email", "-d", str(tmp_path)])

        assert exit_code == 1
        assert "No files indexed" in capsys.readouterr().err

    def test_invalid_top(self, sample_project: Path):
        assert cli.main(["search", "-q", "email", "-d", str(sample_project), "--top", "0"]) == 2
