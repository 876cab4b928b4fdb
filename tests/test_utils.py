import pytest

from codesync.utils.file import copy_file, read_lines, write_lines
from codesync.utils.logging import atimeit, timeit
from codesync.utils.rich_console import RichConsoleLogger, get_console, get_console_logger, print_table


@pytest.fixture
def temp_project_dir(tmp_path):
    """Create a temporary project directory with test files."""
    (tmp_path / "source.json").write_text('{"files.autoSave": "off"}')
    return tmp_path


def test_copy_file_creates_parents(temp_project_dir):
    """Test that copy_file creates missing directories and copies bytes."""
    destination = temp_project_dir / "nested" / "dir" / "target.json"
    result = copy_file(temp_project_dir / "source.json", destination)

    assert result == destination
    assert destination.read_text() == '{"files.autoSave": "off"}'


def test_copy_file_overwrites(temp_project_dir):
    destination = temp_project_dir / "target.json"
    destination.write_text("old")
    copy_file(temp_project_dir / "source.json", destination)
    assert destination.read_text() == '{"files.autoSave": "off"}'


def test_copy_file_missing_source(temp_project_dir):
    with pytest.raises(FileNotFoundError):
        copy_file(temp_project_dir / "missing.json", temp_project_dir / "target.json")


def test_read_and_write_lines(temp_project_dir):
    path = write_lines(temp_project_dir / "list", ["one", "two"])
    assert path.read_text() == "one\ntwo\n"
    path.write_text("one\n\n  two \n")
    assert read_lines(path) == ["one", "two"]


def test_write_lines_empty(temp_project_dir):
    path = write_lines(temp_project_dir / "empty", [])
    assert path.read_text() == ""


def test_timeit_preserves_result():
    @timeit
    def add(a, b):
        return a + b

    assert add(1, 2) == 3
    assert add.__name__ == "add"


@pytest.mark.asyncio
async def test_atimeit_preserves_result():
    @atimeit
    async def double(value):
        return value * 2

    assert await double(4) == 8


def test_console_and_logger_are_singletons():
    assert get_console() is get_console()
    assert get_console_logger() is get_console_logger()
    assert isinstance(get_console_logger(), RichConsoleLogger)


def test_logger_level_from_environment(monkeypatch):
    monkeypatch.setenv("CODESYNC_LOG_LEVEL", "warning")
    logger = RichConsoleLogger("codesync.test")
    assert logger.log_level_str == "WARNING"
    assert not logger.isEnabledFor(10)


def test_logger_invalid_level_falls_back(monkeypatch):
    monkeypatch.setenv("CODESYNC_LOG_LEVEL", "chatty")
    logger = RichConsoleLogger("codesync.test")
    assert logger.log_level_str == "INFO"


def test_debug_mode_adds_file_handler(monkeypatch, tmp_path):
    log_file = tmp_path / "codesync.log"
    monkeypatch.setenv("CODESYNC_DEBUG", "true")
    monkeypatch.setenv("CODESYNC_LOG_FILE", str(log_file))
    logger = RichConsoleLogger("codesync.test")
    logger.success("saved %s", "settings")
    for handler in logger.handlers:
        handler.flush()
    assert "saved settings" in log_file.read_text(encoding="utf-8")


def test_print_table_shows_brackets_literally():
    console = get_console()
    with console.capture() as capture:
        print_table(["Extension"], [["odd.[/bold]ext"], ["[red]x[/red]"]])
    output = capture.get()
    assert "odd.[/bold]ext" in output
    assert "[red]x[/red]" in output
