"""Tests for maze file parsing and the maze loader."""

from pathlib import Path
from random import Random

import pytest

from maze_escape.environment import MazeParseError, Position
from maze_escape.loader import MazeLoader, load_maze, parse_header, parse_maze_text
from maze_escape.maze import MazeCapacityError
from maze_escape.schemas import MazeHeader


TWO_LEVELS = "2 3 5\n@   #\n #  ^\n#   #\n@   #\n  # %\n#   #\n"


def write_maze(directory: Path, name: str, text: str = TWO_LEVELS) -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


def test_parse_header_accepts_whitespace_separated_integers():
    assert parse_header("2 3\t5") == MazeHeader(levels=2, height=3, width=5)


@pytest.mark.parametrize("line", ["2 3", "2 3 5 7", "a 3 5", "0 3 5", "2 -1 5"])
def test_parse_header_rejects_bad_lines(line):
    with pytest.raises(MazeParseError) as exc_info:
        parse_header(line)
    assert str(exc_info.value).startswith("Error parsing maze header:")
    assert exc_info.value.level is None


def test_parse_maze_text_builds_levels_in_order():
    maze = parse_maze_text(TWO_LEVELS, rng=Random(0))

    assert len(maze.levels) == 2
    assert [level.index for level in maze.levels] == [0, 1]
    assert maze.levels[0].ladder_tile.position == Position(0, 1, 4)
    assert maze.levels[1].instructor_tile.position == Position(1, 1, 4)
    assert maze.student.position == Position(0, 0, 0)


def test_parse_maze_text_reports_missing_rows():
    truncated = "2 3 5\n@   #\n #  ^\n#   #\n"
    with pytest.raises(MazeParseError) as exc_info:
        parse_maze_text(truncated, rng=Random(0))
    assert str(exc_info.value) == "Error parsing row 1 of maze level 2: failed to read row."


def test_parse_maze_text_rejects_empty_file():
    with pytest.raises(MazeParseError, match="maze file is empty"):
        parse_maze_text("")


def test_parse_maze_text_rejects_tiny_levels():
    with pytest.raises(MazeCapacityError):
        parse_maze_text("1 1 3\n@ %\n", rng=Random(0))


def test_load_maze_reads_file(tmp_path):
    path = write_maze(tmp_path, "tower.txt")
    maze = load_maze(path, rng=Random(3))
    assert len(maze.levels) == 2


def test_load_maze_reports_undecodable_bytes_as_unknown_character(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"1 3 5\n@    \n  \xe9  \n    %\n")

    with pytest.raises(MazeParseError) as exc_info:
        load_maze(path, rng=Random(0))

    error = exc_info.value
    assert (error.level, error.row, error.col) == (0, 2, 3)
    assert error.reason.startswith("unknown character")


def test_loader_resolves_names_and_paths(tmp_path):
    path = write_maze(tmp_path, "tower.txt")
    write_maze(tmp_path, "notes.md", "not a maze")
    loader = MazeLoader(mazes_dir=tmp_path)

    assert loader.resolve("tower") == tmp_path / "tower.txt"
    assert loader.resolve("tower.txt") == tmp_path / "tower.txt"
    assert loader.resolve(str(path)) == path
    assert loader.available() == ["tower"]

    maze = loader.load("tower", rng=Random(1))
    assert maze.levels[0].height == 3


def test_loader_missing_maze(tmp_path):
    loader = MazeLoader(mazes_dir=tmp_path)
    with pytest.raises(FileNotFoundError, match="not found"):
        loader.resolve("nowhere")
    assert MazeLoader(mazes_dir=tmp_path / "missing").available() == []


def test_bundled_mazes_load():
    loader = MazeLoader(mazes_dir=Path(__file__).parent.parent / "examples" / "mazes")
    names = loader.available()
    assert "two_levels" in names
    for name in names:
        loader.load(name, rng=Random(0))
