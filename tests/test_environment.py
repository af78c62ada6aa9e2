"""Tests for positions, tiles, level parsing and grid helpers."""

from dataclasses import FrozenInstanceError
from random import Random

import pytest

from maze_escape.environment import (
    Direction,
    Level,
    MazeParseError,
    OpenSpace,
    Position,
    Wall,
    adjacent_positions,
    empty_tiles,
    open_neighbors,
    render_levels,
)


def test_position_translate_and_signed_edges():
    pos = Position(0, 0, 0)

    assert pos.translate(Direction.DOWN) == Position(0, 1, 0)
    assert pos.translate(Direction.RIGHT, 3) == Position(0, 0, 3)
    # Stepping off the top-left edge goes negative instead of wrapping.
    assert pos.translate(Direction.UP) == Position(0, -1, 0)
    assert pos.translate(Direction.LEFT) == Position(0, 0, -1)
    assert str(Position(1, 2, 3)) == "(1, 2, 3)"


def test_translate_round_trip_for_every_direction():
    start = Position(1, 4, 6)
    for direction in Direction:
        for amount in (1, 2, 7):
            moved = start.translate(direction, amount)
            assert moved != start
            assert moved.translate(direction.opposite, amount) == start


def test_position_is_immutable_and_hashable():
    pos = Position(0, 1, 1)
    with pytest.raises(FrozenInstanceError):
        pos.row = 5  # type: ignore[misc]
    assert {pos, Position(0, 1, 1)} == {pos}


def test_direction_opposites():
    for direction in Direction:
        assert direction.opposite.opposite is direction
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.LEFT.opposite is Direction.RIGHT


def test_adjacent_positions_scan_order():
    directions = [d for d, _ in adjacent_positions(Position(0, 1, 1))]
    assert directions == [Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]


def test_open_space_glyph_precedence():
    space = OpenSpace(Position(0, 0, 0), is_start=True)
    assert space.glyph == "@"
    space.has_skill = True
    assert space.glyph == "$"
    space.has_ta = True
    assert space.glyph == "T"
    space.has_student = True
    assert space.glyph == "*"

    space.clear_occupants()
    assert space.glyph == "@"
    assert space.is_start

    assert OpenSpace(Position(0, 0, 0), has_ladder=True).glyph == "^"
    assert OpenSpace(Position(0, 0, 0), has_instructor=True).glyph == "%"
    assert OpenSpace(Position(0, 0, 0)).glyph == " "
    assert Wall(Position(0, 0, 0)).glyph == "#"


def test_open_space_is_empty_considers_markers_and_occupants():
    assert OpenSpace(Position(0, 0, 0)).is_empty
    assert not OpenSpace(Position(0, 0, 0), has_ladder=True).is_empty
    assert not OpenSpace(Position(0, 0, 0), has_ta=True).is_empty
    assert not Wall(Position(0, 0, 0)).occupiable


def test_level_parse_valid_level():
    level = Level.parse(["@   #", " #  ^", "#   #"], 0)

    assert (level.height, level.width) == (3, 5)
    assert level.start_tile.position == Position(0, 0, 0)
    assert level.ladder_tile is not None
    assert level.ladder_tile.position == Position(0, 1, 4)
    assert level.instructor_tile is None
    assert isinstance(level.location_at(Position(0, 1, 1)), Wall)
    assert level.render() == "@   #\n #  ^\n#   #"


def test_level_parse_marks_instructor_tile():
    level = Level.parse(["@ ", " %"], 3)

    assert level.instructor_tile is not None
    assert level.instructor_tile.has_instructor
    assert level.instructor_tile.position == Position(3, 1, 1)


@pytest.mark.parametrize(
    "rows, height, width, expected",
    [
        (["@%"], 2, 2, "Error parsing row 2 of maze level 1: failed to read row."),
        (["@ ", "%"], 2, 2, "Error parsing row 2 of maze level 1: width of row not equal to width of maze."),
        (["@@", " %"], None, None, "Error parsing row 1, column 2 of maze level 1: second beginning location found."),
        (["@^", "^ "], None, None, "Error parsing row 2, column 1 of maze level 1: second ladder found."),
        (["@%", "% "], None, None, "Error parsing row 2, column 1 of maze level 1: second instructor found."),
        (["@x", " %"], None, None, "Error parsing row 1, column 2 of maze level 1: unknown character: 'x'."),
        (["  ", " %"], None, None, "Error parsing maze level 1: no beginning location found."),
        (["@ ", "  "], None, None, "Error parsing maze level 1: no ladder or instructor found."),
        (["@^", " %"], None, None, "Error parsing maze level 1: found both an instructor and a ladder."),
    ],
)
def test_level_parse_errors(rows, height, width, expected):
    with pytest.raises(MazeParseError) as exc_info:
        Level.parse(rows, 0, height=height, width=width)
    assert str(exc_info.value) == expected
    assert exc_info.value.level == 0


def test_location_at_rejects_out_of_bounds_and_other_levels():
    level = Level.parse(["@ ", " %"], 0)

    assert level.location_at(Position(0, -1, 0)) is None
    assert level.location_at(Position(0, 0, 2)) is None
    assert level.location_at(Position(1, 0, 0)) is None
    assert level.space_at(Position(0, 0, 1)) is not None


def test_open_neighbors_skip_walls_and_edges():
    level = Level.parse(["@ #", "  ^"], 0)

    neighbors = open_neighbors(level, Position(0, 0, 1))
    assert [d for d, _ in neighbors] == [Direction.DOWN, Direction.LEFT]


def test_random_empty_tiles_sampling():
    level = Level.parse(["@  ", "  %"], 0)
    rng = Random(7)

    assert len(empty_tiles(level)) == 4
    sample = level.random_empty_tiles(2, rng)
    assert sample is not None and len(sample) == 2
    assert len({space.position for space in sample}) == 2
    assert all(space.is_empty for space in sample)

    # Asking for more than exist returns everything available.
    assert len(level.random_empty_tiles(10, rng)) == 4

    for space in empty_tiles(level):
        space.has_skill = True
    assert level.random_empty_tiles(1, rng) is None


def test_reset_keeps_permanent_markers():
    level = Level.parse(["@ ", "^ "], 0)
    for space in level.open_spaces():
        space.has_skill = True
        space.has_ta = True
        space.has_student = True

    level.reset()

    assert all(not (s.has_skill or s.has_ta or s.has_student) for s in level.open_spaces())
    assert level.start_tile.is_start
    assert level.ladder_tile.has_ladder


def test_render_levels_separates_with_blank_line():
    first = Level.parse(["@^"], 0)
    second = Level.parse(["@%"], 1)
    assert render_levels([first, second]) == "@^\n\n@%"
