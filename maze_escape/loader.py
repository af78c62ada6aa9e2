"""
Maze loading from text files.

A maze file is plain text:

```
2 3 5
@   #
 #  ^
#   #
@   #
  # %
#   #
```

The first line holds three whitespace-separated integers ``levels height
width``. Then come ``levels`` blocks of exactly ``height`` lines, each
exactly ``width`` characters wide, with no separator lines between blocks.
Glyphs: space = open, ``#`` = wall, ``@`` = start, ``^`` = ladder,
``%`` = instructor.

Usage:
    loader = MazeLoader()
    maze = loader.load("two_levels", selector=ConsolePromptSelector())
"""

from pathlib import Path
from random import Random
from typing import List, Optional

from pydantic import ValidationError

from .config import Config
from .controllers import ActionSelector
from .environment import Level, MazeParseError
from .maze import Maze
from .schemas import MazeHeader

MAZE_SUFFIX = ".txt"


def parse_header(line: str) -> MazeHeader:
    """Parse the ``levels height width`` line.

    Raises:
        MazeParseError: Wrong number of fields, non-integers, or values below 1
    """
    fields = line.split()
    if len(fields) != 3:
        raise MazeParseError(
            f"expected three integers 'levels height width', found {len(fields)} field(s)"
        )
    try:
        return MazeHeader(levels=fields[0], height=fields[1], width=fields[2])
    except ValidationError:
        raise MazeParseError(
            "levels, height, and width must all be integers >= 1"
        ) from None


def parse_levels(header: MazeHeader, lines: List[str]) -> List[Level]:
    """Parse ``header.levels`` consecutive blocks of ``header.height`` lines."""
    levels: List[Level] = []
    for index in range(header.levels):
        start = index * header.height
        rows = lines[start:start + header.height]
        levels.append(Level.parse(rows, index, height=header.height, width=header.width))
    return levels


def parse_maze_text(
    text: str,
    *,
    selector: Optional[ActionSelector] = None,
    rng: Optional[Random] = None,
) -> Maze:
    """Build a ready-to-play Maze from the full text of a maze file.

    Without an explicit ``rng`` the random source comes from
    ``Config.make_rng()`` so ``MAZE_SEED`` makes runs reproducible.

    Raises:
        MazeParseError: Malformed header, level, or instructor placement
        MazeCapacityError: A level is too small for its TAs and skills
    """
    lines = text.splitlines()
    if not lines:
        raise MazeParseError("maze file is empty")

    header = parse_header(lines[0])
    levels = parse_levels(header, lines[1:])
    return Maze(levels, selector=selector, rng=rng or Config.make_rng())


def load_maze(
    path: Path,
    *,
    selector: Optional[ActionSelector] = None,
    rng: Optional[Random] = None,
) -> Maze:
    """Read and parse a maze file.

    Bytes that are not valid UTF-8 decode to U+FFFD, which no glyph
    matches, so they are reported as an unknown character at their
    row and column.

    Raises:
        OSError: The file cannot be opened
        MazeParseError / MazeCapacityError: See ``parse_maze_text``
    """
    text = Path(path).read_bytes().decode("utf-8", errors="replace")
    return parse_maze_text(text, selector=selector, rng=rng)


class MazeLoader:
    """Resolve maze names against a directory and load them.

    Directory structure:
    - Default: ``Config.MAZE_DIR`` ({PROJECT_ROOT}/examples/mazes unless MAZE_DIR is set)
    - Override via constructor: MazeLoader(Path("/custom/mazes"))
    - Maze files: {name}.txt (e.g., "two_levels.txt")

    Existing paths are used as-is, so the loader also accepts explicit file paths.
    """

    def __init__(self, mazes_dir: Optional[Path] = None):
        self.mazes_dir = mazes_dir or Config.MAZE_DIR

    def resolve(self, name_or_path: str) -> Path:
        """Return the file for a maze name or path.

        Raises:
            FileNotFoundError: Neither the path nor ``{mazes_dir}/{name}.txt`` exists
        """
        path = Path(name_or_path)
        if path.is_file():
            return path

        candidate = self.mazes_dir / name_or_path
        if candidate.suffix != MAZE_SUFFIX:
            candidate = candidate.with_name(candidate.name + MAZE_SUFFIX)
        if candidate.is_file():
            return candidate

        raise FileNotFoundError(
            f"Maze '{name_or_path}' not found (looked for {path} and {candidate})"
        )

    def available(self) -> List[str]:
        """Names of the maze files in the maze directory."""
        if not self.mazes_dir.is_dir():
            return []
        return sorted(p.stem for p in self.mazes_dir.glob(f"*{MAZE_SUFFIX}"))

    def load(
        self,
        name_or_path: str,
        *,
        selector: Optional[ActionSelector] = None,
        rng: Optional[Random] = None,
    ) -> Maze:
        return load_maze(self.resolve(name_or_path), selector=selector, rng=rng)
