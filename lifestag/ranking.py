"""Score file handling and the ranking screen."""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Iterable, Union

from lifestag.screen import MAX_Y, Screen

MAX_RANKS = 100
MAX_NAME_LENGTH = 19
SCREEN_WIDTH = 70
SHOWN_RANKS = 10

PathType = Union[str, "PathLike[str]"]

_NAME = re.compile(r"\s*(\S{1,%d})" % MAX_NAME_LENGTH)
_POINTS = re.compile(r"\s*([+-]?\d+)")


@dataclass
class RankEntry:
    """One saved score."""

    name: str
    points: int


def _parse(text: str) -> list[RankEntry]:
    entries: list[RankEntry] = []
    pos = 0
    while len(entries) < MAX_RANKS:
        name_match = _NAME.match(text, pos)
        if name_match is None:
            break
        points_match = _POINTS.match(text, name_match.end())
        if points_match is None:
            break
        entries.append(RankEntry(name_match.group(1), int(points_match.group(1))))
        pos = points_match.end()
    return entries


def load_ranking(path: PathType) -> list[RankEntry]:
    """Read "name points" pairs until the file ends or stops matching.

    Names longer than 19 characters are cut, and at most 100 entries are read.
    Raises OSError if the file cannot be opened.
    """
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return _parse(text)


def sort_ranking(entries: Iterable[RankEntry]) -> list[RankEntry]:
    """Order entries from most to fewest points by exchange sort.

    Ties keep the order this exchange sort leaves them in, which is not
    always the original order.
    """
    ranks = list(entries)
    for i in range(len(ranks) - 1):
        for j in range(i + 1, len(ranks)):
            if ranks[j].points > ranks[i].points:
                ranks[i], ranks[j] = ranks[j], ranks[i]
    return ranks


def save_score(path: PathType, name: str, points: int) -> None:
    """Append one score line to the ranking file."""
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(f"{name} {points}\n")


def format_rank_line(position: int, entry: RankEntry) -> str:
    return (
        f"\033[1;36m{position:2d}. {entry.name:<15} "
        f"\033[1;32m{entry.points:3d} pts\033[0m"
    )


def show_ranking(screen: Screen, path: PathType) -> list[RankEntry]:
    """Draw the top scores; return the entries that were shown."""
    screen.clear()
    screen.draw_borders()

    try:
        entries = load_ranking(path)
    except OSError:
        screen.gotoxy(SCREEN_WIDTH // 2 - 10, 10)
        screen.write("\033[1;31mNenhum ranking salvo ainda.\033[0m")
        return []

    ranks = sort_ranking(entries)

    left = SCREEN_WIDTH // 2 - 6
    screen.gotoxy(left, 3)
    screen.write("\033[1;33m╔════════════════════╗\033[0m")
    screen.gotoxy(left, 4)
    screen.write("\033[1;33m║   RANKING STAGS    ║\033[0m")
    screen.gotoxy(left, 5)
    screen.write("\033[1;33m╚════════════════════╝\033[0m")

    first_line = 7
    room = max(0, (MAX_Y - 3) - first_line)
    shown = ranks[: min(SHOWN_RANKS, room)]
    for offset, entry in enumerate(shown):
        screen.gotoxy(SCREEN_WIDTH // 2 - 10, first_line + offset)
        screen.write(format_rank_line(offset + 1, entry))
    return shown