"""High-score records: parsing, storage, paging and typed player names."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from cybertower.keys import Key, key_to_char

ENTRIES_PER_PAGE = 5
MAX_NAME_LENGTH = 12
ANONYMOUS = "anonymous"


@dataclass
class ScoreEntry:
    """One line of the scoreboard."""

    name: str
    score: int
    datetime: str

    def to_line(self) -> str:
        """Render the entry as it is stored on disk."""
        return f"{self.name} {self.score} {self.datetime}"


def parse_scores(text: str) -> list[ScoreEntry]:
    """Parse 'name score datetime' triples; reading stops at the first bad or partial one."""
    tokens = text.split()
    entries: list[ScoreEntry] = []
    for start in range(0, len(tokens) - 2, 3):
        name, score, stamp = tokens[start:start + 3]
        try:
            value = int(score)
        except ValueError:
            break
        entries.append(ScoreEntry(name, value, stamp))
    return entries


def compute_score(kills: int, money: int, lives: int) -> int:
    """Final score of a won stage."""
    return kills + money + lives * 100


def append_score(path: str | Path, entry: ScoreEntry) -> None:
    """Append one entry to a scoreboard file, creating it if needed."""
    with Path(path).open("a", encoding="utf-8") as fout:
        fout.write(entry.to_line() + "\n")


class Scoreboard:
    """A list of score entries viewed a page at a time."""

    def __init__(self, entries: Iterable[ScoreEntry] = (), per_page: int = ENTRIES_PER_PAGE) -> None:
        if per_page < 1:
            raise ValueError("per_page must be at least 1")
        self.entries = list(entries)
        self.per_page = per_page
        self.page = 0

    def __len__(self) -> int:
        return len(self.entries)

    @classmethod
    def load(cls, path: str | Path, per_page: int = ENTRIES_PER_PAGE) -> Scoreboard:
        """Read a scoreboard file, highest score first; a missing file gives an empty board."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except FileNotFoundError:
            text = ""
        board = cls(parse_scores(text), per_page)
        board.sort()
        return board

    def save(self, path: str | Path) -> None:
        """Write every entry to a file, replacing its contents."""
        Path(path).write_text(
            "".join(entry.to_line() + "\n" for entry in self.entries), encoding="utf-8"
        )

    def sort(self) -> None:
        """Order entries from the highest score to the lowest."""
        self.entries.sort(key=lambda entry: entry.score, reverse=True)

    def current_entries(self) -> list[ScoreEntry]:
        """Entries shown on the current page."""
        start = self.page * self.per_page
        return self.entries[start:start + self.per_page]

    def next_page(self) -> bool:
        """Move to the next page if there is one; report whether the page changed."""
        if (self.page + 1) * self.per_page < len(self.entries):
            self.page += 1
            return True
        return False

    def prev_page(self) -> bool:
        """Move to the previous page if there is one; report whether the page changed."""
        if self.page > 0:
            self.page -= 1
            return True
        return False


@dataclass
class NameEntry:
    """A player name typed key by key."""

    name: str = ""
    max_length: int = field(default=MAX_NAME_LENGTH)

    def press(self, key: int) -> str:
        """Apply one key press and return the name typed so far."""
        if len(self.name) < self.max_length:
            char = key_to_char(key)
            if char is not None:
                self.name += char
        if key == Key.BACKSPACE and self.name:
            self.name = self.name[:-1]
        return self.name

    def final_name(self) -> str:
        """The name to record, falling back to a placeholder when nothing was typed."""
        return self.name or ANONYMOUS