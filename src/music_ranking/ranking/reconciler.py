"""Top-five position reconciliation.

Keeps positions 1..5 free of duplicates while songs are inserted, moved
or deleted. The reconciler owns no state: it reads and writes positions
through a SongStore, so a single call runs inside whatever transaction
the store is bound to.

- insert/move use a cascading shift: every occupant from the target
  position down to 5 moves one place down. The occupant of 5 ends up
  at 6, out of the top five but still numbered.
- delete uses compaction: the songs in 1..5 are renumbered 1..k in their
  current order, and a song pushed out to 6 moves back into the freed
  slot. Positions above 6 are never touched.
- set_exact_positions overwrites a full 1..5 permutation at once.
"""

from collections.abc import Hashable, Mapping
from typing import Any, Protocol, TypeVar

TOP_FIVE_SIZE = 5

SongT = TypeVar("SongT")


class InvalidAssignment(ValueError):
    """Raised when a bulk position assignment is not a 1..5 permutation."""


class SongNotFound(LookupError):
    """Raised by a store when a song id cannot be resolved."""

    def __init__(self, song_id: Hashable):
        super().__init__(f"Song {song_id} not found")
        self.song_id = song_id


class SongStore(Protocol[SongT]):
    """Storage the reconciler reads and writes positions through."""

    def get(self, song_id: Hashable) -> SongT:
        """Resolve a song by id, raising SongNotFound if missing."""
        ...

    def get_id(self, song: SongT) -> Hashable: ...

    def get_position(self, song: SongT) -> int | None: ...

    def get_at_position(self, position: int) -> SongT | None: ...

    def set_position(self, song: SongT, position: int | None) -> None: ...

    def list_top_five(self) -> list[SongT]:
        """Songs with a position in 1..5, ascending by position."""
        ...

    def list_ranked(self, max_position: int) -> list[SongT]:
        """Songs with a position in 1..max_position, ascending by position."""
        ...

    def create(self, fields: Mapping[str, Any], position: int | None) -> SongT: ...

    def delete(self, song: SongT) -> None: ...


def in_top_five(position: int | None) -> bool:
    return position is not None and 1 <= position <= TOP_FIVE_SIZE


class TopFiveReconciler:
    """Insert, move, delete and reorder songs without duplicate top-five positions."""

    def __init__(self, store: SongStore):
        self.store = store

    def insert_at(self, fields: Mapping[str, Any], position: int | None = None):
        """Create a song, shifting current occupants when position is in 1..5.

        Positions above 5 (and None) are stored as given with no shifting.
        """
        if in_top_five(position):
            self._shift_down_from(position)
        return self.store.create(fields, position)

    def move_to(self, song_id: Hashable, position: int | None) -> None:
        """Give a song a new position, shifting the occupants it collides with.

        Moving out of the top five (None or > 5) never compacts the
        remaining songs; only deletion does.
        """
        song = self.store.get(song_id)
        if self.store.get_position(song) == position:
            return

        if in_top_five(position):
            self._shift_down_from(position, exclude=song_id)
        self.store.set_position(song, position)

    def remove_ranked(self, song_id: Hashable) -> None:
        """Delete a song and compact the top five if it was part of it."""
        song = self.store.get(song_id)
        was_ranked = in_top_five(self.store.get_position(song))

        self.store.delete(song)

        if was_ranked:
            self._compact()

    def set_exact_positions(self, positions: Mapping[Hashable, int]) -> None:
        """Persist a complete top-five ordering (song id -> position).

        Songs currently in the top five but absent from the mapping are
        unranked so positions 1..5 stay unique.
        """
        if len(positions) != TOP_FIVE_SIZE:
            raise InvalidAssignment("Must provide exactly 5 positions")

        if sorted(positions.values()) != list(range(1, TOP_FIVE_SIZE + 1)):
            raise InvalidAssignment("Positions must be 1, 2, 3, 4, 5")

        songs = {song_id: self.store.get(song_id) for song_id in positions}

        for current in self.store.list_top_five():
            if self.store.get_id(current) not in songs:
                self.store.set_position(current, None)

        for song_id, position in positions.items():
            self.store.set_position(songs[song_id], position)

    def _shift_down_from(self, position: int, exclude: Hashable | None = None) -> None:
        # Snapshot occupants first: after the first write two songs share a position
        occupants = [
            (current, self.store.get_at_position(current))
            for current in range(position, TOP_FIVE_SIZE + 1)
        ]
        for current, song in occupants:
            if song is None or self.store.get_id(song) == exclude:
                continue
            self.store.set_position(song, current + 1)

    def _compact(self) -> None:
        # One slot past the window: the song pushed to 6 by an insert moves back
        ranked = self.store.list_ranked(TOP_FIVE_SIZE + 1)[:TOP_FIVE_SIZE]
        for expected, song in enumerate(ranked, start=1):
            if self.store.get_position(song) != expected:
                self.store.set_position(song, expected)
