"""Top-five ranking module."""

from music_ranking.ranking.reconciler import (
    TOP_FIVE_SIZE,
    InvalidAssignment,
    SongNotFound,
    SongStore,
    TopFiveReconciler,
    in_top_five,
)

__all__ = [
    "TOP_FIVE_SIZE",
    "InvalidAssignment",
    "SongNotFound",
    "SongStore",
    "TopFiveReconciler",
    "in_top_five",
]
