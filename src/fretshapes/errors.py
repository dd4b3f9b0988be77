"""
Exception hierarchy for fretshapes.

Configuration problems (bad frets, strings, octaves, note names) raise
immediately. Conditions met at the edge of the search space are caught
inside the searches and prune the branch instead.
"""


class FretshapesError(Exception):
    """Base class for every error raised by this package."""


class MusicSemanticsError(FretshapesError, ValueError):
    """A value that makes no sense musically or on the instrument."""


class FretboardError(MusicSemanticsError):
    """Fret or string index outside the fretboard's bounds."""


class PitchRangeError(MusicSemanticsError):
    """Pitch or octave outside the representable range."""


class InvalidNoteError(MusicSemanticsError):
    """Unparseable or inconsistent note spelling."""


class NotAMemberError(MusicSemanticsError):
    """A note collection was asked to step from a note it does not contain."""

    def __init__(self, note, collection=None):
        self.note = note
        self.collection = collection
        super().__init__(f"{note} is not a member of {collection}")


class InvalidNNotesPerString(MusicSemanticsError):
    """Notes-per-string patterns need at least two notes on each string."""


class EmptyScaleError(MusicSemanticsError):
    """A scale search was given no notes."""


class ConfigError(FretshapesError):
    """Unknown tuning or malformed configuration file."""
