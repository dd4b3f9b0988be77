"""Fretboard, fretted-note and shape models shared by the searches."""

from fretshapes.fretboard.fretted_note import FrettedNote, MutedString, SoundedNote
from fretshapes.fretboard.fretboard import Fretboard, MAX_FRET, STANDARD_GUITAR
from fretshapes.fretboard.shapes import (
    ChordShapeClassification,
    FretboardShape,
    MelodicFretboardShape,
)

__all__ = [
    "Fretboard",
    "MAX_FRET",
    "STANDARD_GUITAR",
    "SoundedNote",
    "MutedString",
    "FrettedNote",
    "ChordShapeClassification",
    "FretboardShape",
    "MelodicFretboardShape",
]
