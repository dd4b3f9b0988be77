"""Pitch, note-collection and voicing primitives used by the searches."""

from fretshapes.theory.notes import Note, Pitch
from fretshapes.theory.collections import NoteSet, SCALE_PATTERNS, scale_names
from fretshapes.theory.voicing import Clef, Voicing

__all__ = [
    "Note",
    "Pitch",
    "NoteSet",
    "SCALE_PATTERNS",
    "scale_names",
    "Clef",
    "Voicing",
]
