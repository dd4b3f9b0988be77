"""
fretshapes: chord and scale fingering search for fretted instruments.
"""

from fretshapes.errors import (
    FretshapesError,
    MusicSemanticsError,
    FretboardError,
    PitchRangeError,
    InvalidNoteError,
    NotAMemberError,
    InvalidNNotesPerString,
    EmptyScaleError,
    ConfigError,
)
from fretshapes.theory import Note, Pitch, NoteSet, Clef, Voicing
from fretshapes.fretboard import (
    Fretboard,
    STANDARD_GUITAR,
    SoundedNote,
    MutedString,
    FretboardShape,
    MelodicFretboardShape,
    ChordShapeClassification,
)
from fretshapes.search import (
    find_chord_shapes,
    melodic_shapes_at_starting_note,
    find_all_scale_shapes,
    find_open_scale_shape,
    n_note_per_string_shape,
    set_aside_best_two_shapes,
    ScaleShapeSearchResult,
)

__version__ = "0.1.0"
