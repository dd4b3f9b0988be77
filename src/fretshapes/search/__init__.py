"""Chord-shape and melodic-shape searches."""

from fretshapes.search.chords import ChordShapeSearchResult, find_chord_shapes
from fretshapes.search.melodic import (
    RecursiveSearchParams,
    find_all_scale_shapes,
    find_open_scale_shape,
    melodic_shapes_at_starting_note,
    n_note_per_string_shape,
    normalize_octave_register,
    recursive_melodic_search,
)
from fretshapes.search.results import (
    ScaleShapeSearchResult,
    mirror_outer_strings,
    set_aside_best_two_shapes,
)

__all__ = [
    "ChordShapeSearchResult",
    "find_chord_shapes",
    "RecursiveSearchParams",
    "find_all_scale_shapes",
    "find_open_scale_shape",
    "melodic_shapes_at_starting_note",
    "n_note_per_string_shape",
    "normalize_octave_register",
    "recursive_melodic_search",
    "ScaleShapeSearchResult",
    "mirror_outer_strings",
    "set_aside_best_two_shapes",
]
