"""
Fretshapes Rules Module.

Ergonomic rules for fretted instruments:
  - chord playability (fret span per number of sounded strings)
  - melodic transitions (stretches and string crossings)
"""

from fretshapes.rules.chords import (
    is_playable_chord,
    HIGH_POSITION_FRET,
)

from fretshapes.rules.melodic import (
    # Individual rules
    rule_same_string_stretch,
    rule_three_note_stretch,
    rule_crossing_drop,
    rule_double_crossing,

    # Aggregate functions
    tally_new_violations,
    score_shape,

    # Look-back guards
    crossing_blocked,
    skip_blocked,
)

__all__ = [
    "is_playable_chord",
    "HIGH_POSITION_FRET",
    "rule_same_string_stretch",
    "rule_three_note_stretch",
    "rule_crossing_drop",
    "rule_double_crossing",
    "tally_new_violations",
    "score_shape",
    "crossing_blocked",
    "skip_blocked",
]
