"""
Ergonomic rules for melodic (scale) fingerings on a fretted instrument.

Each rule inspects the last two or three notes of a traversal and reports
whether the newest note created an awkward transition. All distances are in
frets, which on an equal-tempered neck are also semitones.
"""

from typing import Sequence, Tuple

# =============================================================================
# HAND-SPAN CONSTANTS
# =============================================================================

# Consecutive same-string notes this many frets apart (or more) count as a stretch
SAME_STRING_STRETCH = 4

# Three same-string notes spanning exactly this many frets (1-2-5, 1-4-5)
THREE_NOTE_STRETCH = 4

# Crossing to the next string while the fret drops by exactly this much
CROSSING_DROP = 4

# Fret drops across two consecutive crossings that keep the hand in position
SMOOTH_CROSSINGS = ((1, 1), (1, 2), (2, 1), (2, 2))

# Same-string run limits during the search
MAX_STRING_SPAN = 5
MAX_NOTES_PER_STRING = 4

# Same-string interval above which a string may be skipped entirely
SKIP_STRING_MIN_DISTANCE = 7

# Finished shapes wider than this are discarded
MAX_SHAPE_SPAN = 6

# Shapes narrower than this are "simple" shapes
SIMPLE_SHAPE_SPAN = 5

# The open-position walker stops on the top string at or past this fret
OPEN_SHAPE_LAST_FRET = 5

# Starting frets below this are moved up an octave to leave room below
SEED_HEADROOM_FRET = 7


# =============================================================================
# SAME-STRING RULES
# =============================================================================

def rule_same_string_stretch(notes: Sequence) -> bool:
    """
    Same-string stretch: the last two notes sit on one string at least
    SAME_STRING_STRETCH frets apart.

    Args:
        notes: Traversal so far, oldest first. Items need ``string`` and ``fret``.

    Returns:
        True if the newest note violates the rule.
    """
    if len(notes) < 2:
        return False
    prev, last = notes[-2], notes[-1]
    return prev.string == last.string and last.fret - prev.fret >= SAME_STRING_STRETCH


def rule_three_note_stretch(notes: Sequence) -> bool:
    """
    Three-note stretch: the last three notes share a string and cover
    exactly THREE_NOTE_STRETCH frets.
    """
    if len(notes) < 3:
        return False
    third, second, last = notes[-3], notes[-2], notes[-1]
    return (
        third.string == second.string == last.string
        and last.fret - third.fret == THREE_NOTE_STRETCH
    )


# =============================================================================
# STRING-CROSSING RULES
# =============================================================================

def rule_crossing_drop(notes: Sequence) -> bool:
    """Crossing up one string while the fret drops by exactly CROSSING_DROP."""
    if len(notes) < 2:
        return False
    prev, last = notes[-2], notes[-1]
    return prev.string + 1 == last.string and prev.fret - last.fret == CROSSING_DROP


def rule_double_crossing(notes: Sequence) -> bool:
    """
    Double crossing: two single-string crossings in a row whose fret drops
    are not one of SMOOTH_CROSSINGS.
    """
    if len(notes) < 3:
        return False
    third, second, last = notes[-3], notes[-2], notes[-1]
    crossed_twice = third.string + 1 == second.string and second.string + 1 == last.string
    drops = (third.fret - second.fret, second.fret - last.fret)
    return crossed_twice and drops not in SMOOTH_CROSSINGS


# =============================================================================
# AGGREGATE FUNCTIONS
# =============================================================================

def tally_new_violations(notes: Sequence) -> Tuple[int, int]:
    """
    Count the violations introduced by the newest note.

    Returns:
        (same-string violations, string-crossing violations)
    """
    same_string = int(rule_same_string_stretch(notes)) + int(rule_three_note_stretch(notes))
    crossing = int(rule_crossing_drop(notes)) + int(rule_double_crossing(notes))
    return same_string, crossing


def score_shape(notes: Sequence) -> int:
    """Total penalty of a complete traversal, tallied note by note."""
    return sum(sum(tally_new_violations(notes[:i])) for i in range(1, len(notes) + 1))


# =============================================================================
# LOOK-BACK GUARDS
# These block a string change right after a crossing when the hand is
# already stretched. Their boolean structure is tuned empirically.
# =============================================================================

def crossing_blocked(notes: Sequence, notes_on_string: int, distance: int, gap: int) -> bool:
    """
    Guard for moving to the adjacent string.

    Args:
        notes: Traversal so far; the last item is the current note.
        notes_on_string: Notes played so far on the current string.
        distance: Frets from the current note to the next degree on the same string.
        gap: Semitones between the current and the adjacent open string.
    """
    if not (notes_on_string == 1 and len(notes) > 1):
        return False
    second, last = notes[-2], notes[-1]
    if len(notes) > 2 and notes[-3].fret - second.fret > 1 and distance < 3:
        return True
    return second.fret - last.fret > 3 and distance < gap


def skip_blocked(previous_fret: int, last_fret: int, distance: int, gap: int) -> bool:
    """Guard for skipping a string: the fret just dropped by more than one."""
    drop = previous_fret - last_fret
    return drop > 1 or (drop > 3 and distance < gap)
