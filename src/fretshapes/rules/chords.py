"""
Chord playability heuristic.

A fretting hand covers about four frets with three fingers and about three
frets once all four fingers are down.
"""

# =============================================================================
# SPAN LIMITS
# =============================================================================

# Sounded strings at or below which the wider limit applies
SMALL_CHORD_SIZE = 3

# Widest fret span for small and large chords
MAX_SMALL_CHORD_SPAN = 4
MAX_LARGE_CHORD_SPAN = 3

# Playable shapes whose sounded frets all exceed this sit above the 12th fret
HIGH_POSITION_FRET = 12

# Notes below this fret are also tried an octave higher
ALTERNATE_OCTAVE_FRET = 6


def is_playable_chord(size: int, span: int) -> bool:
    """
    Check whether a chord shape fits under one hand.

    Args:
        size: Number of sounded strings.
        span: Highest minus lowest sounded fret.

    Returns:
        True if the span is within the limit for that many strings.
    """
    if size <= SMALL_CHORD_SIZE:
        return span <= MAX_SMALL_CHORD_SPAN
    return span <= MAX_LARGE_CHORD_SPAN
