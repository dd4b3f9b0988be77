"""
Exhaustive chord-shape search.

Every assignment of the chord's notes to every group of strings is
enumerated, realized at each candidate fret, and sorted into buckets keyed
by the voicing it sounds.
"""

import logging
from dataclasses import dataclass, field
from itertools import combinations, permutations, product
from typing import Dict, Iterable, List

from fretshapes.fretboard.fretboard import Fretboard
from fretshapes.fretboard.shapes import ChordShapeClassification, FretboardShape
from fretshapes.rules.chords import ALTERNATE_OCTAVE_FRET
from fretshapes.theory.notes import Note
from fretshapes.theory.voicing import Clef, Voicing

logger = logging.getLogger(__name__)

ShapeBucket = Dict[Voicing, List[FretboardShape]]


@dataclass
class ChordShapeSearchResult:
    playable: ShapeBucket = field(default_factory=dict)
    wide_intervals: ShapeBucket = field(default_factory=dict)
    all_above_12th_fret: ShapeBucket = field(default_factory=dict)
    nontransposable: ShapeBucket = field(default_factory=dict)
    unplayable: ShapeBucket = field(default_factory=dict)

    def buckets(self) -> Dict[str, ShapeBucket]:
        return {
            "playable": self.playable,
            "wide_intervals": self.wide_intervals,
            "all_above_12th_fret": self.all_above_12th_fret,
            "nontransposable": self.nontransposable,
            "unplayable": self.unplayable,
        }

    def total(self) -> int:
        """Number of shapes across every bucket."""
        return sum(len(shapes) for bucket in self.buckets().values() for shapes in bucket.values())

    def add(self, shape: FretboardShape, key: Voicing) -> None:
        classification = shape.classify()
        if classification == ChordShapeClassification.PLAYABLE:
            bucket = self.wide_intervals if key.has_wide_intervals() else self.playable
        elif classification == ChordShapeClassification.ALL_ABOVE_12TH_FRET:
            bucket = self.all_above_12th_fret
        elif classification == ChordShapeClassification.NON_TRANSPOSABLE:
            bucket = self.nontransposable
        else:
            bucket = self.unplayable
        bucket.setdefault(key, []).append(shape)


def fret_alternatives(fret: int) -> List[int]:
    """Low frets are also tried an octave higher."""
    if fret < ALTERNATE_OCTAVE_FRET:
        return [fret, fret + 12]
    return [fret]


def find_chord_shapes(chord: Iterable[Note], fretboard: Fretboard) -> ChordShapeSearchResult:
    """
    Enumerate every fingering of ``chord`` on ``fretboard``.

    Args:
        chord: Distinct notes; duplicates by pitch class are dropped.
        fretboard: Instrument to search on.

    Returns:
        ChordShapeSearchResult. Empty when the chord is empty or has more
        notes than the instrument has strings.
    """
    notes: List[Note] = []
    for note in chord:
        if all(note.pc != n.pc for n in notes):
            notes.append(note)

    result = ChordShapeSearchResult()
    if not notes or len(notes) > fretboard.num_strings:
        logger.info("No chord shapes for %d notes on %d strings", len(notes), fretboard.num_strings)
        return result

    for strings in combinations(range(fretboard.num_strings), len(notes)):
        for ordering in permutations(notes):
            alternatives = [
                fret_alternatives(fretboard.which_fret(note, string))
                for string, note in zip(strings, ordering)
            ]
            for frets in product(*alternatives):
                assigned = dict(zip(strings, zip(frets, ordering)))
                fretted = tuple(
                    fretboard.sounded_note(s, *assigned[s]) if s in assigned else fretboard.muted(s)
                    for s in range(fretboard.num_strings)
                )
                shape = FretboardShape(fretted, fretboard)
                key = shape.voicing().normalize_register_to_clef(Clef.TREBLE).spelled_as_in(notes)
                result.add(shape, key)

    logger.info(
        "Found %d chord shapes for %s (%d playable voicings)",
        result.total(), " ".join(str(n) for n in notes), len(result.playable),
    )
    return result
