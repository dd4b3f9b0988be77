"""
Aggregating per-note melodic search results into named shape categories.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from fretshapes.fretboard.fretboard import Fretboard
from fretshapes.fretboard.shapes import MelodicFretboardShape
from fretshapes.rules.melodic import SIMPLE_SHAPE_SPAN
from fretshapes.search.melodic import (
    as_note_set,
    find_all_scale_shapes,
    find_open_scale_shape,
    n_note_per_string_shape,
)
from fretshapes.theory.notes import Note

logger = logging.getLogger(__name__)

# (notes on odd strings, notes on even strings)
N_PER_STRING_PATTERNS = ((2, 2), (2, 3), (3, 3))


def set_aside_best_two_shapes(
    shapes: Iterable[MelodicFretboardShape],
) -> Tuple[List[MelodicFretboardShape], List[MelodicFretboardShape]]:
    """
    Online top-two selection by score.

    The first two shapes are kept unconditionally. Afterwards a shape with a
    strictly lower score than the worse of the two replaces it, and the
    replaced shape goes to the overflow; ties and higher scores go straight
    to the overflow.

    Returns:
        (best two, lowest score first; overflow in arrival order)
    """
    best: List[MelodicFretboardShape] = []
    overflow: List[MelodicFretboardShape] = []
    for shape in shapes:
        if len(best) < 2:
            best.append(shape)
            continue
        worse = 0 if best[0].score > best[1].score else 1
        if shape.score < best[worse].score:
            overflow.append(best[worse])
            best[worse] = shape
        else:
            overflow.append(shape)
    best.sort(key=lambda s: s.score)
    return best, overflow


def mirror_outer_strings(shape: MelodicFretboardShape) -> MelodicFretboardShape:
    """
    Copy notes between the outer strings when they are tuned to the same pitch class.

    On an E-to-E guitar a note on the low E string is also playable at the
    same fret on the high E string, and the reverse.
    """
    fretboard = shape.fretboard
    top = fretboard.num_strings - 1
    if top == 0 or fretboard.get_string(0).pc != fretboard.get_string(top).pc:
        return shape
    positions = shape.positions()
    notes = list(shape.notes)
    for note in shape.notes:
        if note.string in (0, top):
            other = top if note.string == 0 else 0
            if (other, note.fret) not in positions:
                notes.append(fretboard.sounded_note(other, note.fret, note.note))
                positions.add((other, note.fret))
    notes.sort(key=lambda n: (n.pitch.midi, n.string))
    return MelodicFretboardShape(tuple(notes), shape.score)


def _fold_into_simple(simple: List[MelodicFretboardShape], shape: MelodicFretboardShape) -> None:
    mirrored = mirror_outer_strings(shape)
    if any(existing.contains_shape(mirrored) for existing in simple):
        return
    simple.append(mirrored)


@dataclass
class ScaleShapeSearchResult:
    """Every category of scale fingering for one scale on one fretboard."""

    open: Optional[MelodicFretboardShape] = None
    simple: List[MelodicFretboardShape] = field(default_factory=list)
    n_per_string_2_2: Dict[Note, Optional[MelodicFretboardShape]] = field(default_factory=dict)
    n_per_string_2_3: Dict[Note, Optional[MelodicFretboardShape]] = field(default_factory=dict)
    n_per_string_3_3: Dict[Note, Optional[MelodicFretboardShape]] = field(default_factory=dict)
    other: Dict[Note, List[MelodicFretboardShape]] = field(default_factory=dict)

    def n_per_string(self, pattern: Sequence[int]) -> Dict[Note, Optional[MelodicFretboardShape]]:
        return {
            (2, 2): self.n_per_string_2_2,
            (2, 3): self.n_per_string_2_3,
            (3, 3): self.n_per_string_3_3,
        }[tuple(pattern)]

    @classmethod
    def from_raw_search_result(
        cls, scale: Iterable[Note], fretboard: Fretboard
    ) -> "ScaleShapeSearchResult":
        scale = as_note_set(scale)
        raw = find_all_scale_shapes(scale, fretboard)
        result = cls(open=find_open_scale_shape(scale, fretboard))

        for note, shapes in raw.items():
            for pattern in N_PER_STRING_PATTERNS:
                result.n_per_string(pattern)[note] = n_note_per_string_shape(
                    scale, note, fretboard, *pattern
                )

            best, overflow = set_aside_best_two_shapes(shapes)
            other = result.other.setdefault(note, [])
            for shape in best:
                if shape.fret_span < SIMPLE_SHAPE_SPAN:
                    _fold_into_simple(result.simple, shape)
                else:
                    other.append(shape)
            other.extend(overflow)

        logger.info(
            "Scale %s: %d simple shapes, %d other",
            scale, len(result.simple), sum(len(v) for v in result.other.values()),
        )
        return result
