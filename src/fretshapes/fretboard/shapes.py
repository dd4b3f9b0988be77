"""Chord shapes (one entry per string) and melodic shapes (an ordered traversal)."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Tuple

from fretshapes.fretboard.fretted_note import FrettedNote, MutedString, SoundedNote
from fretshapes.rules.chords import HIGH_POSITION_FRET, is_playable_chord
from fretshapes.theory.notes import Pitch
from fretshapes.theory.voicing import Voicing

if TYPE_CHECKING:
    from fretshapes.fretboard.fretboard import Fretboard

# Two octaves, in semitones
COMPLETE_RANGE = 24


class ChordShapeClassification(Enum):
    PLAYABLE = "playable"
    ALL_ABOVE_12TH_FRET = "all_above_12th_fret"
    NON_TRANSPOSABLE = "non_transposable"
    UNPLAYABLE = "unplayable"


@dataclass(frozen=True)
class FretboardShape:
    """A chord fingering: exactly one fretted note per string, lowest string first."""

    fretted_notes: Tuple[FrettedNote, ...]
    fretboard: "Fretboard" = field(compare=False, repr=False)

    @property
    def sounded_notes(self) -> List[SoundedNote]:
        return [n for n in self.fretted_notes if n.is_sounded]

    @property
    def size(self) -> int:
        return len(self.sounded_notes)

    @property
    def fret_span(self) -> int:
        frets = [n.fret for n in self.sounded_notes]
        if not frets:
            return 0
        return max(frets) - min(frets)

    def is_playable(self) -> bool:
        return is_playable_chord(self.size, self.fret_span)

    def contains_open_strings(self) -> bool:
        return any(n.fret == 0 for n in self.sounded_notes)

    def without_open_strings(self) -> "FretboardShape":
        notes = tuple(
            MutedString(n.string, self.fretboard) if n.is_sounded and n.fret == 0 else n
            for n in self.fretted_notes
        )
        return FretboardShape(notes, self.fretboard)

    def classify(self) -> ChordShapeClassification:
        if self.is_playable():
            if all(n.fret > HIGH_POSITION_FRET for n in self.sounded_notes):
                return ChordShapeClassification.ALL_ABOVE_12TH_FRET
            return ChordShapeClassification.PLAYABLE
        if self.contains_open_strings() and self.without_open_strings().is_playable():
            return ChordShapeClassification.NON_TRANSPOSABLE
        return ChordShapeClassification.UNPLAYABLE

    def voicing(self) -> Voicing:
        return Voicing.from_pitches(n.pitch for n in self.sounded_notes)

    def contains(self, pitch: Pitch) -> bool:
        return any(n.pitch.midi == pitch.midi for n in self.sounded_notes)

    def __str__(self) -> str:
        return "-".join("x" if n.fret is None else str(n.fret) for n in self.fretted_notes)


@dataclass(frozen=True)
class MelodicFretboardShape:
    """
    A scale fingering: sounded notes in playing order plus a penalty score.

    Higher scores are worse.
    """

    notes: Tuple[SoundedNote, ...]
    score: int = 0

    def __len__(self) -> int:
        return len(self.notes)

    @property
    def fretboard(self) -> "Fretboard":
        return self.notes[0].fretboard

    def range(self) -> Tuple[Pitch, Pitch]:
        pitches = sorted((n.pitch for n in self.notes), key=lambda p: p.midi)
        return pitches[0], pitches[-1]

    def is_complete(self) -> bool:
        """Covers at least two octaves."""
        low, high = self.range()
        return high.midi - low.midi >= COMPLETE_RANGE

    def span(self) -> Tuple[int, int]:
        """Lowest and highest fret, open strings included."""
        frets = [n.fret for n in self.notes]
        return min(frets), max(frets)

    @property
    def fret_span(self) -> int:
        low, high = self.span()
        return high - low

    def positions(self) -> set:
        return {(n.string, n.fret) for n in self.notes}

    def contains_shape(self, other: "MelodicFretboardShape") -> bool:
        """True if every note of ``other`` is also in this shape, on the same fretboard."""
        if self.fretboard != other.fretboard:
            return False
        return other.positions() <= self.positions()

    def __str__(self) -> str:
        return " ".join(str(n) for n in self.notes)
