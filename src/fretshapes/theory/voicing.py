"""Voicings: the audible pitch content of a shape, and clef registers."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from fretshapes.theory.notes import Note, Pitch

# Adjacent intervals at or above this many semitones are "wide"
WIDE_INTERVAL = 12


class Clef(Enum):
    # (lowest staff line, highest staff line, middle line)
    TREBLE = ("E4", "F5", "B4")
    BASS = ("G2", "A3", "D3")

    @property
    def bounds(self) -> Tuple[Pitch, Pitch]:
        return Pitch.parse(self.value[0]), Pitch.parse(self.value[1])

    @property
    def middle(self) -> Pitch:
        return Pitch.parse(self.value[2])


@dataclass(frozen=True)
class Voicing:
    """Pitches sorted from lowest to highest. Hashable, so it can key results."""

    pitches: Tuple[Pitch, ...] = ()

    @classmethod
    def from_pitches(cls, pitches: Iterable[Pitch]) -> "Voicing":
        return cls(tuple(sorted(pitches, key=lambda p: p.midi)))

    def __len__(self) -> int:
        return len(self.pitches)

    @property
    def bottom(self) -> Pitch:
        return self.pitches[0]

    @property
    def top(self) -> Pitch:
        return self.pitches[-1]

    def span(self) -> int:
        if not self.pitches:
            return 0
        return self.top.midi - self.bottom.midi

    def stacked_intervals(self) -> List[int]:
        return [b.midi - a.midi for a, b in zip(self.pitches, self.pitches[1:])]

    def has_wide_intervals(self) -> bool:
        return any(interval >= WIDE_INTERVAL for interval in self.stacked_intervals())

    def move_by_octaves(self, n: int) -> "Voicing":
        return Voicing(tuple(p.raise_octaves(n) for p in self.pitches))

    def spelled_as_in(self, notes: Iterable[Note]) -> "Voicing":
        notes = list(notes)
        return Voicing(tuple(p.spelled_as_in(notes) for p in self.pitches))

    def normalize_register_to_clef(self, clef: Clef) -> "Voicing":
        """
        Shift by whole octaves until the voicing sits roughly centered on the clef.

        Distances are counted in staff steps. A voicing more than an octave
        further below the staff than above it moves up; the reverse moves down.
        """
        if not self.pitches:
            return self
        clef_bottom, clef_top = clef.bounds
        voicing = self

        def distances(v):
            return v.bottom.diatonic_distance(clef_bottom), clef_top.diatonic_distance(v.top)

        bottom_distance, top_distance = distances(voicing)
        while (bottom_distance > 0 or top_distance > 0) and top_distance < bottom_distance - 7:
            voicing = voicing.move_by_octaves(1)
            bottom_distance, top_distance = distances(voicing)
        while (bottom_distance > 0 or top_distance > 0) and bottom_distance <= top_distance - 7:
            voicing = voicing.move_by_octaves(-1)
            bottom_distance, top_distance = distances(voicing)
        return voicing

    def __str__(self) -> str:
        return " ".join(str(p) for p in self.pitches)
