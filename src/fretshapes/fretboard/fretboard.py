"""
Fretboard model.

A fretboard is just its open strings, lowest first. Every fret lookup is
relative to those pitches; nothing is stored per fret except a MIDI grid
used for reverse lookups.
"""

from dataclasses import dataclass
from functools import cached_property
from typing import List, Optional, Sequence, Tuple

import numpy as np

from fretshapes.errors import FretboardError, PitchRangeError
from fretshapes.fretboard.fretted_note import MutedString, SoundedNote
from fretshapes.theory.notes import Note, Pitch

# Highest fret any search may reach, well beyond a physical neck
MAX_FRET = 35
OPEN = 0


@dataclass(frozen=True)
class Fretboard:
    open_strings: Tuple[Pitch, ...]

    def __post_init__(self):
        if not self.open_strings:
            raise FretboardError("A fretboard needs at least one string")
        object.__setattr__(self, "open_strings", tuple(self.open_strings))

    @classmethod
    def from_names(cls, names: Sequence[str]) -> "Fretboard":
        """Build a fretboard from scientific pitch names, lowest string first."""
        return cls(tuple(Pitch.parse(name) for name in names))

    @property
    def num_strings(self) -> int:
        return len(self.open_strings)

    def get_string(self, string: int) -> Pitch:
        if not 0 <= string < self.num_strings:
            raise FretboardError(f"String {string} out of range for {self}")
        return self.open_strings[string]

    def pitch_at(self, string: int, fret: int) -> Pitch:
        if not OPEN <= fret <= MAX_FRET:
            raise FretboardError(f"Fret {fret} out of range 0..{MAX_FRET}")
        open_string = self.get_string(string)
        if fret == OPEN:
            return open_string
        try:
            return open_string.transpose(fret)
        except PitchRangeError as e:
            raise FretboardError(f"Fret {fret} on string {string}: {e}") from e

    def sounded_note(self, string: int, fret: int, spelling: Optional[Note] = None) -> SoundedNote:
        """
        Build a validated sounded note.

        Args:
            string: String index, 0 = lowest-tuned string.
            fret: Fret number, 0 = open.
            spelling: Optional note name to spell the resulting pitch with.
                Must share the pitch's pitch class.

        Returns:
            The SoundedNote at that position.
        """
        pitch = self.pitch_at(string, fret)
        if spelling is not None:
            pitch = pitch.spelled_as_in([spelling])
        return SoundedNote(string, fret, pitch, self)

    def muted(self, string: int) -> MutedString:
        self.get_string(string)
        return MutedString(string, self)

    def fret_of(self, pitch: Pitch, string: int) -> int:
        """Fret that sounds ``pitch`` on ``string``."""
        fret = pitch.midi - self.get_string(string).midi
        if not OPEN <= fret <= MAX_FRET:
            raise FretboardError(f"{pitch} cannot be played on string {string}")
        return fret

    def which_fret(self, note: Note, string: int) -> int:
        """Lowest fret (0..11) sounding the pitch class of ``note`` on ``string``."""
        return (note.pc - self.get_string(string).pc) % 12

    def note_on_string(self, note: Note, string: int) -> SoundedNote:
        return self.sounded_note(string, self.which_fret(note, string), note)

    @cached_property
    def midi_grid(self) -> np.ndarray:
        """MIDI number at every (string, fret), shape (strings, MAX_FRET + 1)."""
        opens = np.array([p.midi for p in self.open_strings])
        return np.add.outer(opens, np.arange(MAX_FRET + 1))

    def positions_of(self, pitch: Pitch) -> List[Tuple[int, int]]:
        """Every (string, fret) that sounds ``pitch``, lowest string first."""
        return [(int(s), int(f)) for s, f in np.argwhere(self.midi_grid == pitch.midi)]

    def __str__(self) -> str:
        return " ".join(str(p) for p in self.open_strings)


STANDARD_GUITAR = Fretboard.from_names(["E3", "A3", "D4", "G4", "B4", "E5"])
