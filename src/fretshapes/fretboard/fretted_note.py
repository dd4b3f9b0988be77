"""
Fretted notes: what one string does in a shape.

A string is either sounded at some fret or muted. Both carry the
fretboard they belong to so that navigation can validate against it.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional, Union

from fretshapes.errors import FretboardError
from fretshapes.theory.collections import NoteSet
from fretshapes.theory.notes import Note, Pitch

if TYPE_CHECKING:
    from fretshapes.fretboard.fretboard import Fretboard


@dataclass(frozen=True)
class SoundedNote:
    string: int
    fret: int
    pitch: Pitch
    fretboard: "Fretboard" = field(compare=False, repr=False)

    is_sounded = True

    @property
    def note(self) -> Note:
        return self.pitch.note

    def spelled_as_in(self, notes: Iterable[Note]) -> "SoundedNote":
        return SoundedNote(self.string, self.fret, self.pitch.spelled_as_in(notes), self.fretboard)

    def up_n_frets(self, n: int) -> "SoundedNote":
        return self.fretboard.sounded_note(self.string, self.fret + n)

    def down_n_frets(self, n: int) -> "SoundedNote":
        return self.fretboard.sounded_note(self.string, self.fret - n)

    def up_an_octave(self) -> "SoundedNote":
        return self.fretboard.sounded_note(self.string, self.fret + 12, self.note)

    def down_an_octave(self) -> "SoundedNote":
        if self.fret < 12:
            raise FretboardError(f"{self} has no lower octave on its string")
        return self.fretboard.sounded_note(self.string, self.fret - 12, self.note)

    def next_note_same_string(self, notes: NoteSet) -> "SoundedNote":
        """Next degree of ``notes`` above this one, on the same string."""
        pitch = self.pitch.up_to_note(notes.up_n_steps(self.note, 1))
        fret = pitch.midi - self.fretboard.get_string(self.string).midi
        return self.fretboard.sounded_note(self.string, fret, pitch.note)

    def next_note_next_string(self, notes: NoteSet) -> "SoundedNote":
        """Next degree of ``notes`` above this one, on the string above."""
        pitch = self.pitch.up_to_note(notes.up_n_steps(self.note, 1))
        next_string = self.fretboard.get_string(self.string + 1)
        if next_string.midi > pitch.midi:
            raise FretboardError(f"{pitch} is lower than the open string {next_string}")
        return self.fretboard.sounded_note(self.string + 1, pitch.midi - next_string.midi, pitch.note)

    def __str__(self) -> str:
        return f"{self.string + 1}:{self.fret}({self.note})"


@dataclass(frozen=True)
class MutedString:
    string: int
    fretboard: "Fretboard" = field(compare=False, repr=False)

    is_sounded = False
    fret: Optional[int] = field(default=None, init=False)
    pitch: Optional[Pitch] = field(default=None, init=False)

    def __str__(self) -> str:
        return "x"


FrettedNote = Union[SoundedNote, MutedString]
