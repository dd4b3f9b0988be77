"""
Note names and pitches.

A Note is a spelled pitch class (letter plus accidental). A Pitch pins a
Note to a register through its MIDI number; the spelling is kept so that
scale degrees print the way the scale spells them.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from fretshapes.errors import InvalidNoteError, PitchRangeError

# =============================================================================
# SPELLING TABLES
# =============================================================================

LETTERS = "CDEFGAB"

NATURAL_PC = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

# Default spelling for pitches computed from semitones alone
SHARP_SPELLINGS = (
    ("C", 0), ("C", 1), ("D", 0), ("D", 1), ("E", 0), ("F", 0),
    ("F", 1), ("G", 0), ("G", 1), ("A", 0), ("A", 1), ("B", 0),
)

MAX_ACCIDENTAL = 2

MIN_MIDI = 0
MAX_MIDI = 127

_NOTE_RE = re.compile(r"^([A-Ga-g])(#{1,2}|b{1,2})?$")
_PITCH_RE = re.compile(r"^([A-Ga-g])(#{1,2}|b{1,2})?(-?\d)$")


def _accidental_from_text(text: Optional[str]) -> int:
    if not text:
        return 0
    return len(text) if text[0] == "#" else -len(text)


@dataclass(frozen=True)
class Note:
    """A spelled pitch class such as ``C``, ``F#`` or ``Bb``."""

    letter: str
    accidental: int = 0

    def __post_init__(self):
        if self.letter not in NATURAL_PC:
            raise InvalidNoteError(f"Unknown note letter: {self.letter!r}")
        if abs(self.accidental) > MAX_ACCIDENTAL:
            raise InvalidNoteError(f"Too many accidentals: {self.accidental}")

    @classmethod
    def parse(cls, text: str) -> "Note":
        match = _NOTE_RE.match(text.strip())
        if not match:
            raise InvalidNoteError(f"Cannot parse note: {text!r}")
        return cls(match.group(1).upper(), _accidental_from_text(match.group(2)))

    @classmethod
    def from_pc(cls, pc: int) -> "Note":
        letter, accidental = SHARP_SPELLINGS[pc % 12]
        return cls(letter, accidental)

    @property
    def pc(self) -> int:
        return (NATURAL_PC[self.letter] + self.accidental) % 12

    @property
    def letter_index(self) -> int:
        return LETTERS.index(self.letter)

    def is_enharmonic(self, other: "Note") -> bool:
        return self.pc == other.pc

    def spelled_as_in(self, notes: Iterable["Note"]) -> "Note":
        """Return the spelling used by ``notes`` for this pitch class, if any."""
        for note in notes:
            if note.pc == self.pc:
                return note
        return self

    def __str__(self) -> str:
        if self.accidental >= 0:
            return self.letter + "#" * self.accidental
        return self.letter + "b" * -self.accidental


@dataclass(frozen=True)
class Pitch:
    """A note in a specific register, identified by its MIDI number."""

    midi: int
    note: Note

    def __post_init__(self):
        if not MIN_MIDI <= self.midi <= MAX_MIDI:
            raise PitchRangeError(f"MIDI number out of range: {self.midi}")
        if self.note.pc != self.midi % 12:
            raise InvalidNoteError(f"{self.note} cannot spell MIDI {self.midi}")

    @classmethod
    def new(cls, note: Note, octave: int) -> "Pitch":
        # B#3 and C4 share a MIDI number, so the octave follows the letter
        midi = (octave + 1) * 12 + NATURAL_PC[note.letter] + note.accidental
        if not MIN_MIDI <= midi <= MAX_MIDI:
            raise PitchRangeError(f"{note}{octave} is out of range")
        return cls(midi, note)

    @classmethod
    def from_midi(cls, midi: int) -> "Pitch":
        if not MIN_MIDI <= midi <= MAX_MIDI:
            raise PitchRangeError(f"MIDI number out of range: {midi}")
        return cls(midi, Note.from_pc(midi))

    @classmethod
    def parse(cls, text: str) -> "Pitch":
        """Parse scientific pitch notation, e.g. ``E3`` or ``Bb4``."""
        match = _PITCH_RE.match(text.strip())
        if not match:
            raise InvalidNoteError(f"Cannot parse pitch: {text!r}")
        note = Note(match.group(1).upper(), _accidental_from_text(match.group(2)))
        return cls.new(note, int(match.group(3)))

    @property
    def pc(self) -> int:
        return self.midi % 12

    @property
    def octave(self) -> int:
        return (self.midi - NATURAL_PC[self.note.letter] - self.note.accidental) // 12 - 1

    def transpose(self, semitones: int) -> "Pitch":
        return Pitch.from_midi(self.midi + semitones)

    def raise_octaves(self, n: int) -> "Pitch":
        midi = self.midi + 12 * n
        if not MIN_MIDI <= midi <= MAX_MIDI:
            raise PitchRangeError(f"Cannot move {self} by {n} octaves")
        return Pitch(midi, self.note)

    def up_to_note(self, note: Note) -> "Pitch":
        """The nearest pitch at or above this one with the pitch class of ``note``."""
        midi = self.midi + (note.pc - self.pc) % 12
        if midi > MAX_MIDI:
            raise PitchRangeError(f"No {note} at or above {self}")
        return Pitch(midi, note)

    def spelled_as_in(self, notes: Iterable[Note]) -> "Pitch":
        return Pitch(self.midi, self.note.spelled_as_in(notes))

    def diatonic_distance(self, other: "Pitch") -> int:
        """Signed count of letter names from this pitch up to ``other``."""
        own = self.octave * 7 + self.note.letter_index
        theirs = other.octave * 7 + other.note.letter_index
        return theirs - own

    def __str__(self) -> str:
        return f"{self.note}{self.octave}"
