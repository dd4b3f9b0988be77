"""Ordered, cyclic note collections (scales and chords)."""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from fretshapes.errors import InvalidNoteError, NotAMemberError
from fretshapes.theory.notes import LETTERS, NATURAL_PC, MAX_ACCIDENTAL, Note

# Step patterns in semitones, one entry per diatonic degree
SCALE_PATTERNS = {
    "major": [2, 2, 1, 2, 2, 2, 1],
    "natural_minor": [2, 1, 2, 2, 1, 2, 2],
    "harmonic_minor": [2, 1, 2, 2, 1, 3, 1],
    "melodic_minor": [2, 1, 2, 2, 2, 2, 1],
    "dorian": [2, 1, 2, 2, 2, 1, 2],
    "phrygian": [1, 2, 2, 2, 1, 2, 2],
    "lydian": [2, 2, 2, 1, 2, 2, 1],
    "mixolydian": [2, 2, 1, 2, 2, 1, 2],
    "locrian": [1, 2, 2, 1, 2, 2, 2],
}

# Pentatonics as (parent scale, 1-based degrees kept)
PENTATONIC_DEGREES = {
    "major_pentatonic": ("major", (1, 2, 3, 5, 6)),
    "minor_pentatonic": ("natural_minor", (1, 3, 4, 5, 7)),
}


def scale_names() -> List[str]:
    return sorted(list(SCALE_PATTERNS) + list(PENTATONIC_DEGREES))


def _spell_degree(root: Note, degree: int, semitones: int) -> Note:
    letter = LETTERS[(root.letter_index + degree) % 7]
    accidental = (root.pc + semitones - NATURAL_PC[letter]) % 12
    if accidental > 6:
        accidental -= 12
    if abs(accidental) > MAX_ACCIDENTAL:
        return Note.from_pc(root.pc + semitones)
    return Note(letter, accidental)


class NoteSet:
    """
    Notes deduplicated by pitch class and ordered upward from a starting note.

    Stepping wraps around, so ``up_n_steps`` on the last note returns the
    first one again.
    """

    def __init__(self, notes: Iterable[Note], starting_note: Optional[Note] = None):
        unique: Dict[int, Note] = {}
        for note in notes:
            unique.setdefault(note.pc, note)
        if starting_note is None and unique:
            starting_note = next(iter(unique.values()))
        orientation = starting_note.pc if starting_note is not None else 0
        self._notes: Tuple[Note, ...] = tuple(
            sorted(unique.values(), key=lambda n: (n.pc - orientation) % 12)
        )
        self.starting_note = starting_note

    @classmethod
    def from_pattern(cls, root: Note, name: str = "major") -> "NoteSet":
        """Build a named scale on ``root`` with one letter per degree."""
        if name in PENTATONIC_DEGREES:
            parent, degrees = PENTATONIC_DEGREES[name]
            notes = cls.from_pattern(root, parent).notes
            return cls([notes[d - 1] for d in degrees], root)
        steps = SCALE_PATTERNS.get(name)
        if steps is None:
            raise InvalidNoteError(f"Unsupported scale: {name}")
        notes = []
        semitones = 0
        for degree, step in enumerate(steps):
            notes.append(_spell_degree(root, degree, semitones))
            semitones += step
        return cls(notes, root)

    @classmethod
    def major(cls, root: Note) -> "NoteSet":
        return cls.from_pattern(root, "major")

    @property
    def notes(self) -> Tuple[Note, ...]:
        return self._notes

    def with_starting_note(self, note: Note) -> "NoteSet":
        return NoteSet(self._notes, note)

    def index_of(self, note: Note) -> int:
        for i, member in enumerate(self._notes):
            if member.pc == note.pc:
                return i
        raise NotAMemberError(note, self)

    def up_n_steps(self, note: Note, n: int) -> Note:
        return self._notes[(self.index_of(note) + n) % len(self._notes)]

    def __contains__(self, note: Note) -> bool:
        return any(member.pc == note.pc for member in self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def __getitem__(self, index: int) -> Note:
        return self._notes[index]

    def __str__(self) -> str:
        return "{" + " ".join(str(n) for n in self._notes) + "}"

    def __repr__(self) -> str:
        return f"NoteSet({self})"
