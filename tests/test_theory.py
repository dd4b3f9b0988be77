"""
Unit tests for the pitch, note-collection and voicing primitives.
"""
import pytest

from fretshapes.errors import InvalidNoteError, NotAMemberError, PitchRangeError
from fretshapes.theory import Clef, Note, NoteSet, Pitch, Voicing


def P(text):
    return Pitch.parse(text)


class TestNote:
    """Test note parsing and spelling."""

    def test_parse_flat(self):
        note = Note.parse("Bb")
        assert note.letter == "B"
        assert note.accidental == -1
        assert note.pc == 10
        assert str(note) == "Bb"

    def test_parse_double_sharp(self):
        assert Note.parse("F##").pc == 7

    def test_invalid_note(self):
        with pytest.raises(InvalidNoteError):
            Note.parse("H")

    def test_enharmonic(self):
        assert Note.parse("A#").is_enharmonic(Note.parse("Bb"))
        assert Note.parse("A#") != Note.parse("Bb")

    def test_spelled_as_in(self):
        scale = NoteSet.from_pattern(Note.parse("F"), "major")
        assert str(Note.parse("A#").spelled_as_in(scale)) == "Bb"


class TestPitch:
    """Test pitch construction and arithmetic."""

    def test_parse_low_e(self):
        assert P("E3").midi == 52
        assert str(P("E3")) == "E3"

    def test_middle_c(self):
        assert P("C4").midi == 60

    def test_octave_follows_letter(self):
        """Cb4 sounds like B3 and B#3 like C4."""
        assert P("Cb4").midi == 59
        assert P("Cb4").octave == 4
        assert P("B#3").midi == 60
        assert P("B#3").octave == 3

    def test_from_midi_uses_sharps(self):
        assert str(Pitch.from_midi(61)) == "C#4"

    def test_out_of_range(self):
        with pytest.raises(PitchRangeError):
            Pitch.from_midi(128)

    def test_up_to_note(self):
        """Next D at or above E3 is D4, spelled as requested."""
        assert str(P("E3").up_to_note(Note.parse("D"))) == "D4"
        assert P("E3").up_to_note(Note.parse("E")).midi == 52
        assert str(P("E3").up_to_note(Note.parse("Gb"))) == "Gb3"

    def test_diatonic_distance(self):
        assert P("C5").diatonic_distance(P("E5")) == 2
        assert P("C4").diatonic_distance(P("C5")) == 7
        assert P("C5").diatonic_distance(P("C4")) == -7


class TestNoteSet:
    """Test the ordered cyclic note collection."""

    def test_c_major(self):
        assert str(NoteSet.major(Note.parse("C"))) == "{C D E F G A B}"

    def test_flat_key_spelling(self):
        assert str(NoteSet.major(Note.parse("Eb"))) == "{Eb F G Ab Bb C D}"

    def test_minor_pentatonic(self):
        scale = NoteSet.from_pattern(Note.parse("A"), "minor_pentatonic")
        assert str(scale) == "{A C D E G}"

    def test_unknown_scale(self):
        with pytest.raises(InvalidNoteError):
            NoteSet.from_pattern(Note.parse("C"), "bebop")

    def test_dedupes_by_pitch_class(self):
        notes = NoteSet([Note.parse("C"), Note.parse("E"), Note.parse("B#")])
        assert len(notes) == 2

    def test_orientation(self):
        notes = NoteSet([Note.parse(n) for n in "CEG"], Note.parse("E"))
        assert [str(n) for n in notes] == ["E", "G", "C"]

    def test_up_n_steps_wraps(self):
        scale = NoteSet.major(Note.parse("C"))
        assert scale.up_n_steps(Note.parse("B"), 1) == Note.parse("C")
        assert scale.up_n_steps(Note.parse("G"), 3) == Note.parse("C")

    def test_not_a_member(self):
        with pytest.raises(NotAMemberError):
            NoteSet.major(Note.parse("C")).up_n_steps(Note.parse("C#"), 1)

    def test_membership_by_pitch_class(self):
        assert Note.parse("A#") in NoteSet.major(Note.parse("F"))
        assert Note.parse("F#") not in NoteSet.major(Note.parse("F"))


class TestVoicing:
    """Test voicings and clef register normalization."""

    def test_sorted(self):
        voicing = Voicing.from_pitches([P("G4"), P("C4"), P("E4")])
        assert str(voicing) == "C4 E4 G4"
        assert voicing.stacked_intervals() == [4, 3]

    def test_wide_intervals(self):
        assert Voicing.from_pitches([P("C3"), P("E4")]).has_wide_intervals()
        assert not Voicing.from_pitches([P("C4"), P("E4"), P("G4")]).has_wide_intervals()

    def test_normalize_low_triad(self):
        voicing = Voicing.from_pitches([P("C3"), P("E3"), P("G3")])
        assert str(voicing.normalize_register_to_clef(Clef.TREBLE)) == "C5 E5 G5"

    def test_normalize_is_idempotent(self):
        voicing = Voicing.from_pitches([P("C5"), P("E5"), P("G5")])
        assert voicing.normalize_register_to_clef(Clef.TREBLE) == voicing

    def test_normalize_inside_staff(self):
        voicing = Voicing.from_pitches([P("G4"), P("C5"), P("E5")])
        assert voicing.normalize_register_to_clef(Clef.TREBLE) == voicing

    def test_empty(self):
        assert Voicing().normalize_register_to_clef(Clef.TREBLE) == Voicing()
