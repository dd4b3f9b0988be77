"""
Tests for the recursive melodic search and the constructive scale builders.
"""
import pytest

from fretshapes.errors import EmptyScaleError, InvalidNNotesPerString
from fretshapes.fretboard import STANDARD_GUITAR, Fretboard
from fretshapes.search import (
    RecursiveSearchParams,
    find_all_scale_shapes,
    find_open_scale_shape,
    melodic_shapes_at_starting_note,
    n_note_per_string_shape,
    normalize_octave_register,
    recursive_melodic_search,
)
from fretshapes.theory import Note, NoteSet

C = Note.parse("C")
E = Note.parse("E")
G = Note.parse("G")
C_MAJOR = NoteSet.major(C)
# Every step is a fourth or a fifth, wide enough to skip a string
C_FIFTHS = [C, G]

OPEN_C_MAJOR = (
    "1:0(E) 1:1(F) 1:3(G) 2:0(A) 2:2(B) 2:3(C) 3:0(D) 3:2(E) 3:3(F) "
    "4:0(G) 4:2(A) 5:0(B) 5:1(C) 5:3(D) 6:0(E) 6:1(F) 6:3(G) 6:5(A)"
)

# Three notes per string in the 7th-10th fret box
C_MAJOR_POSITION_VII = (
    "1:8(C) 1:10(D) 2:7(E) 2:8(F) 2:10(G) 3:7(A) 3:9(B) 3:10(C) "
    "4:7(D) 4:9(E) 4:10(F) 5:8(G) 5:10(A) 6:7(B) 6:8(C)"
)


@pytest.fixture(scope="module")
def c_major_from_c():
    return melodic_shapes_at_starting_note(C_MAJOR, C, STANDARD_GUITAR)


class TestMelodicShapesAtStartingNote:
    """Test the full search from one starting note."""

    def test_finds_shapes(self, c_major_from_c):
        assert c_major_from_c

    def test_known_fingering_is_found(self, c_major_from_c):
        assert C_MAJOR_POSITION_VII in [str(s) for s in c_major_from_c]

    def test_best_shape_has_no_penalty(self, c_major_from_c):
        assert c_major_from_c[0].score == 0

    def test_only_complete_narrow_shapes(self, c_major_from_c):
        for shape in c_major_from_c:
            assert shape.is_complete()
            assert shape.fret_span < 6

    def test_sorted_by_score_then_span(self, c_major_from_c):
        keys = [(s.score, s.fret_span) for s in c_major_from_c]
        assert keys == sorted(keys)

    def test_starts_on_the_starting_note(self, c_major_from_c):
        for shape in c_major_from_c:
            assert shape.notes[0].note == C
            assert shape.notes[0].string == 0

    def test_accepts_a_plain_list(self):
        shapes = melodic_shapes_at_starting_note(list(C_MAJOR), C, STANDARD_GUITAR)
        assert len(shapes) == len(melodic_shapes_at_starting_note(C_MAJOR, C, STANDARD_GUITAR))

    def test_empty_scale(self):
        with pytest.raises(EmptyScaleError):
            melodic_shapes_at_starting_note([], C, STANDARD_GUITAR)

    def test_single_string_has_no_complete_shape(self):
        fretboard = Fretboard.from_names(["E3"])
        assert melodic_shapes_at_starting_note(C_MAJOR, C, fretboard) == []

    def test_all_starting_notes(self):
        results = find_all_scale_shapes(C_MAJOR, STANDARD_GUITAR)
        assert list(results) == list(C_MAJOR)


class TestStringSkipping:
    """A same-string step of a fifth or more lets the search skip a string."""

    @pytest.fixture(scope="class")
    def fifths_from_c(self):
        return melodic_shapes_at_starting_note(C_FIFTHS, C, STANDARD_GUITAR)

    def test_some_shape_skips_a_string(self, fifths_from_c):
        assert any(
            b.string - a.string == 2
            for shape in fifths_from_c
            for a, b in zip(shape.notes, shape.notes[1:])
        )

    def test_skip_after_crossing(self, fifths_from_c):
        assert "1:8(C) 2:10(G) 3:10(C) 5:8(G) 6:8(C)" in [str(s) for s in fifths_from_c]

    def test_skip_from_the_first_note(self, fifths_from_c):
        seeded = [s for s in fifths_from_c if s.notes[1].string == 2]
        assert seeded
        for shape in seeded:
            assert shape.notes[0].string == 0
            assert shape.notes[0].note == C
            assert shape.notes[1].note == G
        assert "1:8(C) 3:5(G) 4:5(C) 5:8(G) 6:8(C)" in [str(s) for s in seeded]

    def test_skipped_note_is_above_the_last(self, fifths_from_c):
        for shape in fifths_from_c:
            midis = [n.pitch.midi for n in shape.notes]
            assert midis == sorted(midis)

    def test_no_skip_for_stepwise_scales(self, c_major_from_c):
        for shape in c_major_from_c:
            assert all(b.string - a.string < 2 for a, b in zip(shape.notes, shape.notes[1:]))


class TestRecursiveSearch:
    """Test one branch of the recursion directly."""

    def test_dead_end_is_emitted(self):
        fretboard = Fretboard.from_names(["E3"])
        first = fretboard.sounded_note(0, 8, C)
        second = fretboard.sounded_note(0, 10, Note.parse("D"))
        params = RecursiveSearchParams((first, second), 2, 2, 0, fretboard)
        shapes = []
        recursive_melodic_search(C_MAJOR, params, shapes)
        assert [str(s) for s in shapes] == ["1:8(C) 1:10(D) 1:12(E)"]
        # 8-10-12 spans four frets in three notes
        assert shapes[0].score == 1

    def test_params_are_not_mutated(self):
        first = STANDARD_GUITAR.sounded_note(0, 8, C)
        params = RecursiveSearchParams((first,), 1, 0, 0, STANDARD_GUITAR)
        extended = params.extend(first.next_note_same_string(C_MAJOR), notes_on_curr_string=2)
        assert len(params.frets) == 1
        assert params.notes_on_curr_string == 1
        assert len(extended.frets) == 2


class TestNormalizeOctaveRegister:
    """Test moving whole shapes down by octaves."""

    def test_moves_down(self):
        notes = [STANDARD_GUITAR.sounded_note(0, 15), STANDARD_GUITAR.sounded_note(1, 14)]
        assert [n.fret for n in normalize_octave_register(notes)] == [3, 2]

    def test_idempotent(self):
        notes = [STANDARD_GUITAR.sounded_note(0, 15), STANDARD_GUITAR.sounded_note(1, 14)]
        once = normalize_octave_register(notes)
        assert normalize_octave_register(once) == once

    def test_low_fret_blocks_move(self):
        notes = [STANDARD_GUITAR.sounded_note(0, 11), STANDARD_GUITAR.sounded_note(1, 14)]
        assert normalize_octave_register(notes) == tuple(notes)

    def test_twelfth_fret_moves_to_open(self):
        notes = [STANDARD_GUITAR.sounded_note(0, 12)]
        assert normalize_octave_register(notes)[0].fret == 0


class TestOpenScaleShape:
    """Test the greedy open-position walker."""

    def test_c_major(self):
        assert str(find_open_scale_shape(C_MAJOR, STANDARD_GUITAR)) == OPEN_C_MAJOR

    def test_ends_on_top_string(self):
        shape = find_open_scale_shape(NoteSet.major(Note.parse("G")), STANDARD_GUITAR)
        assert shape.notes[-1].string == 5
        assert shape.notes[-1].fret >= 5


class TestNNotePerString:
    """Test the constructive notes-per-string builder."""

    def test_three_per_string(self):
        shape = n_note_per_string_shape(C_MAJOR, C, STANDARD_GUITAR, 3, 3)
        assert len(shape) == 18
        for string in range(6):
            assert len([n for n in shape.notes if n.string == string]) == 3
        assert str(shape).startswith("1:8(C) 1:10(D) 1:12(E) 2:8(F)")

    def test_alternating_two_three(self):
        shape = n_note_per_string_shape(C_MAJOR, C, STANDARD_GUITAR, 2, 3)
        per_string = [len([n for n in shape.notes if n.string == s]) for s in range(6)]
        assert per_string == [2, 3, 2, 3, 2, 3]

    def test_impossible_pattern(self):
        """From open E, the third note G is below the open A string."""
        assert n_note_per_string_shape(C_MAJOR, E, STANDARD_GUITAR, 2, 2) is None

    def test_invalid_counts(self):
        with pytest.raises(InvalidNNotesPerString):
            n_note_per_string_shape(C_MAJOR, C, STANDARD_GUITAR, 1, 2)
