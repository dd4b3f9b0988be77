"""
Melodic (scale) shape search.

A depth-first search climbs the scale from a starting note. At every note it
may stay on the string, move to the next string, or skip a string; hand-span
limits prune the branches so the tree stays shallow. Each finished branch
becomes a MelodicFretboardShape carrying its accumulated penalty.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Tuple

from fretshapes.errors import EmptyScaleError, InvalidNNotesPerString, MusicSemanticsError
from fretshapes.fretboard.fretboard import Fretboard
from fretshapes.fretboard.fretted_note import SoundedNote
from fretshapes.fretboard.shapes import MelodicFretboardShape
from fretshapes.rules.melodic import (
    MAX_NOTES_PER_STRING,
    MAX_SHAPE_SPAN,
    MAX_STRING_SPAN,
    OPEN_SHAPE_LAST_FRET,
    SEED_HEADROOM_FRET,
    SKIP_STRING_MIN_DISTANCE,
    crossing_blocked,
    score_shape,
    skip_blocked,
    tally_new_violations,
)
from fretshapes.theory.collections import NoteSet
from fretshapes.theory.notes import Note

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecursiveSearchParams:
    """State of one search branch. Copied, never mutated, when branching."""

    frets: Tuple[SoundedNote, ...]
    notes_on_curr_string: int
    span_on_curr_string: int
    score: int
    fretboard: Fretboard

    def extend(self, note: SoundedNote, **changes) -> "RecursiveSearchParams":
        return replace(self, frets=self.frets + (note,), **changes)


def as_note_set(scale: Iterable[Note]) -> NoteSet:
    notes = scale.notes if isinstance(scale, NoteSet) else tuple(scale)
    if not notes:
        raise EmptyScaleError("Cannot search an empty scale")
    return NoteSet(notes)


def string_gap(fretboard: Fretboard, lower: int, upper: int) -> int:
    """Semitones between two open strings."""
    return fretboard.get_string(upper).midi - fretboard.get_string(lower).midi


def normalize_octave_register(frets: Iterable[SoundedNote]) -> Tuple[SoundedNote, ...]:
    """Move the whole traversal down by octaves while every fret is 12 or higher."""
    frets = tuple(frets)
    while frets and all(note.fret >= 12 for note in frets):
        frets = tuple(note.down_an_octave() for note in frets)
    return frets


def _finish(params: RecursiveSearchParams, shapes: List[MelodicFretboardShape]) -> None:
    shapes.append(MelodicFretboardShape(normalize_octave_register(params.frets), params.score))


def _note_two_strings_up(last: SoundedNote, target: Note) -> SoundedNote:
    fretboard = last.fretboard
    note = fretboard.note_on_string(target, last.string + 2)
    while note.pitch.midi < last.pitch.midi:
        note = note.up_an_octave()
    return note


def recursive_melodic_search(
    scale: NoteSet,
    params: RecursiveSearchParams,
    shapes: List[MelodicFretboardShape],
) -> None:
    """
    Extend one branch by a single note and recurse into every permitted move.

    Finished traversals (more than two octaves of notes) and dead ends are
    appended to ``shapes``.
    """
    same_string, crossing = tally_new_violations(params.frets)
    params = replace(params, score=params.score + same_string + crossing)

    if len(params.frets) > 2 * len(scale):
        _finish(params, shapes)
        return

    fretboard = params.fretboard
    last = params.frets[-1]
    try:
        next_same = last.next_note_same_string(scale)
    except MusicSemanticsError as e:
        logger.debug("Pruned branch at %s: %s", last, e)
        return

    was_dead_end = True
    distance = next_same.fret - last.fret
    span = params.span_on_curr_string + distance

    # Stay on this string
    if span < MAX_STRING_SPAN and params.notes_on_curr_string < MAX_NOTES_PER_STRING:
        was_dead_end = False
        recursive_melodic_search(
            scale,
            params.extend(
                next_same,
                span_on_curr_string=span,
                notes_on_curr_string=params.notes_on_curr_string + 1,
            ),
            shapes,
        )

    # Move to the adjacent string
    if fretboard.num_strings > last.string + 1:
        gap = string_gap(fretboard, last.string, last.string + 1)
        can_change_strings = next_same.fret >= gap
        if can_change_strings and not crossing_blocked(
            params.frets, params.notes_on_curr_string, distance, gap
        ):
            was_dead_end = False
            recursive_melodic_search(
                scale,
                params.extend(
                    last.next_note_next_string(scale),
                    span_on_curr_string=0,
                    notes_on_curr_string=1,
                ),
                shapes,
            )

    # Skip a string
    if distance >= SKIP_STRING_MIN_DISTANCE and fretboard.num_strings > last.string + 2:
        gap = string_gap(fretboard, last.string, last.string + 2)
        can_change_strings = next_same.fret >= gap
        blocked = (
            params.notes_on_curr_string == 1
            and len(params.frets) > 1
            and skip_blocked(params.frets[-2].fret, last.fret, distance, gap)
        )
        if can_change_strings and not blocked:
            was_dead_end = False
            try:
                skipped = _note_two_strings_up(last, next_same.note)
            except MusicSemanticsError as e:
                logger.debug("Pruned string skip at %s: %s", last, e)
            else:
                recursive_melodic_search(
                    scale,
                    params.extend(skipped, span_on_curr_string=0, notes_on_curr_string=1),
                    shapes,
                )

    if was_dead_end:
        _finish(params, shapes)


def melodic_shapes_at_starting_note(
    scale: Iterable[Note],
    starting_note: Note,
    fretboard: Fretboard,
) -> List[MelodicFretboardShape]:
    """
    Search every fingering of ``scale`` that starts on ``starting_note``.

    Args:
        scale: Scale notes; an empty scale raises EmptyScaleError.
        starting_note: Degree to start from, on the lowest string.
        fretboard: Instrument to search on.

    Returns:
        Complete (two-octave) shapes narrower than MAX_SHAPE_SPAN frets,
        sorted by score and then by fret span.
    """
    scale = as_note_set(scale)
    starting_note = starting_note.spelled_as_in(scale)
    scale = scale.with_starting_note(starting_note)

    first = fretboard.note_on_string(starting_note, 0)
    # Leave room below the start so descending neighbours stay on the neck
    if first.fret < SEED_HEADROOM_FRET:
        first = first.up_an_octave()

    next_same = first.next_note_same_string(scale)
    span = next_same.fret - first.fret
    shapes: List[MelodicFretboardShape] = []

    def seed(second: SoundedNote, notes_on_curr_string: int, span_on_curr_string: int) -> None:
        params = RecursiveSearchParams(
            frets=(first, second),
            notes_on_curr_string=notes_on_curr_string,
            span_on_curr_string=span_on_curr_string,
            score=0,
            fretboard=fretboard,
        )
        recursive_melodic_search(scale, params, shapes)

    if span < MAX_STRING_SPAN:
        seed(next_same, 2, span)

    if fretboard.num_strings > 1:
        if next_same.fret >= string_gap(fretboard, 0, 1):
            seed(first.next_note_next_string(scale), 2, 0)

        if span >= SKIP_STRING_MIN_DISTANCE and fretboard.num_strings > 2:
            gap = string_gap(fretboard, 0, 2)
            if next_same.fret >= gap and not skip_blocked(first.fret, first.fret, span, gap):
                try:
                    seed(_note_two_strings_up(first, next_same.note), 1, 0)
                except MusicSemanticsError as e:
                    logger.debug("Pruned string skip seed at %s: %s", first, e)

    complete = sorted(
        (s for s in shapes if s.is_complete()),
        key=lambda s: (s.score, s.fret_span),
    )
    results = [s for s in complete if s.fret_span < MAX_SHAPE_SPAN]
    logger.info(
        "Starting on %s: %d branches, %d complete, %d kept",
        starting_note, len(shapes), len(complete), len(results),
    )
    return results


def find_all_scale_shapes(
    scale: Iterable[Note],
    fretboard: Fretboard,
) -> Dict[Note, List[MelodicFretboardShape]]:
    """Run the melodic search from every note of ``scale``."""
    scale = as_note_set(scale)
    return {note: melodic_shapes_at_starting_note(scale, note, fretboard) for note in scale}


def find_open_scale_shape(scale: Iterable[Note], fretboard: Fretboard) -> MelodicFretboardShape:
    """
    Greedy open-position fingering.

    Starts from the lowest scale note on the open low string and always
    prefers the next string, falling back to the same string. Stops on the
    top string once the fret reaches OPEN_SHAPE_LAST_FRET.
    """
    scale = as_note_set(scale)
    first = fretboard.sounded_note(0, 0)
    while first.note not in scale:
        first = first.up_n_frets(1)
    first = first.spelled_as_in(scale)
    scale = scale.with_starting_note(first.note)

    def step(note: SoundedNote) -> SoundedNote:
        try:
            return note.next_note_next_string(scale)
        except MusicSemanticsError:
            return note.next_note_same_string(scale)

    notes = [first, step(first)]
    last_string = fretboard.num_strings - 1
    while not (notes[-1].string == last_string and notes[-1].fret >= OPEN_SHAPE_LAST_FRET):
        notes.append(step(notes[-1]))
    return MelodicFretboardShape(tuple(notes), score_shape(notes))


def n_note_per_string_shape(
    scale: Iterable[Note],
    starting_note: Note,
    fretboard: Fretboard,
    value_1: int,
    value_2: int,
) -> Optional[MelodicFretboardShape]:
    """
    Build a fingering that alternates ``value_1`` and ``value_2`` notes per string.

    Returns:
        The shape, or None if the pattern runs off the instrument.

    Raises:
        InvalidNNotesPerString: either count is below two.
    """
    if value_1 < 2 or value_2 < 2:
        raise InvalidNNotesPerString(f"Invalid notes per string ({value_1}, {value_2})")
    scale = as_note_set(scale)
    starting_note = starting_note.spelled_as_in(scale)
    scale = scale.with_starting_note(starting_note)

    try:
        notes = [fretboard.note_on_string(starting_note, 0)]
        using_value_1 = True
        for string in range(fretboard.num_strings):
            target = value_1 if using_value_1 else value_2
            for _ in range(target - 1):
                notes.append(notes[-1].next_note_same_string(scale))
            using_value_1 = not using_value_1
            if string + 1 < fretboard.num_strings:
                notes.append(notes[-1].next_note_next_string(scale))
    except MusicSemanticsError as e:
        logger.debug("No %d-%d shape from %s: %s", value_1, value_2, starting_note, e)
        return None
    return MelodicFretboardShape(tuple(notes), score_shape(notes))
