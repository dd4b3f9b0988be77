import logging
from typing import List, Optional

import typer

from fretshapes.config import get_tuning, load_config
from fretshapes.errors import FretshapesError
from fretshapes.logging_config import DEFAULT_FORMAT, setup_logging
from fretshapes.search import (
    ScaleShapeSearchResult,
    find_chord_shapes,
    find_open_scale_shape,
    melodic_shapes_at_starting_note,
)
from fretshapes.theory import Note, NoteSet, Pitch, scale_names

app = typer.Typer(help="Chord and scale fingerings for fretted instruments.")

logger = logging.getLogger(__name__)

TUNING_HELP = "Tuning name from the config (default: search.default_tuning)"
CONFIG_HELP = "Path to a YAML config file (default: packaged conf/base.yaml)"
LOG_HELP = "Level for every fretshapes logger, e.g. DEBUG (default: logging.levels in the config)"


def _setup(tuning: Optional[str], config_path: Optional[str], log_level: Optional[str]):
    """Load config, configure logging and build the fretboard."""
    try:
        config = load_config(config_path)
        logging_config = config.get("logging") or {}
        setup_logging(
            log_level,
            logging_config.get("levels"),
            logging_config.get("format", DEFAULT_FORMAT),
        )
        fretboard = get_tuning(tuning, config)
    except (FretshapesError, OSError) as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    logger.info("Using tuning %s", fretboard)
    return config, fretboard


def _scale(root: str, mode: str, config: dict) -> NoteSet:
    mode = mode or config.get("search", {}).get("default_scale", "major")
    try:
        return NoteSet.from_pattern(Note.parse(root), mode)
    except FretshapesError as e:
        print(f"Error: {e}. Known scales: {', '.join(scale_names())}")
        raise typer.Exit(code=1)


@app.command()
def chords(
    notes: List[str] = typer.Argument(..., help="Chord notes, e.g. C E G"),
    show_all: bool = typer.Option(False, "--all", help="Show every bucket, not just playable"),
    tuning: str = typer.Option(None, help=TUNING_HELP),
    config: str = typer.Option(None, help=CONFIG_HELP),
    log_level: str = typer.Option(None, help=LOG_HELP),
):
    """
    List chord shapes, grouped by the voicing they sound.
    """
    _, fretboard = _setup(tuning, config, log_level)
    try:
        chord = [Note.parse(n) for n in notes]
    except FretshapesError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)

    result = find_chord_shapes(chord, fretboard)
    buckets = result.buckets() if show_all else {"playable": result.playable}
    for name, bucket in buckets.items():
        print(f"== {name} ({len(bucket)} voicings) ==")
        for voicing, shapes in bucket.items():
            print(f"{voicing}: {', '.join(str(s) for s in shapes)}")


@app.command()
def scale(
    root: str = typer.Argument(..., help="Scale root, e.g. C or Bb"),
    mode: str = typer.Option(None, help="Scale name, e.g. major, dorian"),
    start: str = typer.Option(None, help="Starting note (default: the root)"),
    limit: int = typer.Option(5, help="Maximum number of shapes to print"),
    tuning: str = typer.Option(None, help=TUNING_HELP),
    config: str = typer.Option(None, help=CONFIG_HELP),
    log_level: str = typer.Option(None, help=LOG_HELP),
):
    """
    Search two-octave scale fingerings from one starting note.
    """
    cfg, fretboard = _setup(tuning, config, log_level)
    notes = _scale(root, mode, cfg)
    try:
        starting_note = Note.parse(start) if start else notes.starting_note
        shapes = melodic_shapes_at_starting_note(notes, starting_note, fretboard)
    except FretshapesError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)

    print(f"{len(shapes)} shapes for {notes} from {starting_note}")
    for shape in shapes[:limit]:
        print(f"[score {shape.score}, span {shape.fret_span}] {shape}")


@app.command()
def open_shape(
    root: str = typer.Argument(..., help="Scale root"),
    mode: str = typer.Option(None, help="Scale name"),
    tuning: str = typer.Option(None, help=TUNING_HELP),
    config: str = typer.Option(None, help=CONFIG_HELP),
    log_level: str = typer.Option(None, help=LOG_HELP),
):
    """
    Print the open-position fingering of a scale.
    """
    cfg, fretboard = _setup(tuning, config, log_level)
    print(find_open_scale_shape(_scale(root, mode, cfg), fretboard))


@app.command()
def scale_summary(
    root: str = typer.Argument(..., help="Scale root"),
    mode: str = typer.Option(None, help="Scale name"),
    tuning: str = typer.Option(None, help=TUNING_HELP),
    config: str = typer.Option(None, help=CONFIG_HELP),
    log_level: str = typer.Option(None, help=LOG_HELP),
):
    """
    Every category of scale fingering: open, simple, N notes per string and other.
    """
    cfg, fretboard = _setup(tuning, config, log_level)
    notes = _scale(root, mode, cfg)
    result = ScaleShapeSearchResult.from_raw_search_result(notes, fretboard)

    print(f"Open: {result.open}")
    print(f"Simple ({len(result.simple)}):")
    for shape in result.simple:
        print(f"  {shape}")
    for pattern in ((2, 2), (2, 3), (3, 3)):
        print(f"{pattern[0]}-{pattern[1]} per string:")
        for note, shape in result.n_per_string(pattern).items():
            print(f"  {note}: {shape if shape is not None else '-'}")
    print(f"Other: {sum(len(v) for v in result.other.values())} shapes")


@app.command()
def locate(
    pitch: str = typer.Argument(..., help="Pitch in scientific notation, e.g. E4"),
    tuning: str = typer.Option(None, help=TUNING_HELP),
    config: str = typer.Option(None, help=CONFIG_HELP),
    log_level: str = typer.Option(None, help=LOG_HELP),
):
    """
    Show every string and fret that sounds a pitch.
    """
    _, fretboard = _setup(tuning, config, log_level)
    try:
        target = Pitch.parse(pitch)
    except FretshapesError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)

    positions = fretboard.positions_of(target)
    if not positions:
        print(f"{target} is not on this fretboard")
        return
    for string, fret in positions:
        print(fretboard.sounded_note(string, fret, target.note))


if __name__ == "__main__":
    app()
