#!/usr/bin/env python3
"""CLI tool to turn an audio file (or saved service payloads) into a chord chart.

Usage:
    python examples/extract_song.py <audio_file> [-o output.json]
    python examples/extract_song.py --chords chords.json --beats beats.json <file_name>

Examples:
    python examples/extract_song.py song.mp3 --grid
    python examples/extract_song.py --chords testdata/chords_song.json \
        --beats testdata/beats_song.json my_song.mp3 --transpose 2
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from chord_grid import (
    AnalysisClient,
    PipelineError,
    ServiceConfig,
    Song,
    assemble,
    describe_interval,
    extract_song,
    song_from_payloads,
    transpose_song,
)
from chord_grid.extraction.payload import load_payload


def format_grid(song: Song, measures_per_row: int) -> str:
    """Render the song as rows of ``| C - G - |`` measures."""
    grid = assemble(song.measures, page_size=measures_per_row)
    lines = [f"{song.title} ({song.artist})", f"Key: {song.key}  Time: {song.time_signature}  Tempo: {song.tempo}", ""]
    for row in grid.rows:
        cells = []
        for cell in row:
            cells.append(f"| {cell.chord}" if cell.is_downbeat else cell.chord)
        lines.append(" ".join(cells) + " |")
    return "\n".join(lines)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Extract a measure-based chord chart from audio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s song.mp3
  %(prog)s song.mp3 --grid --per-row 4
  %(prog)s --chords chords.json --beats beats.json song.mp3
        """,
    )
    parser.add_argument(
        "audio",
        type=Path,
        help="Audio file to analyze (with --chords/--beats only its name is used)",
    )
    parser.add_argument("--chords", type=Path, default=None, help="Saved chord recognition payload")
    parser.add_argument("--beats", type=Path, default=None, help="Saved beat detection payload")
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output JSON file (default: stdout)",
    )
    parser.add_argument("--grid", action="store_true", help="Print a text grid instead of JSON")
    parser.add_argument("--per-row", type=int, default=4, help="Measures per grid row")
    parser.add_argument("--transpose", type=int, default=0, help="Transpose by this many semitones")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if (args.chords is None) != (args.beats is None):
        print("Error: --chords and --beats must be given together", file=sys.stderr)
        return 1

    try:
        if args.chords is not None:
            song = song_from_payloads(load_payload(args.chords), load_payload(args.beats), args.audio.name)
        else:
            with AnalysisClient(ServiceConfig.from_env()) as client:
                song = asyncio.run(extract_song(args.audio, client=client))
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except PipelineError as e:
        print(f"Error extracting chords: {e}", file=sys.stderr)
        return 1

    if args.transpose:
        song = transpose_song(song, args.transpose)
        logging.getLogger(__name__).info("Transposed: %s", describe_interval(args.transpose))

    if args.grid:
        output = format_grid(song, args.per_row)
    else:
        output = json.dumps(song.to_dict(), indent=2, ensure_ascii=False)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote output to {args.output}")
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
