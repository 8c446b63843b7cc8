#!/usr/bin/env python3
"""
Summarize a GPX 1.1 file.

Usage:
    gpx-summary run.gpx
    gpx-summary run.gpx --lenient --extensions
"""

import argparse
import logging
import sys

from .config import load_config
from .core.errors import GPXError
from .extensions import default_registry
from .streaming.decoder import GPXDecoder


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarize a GPX 1.1 file")
    parser.add_argument("path", help="GPX file to decode")
    parser.add_argument("--lenient", action="store_true", help="Keep going on unparsable values")
    parser.add_argument("--debug", action="store_true", help="Verbose decode logging")
    parser.add_argument("--extensions", action="store_true", help="Print decoded point extensions")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config()
    if args.lenient:
        config.strict = False
    if args.debug:
        config.debug = True
    logging.basicConfig(level=logging.INFO if config.debug else logging.WARNING, format="%(message)s")

    try:
        with open(args.path, "rb") as f:
            decoder = GPXDecoder(f, config=config)
            doc = decoder.decode()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except GPXError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    points = list(doc.points())
    print(f"Version:   {doc.version}")
    if doc.metadata.name:
        print(f"Name:      {doc.metadata.name}")
    print(f"Tracks:    {len(doc.tracks)}")
    print(f"Segments:  {sum(len(t.segments) for t in doc.tracks)}")
    print(f"Points:    {len(points)}")
    print(f"Start:     {doc.start() or '-'}")
    print(f"End:       {doc.end() or '-'}")
    print(f"Duration:  {doc.duration()}")
    print(f"Distance:  {doc.distance():.1f} m")
    if decoder.warnings:
        print(f"Warnings:  {len(decoder.warnings)}")
        for warning in decoder.warnings:
            print(f"  - {warning.message}")

    if args.extensions:
        for i, point in enumerate(points):
            records = default_registry.parse_all(point.extensions)
            for name, record in records.items():
                print(f"[{i}] {name}: {record}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
