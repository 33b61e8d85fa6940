"""Command line tool that copies a file or URL, or a slice of it, to stdout."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

from .reader import OpenOptions, UrlFile

_CHUNK = 0x10000
_USAGE = "Usage: urlcat [-c start] [-l length] <url>"


def _c_int(text: str) -> int:
    return int(text, 0)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the tool; returns the process exit status."""
    parser = argparse.ArgumentParser(prog="urlcat", usage=_USAGE)
    parser.add_argument("-c", dest="start", type=_c_int, default=0)
    parser.add_argument("-l", dest="length", type=_c_int, default=-1)
    parser.add_argument("-a", dest="key_file")
    parser.add_argument("url", nargs="?")
    args = parser.parse_args(argv)
    if args.url is None:
        print(_USAGE, file=sys.stderr)
        return 1
    try:
        stream = UrlFile.open(args.url, OpenOptions(s3_key_file=args.key_file))
    except OSError:
        print("ERROR: fail to open URL", file=sys.stderr)
        return 2
    with stream:
        if args.start > 0:
            try:
                stream.seek(args.start, os.SEEK_SET)
            except OSError:
                print("ERROR: fail to seek", file=sys.stderr)
                return 3
        out = sys.stdout.buffer
        rest = args.length
        while rest != 0:
            data = stream.read(rest if 0 < rest < _CHUNK else _CHUNK)
            if not data:
                break
            out.write(data)
            rest -= len(data)
        out.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())