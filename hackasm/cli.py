import argparse
import logging
import sys
from argparse import ArgumentParser
from typing import List, Optional
from .assembler import Assembler, read_source
from .console import Console
from .errors import AssemblyError


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = ArgumentParser(prog="hackasm", description="Hack assembler: translate .asm source into binary words")
    parser.add_argument("source", type=str, help="path to the .asm source file")
    parser.add_argument("-o", "--output", type=str, default=None, help="write words to this file instead of stdout")
    parser.add_argument("--debug", action="store_true", help="enable debug logging on stderr")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(levelname)s - %(message)s',
            handlers=[logging.StreamHandler(sys.stderr)]
        )
    console = Console()
    try:
        source = read_source(args.source)
    except OSError as e:
        console.error(f"cannot read {e.filename}: {e.strerror}")
        return 1
    except AssemblyError as e:
        console.error(str(e))
        return 1
    try:
        out = open(args.output, "w", encoding="utf-8") if args.output else None
    except OSError as e:
        console.error(f"cannot write {e.filename}: {e.strerror}")
        return 1
    try:
        console.stream = out
        words = Assembler(console).assemble(source)
    except AssemblyError as e:
        console.error(str(e))
        return 1
    finally:
        if out:
            out.close()
    logger.info(f"Assembled {len(words)} instructions from {args.source}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
