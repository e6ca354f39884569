#!/usr/bin/env python3
"""
Build the suffix array of a file and save it.

Usage:

  sa-driver --input-type text -f ./input.txt -o ./input.sa
  sa-driver --input-type dna -f ./genome.fa.gz -o ./genome.sa --threads 8
  sa-driver --input-type integer -f ./tokens.bin -o ./tokens.sa

See sadriver/serialize.py for the format of the output file and
sadriver/io.py for the format of integer input files.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .datatypes import InputKind, PipelineConfig
from .errors import ConstructionError, FormatError
from .pipeline import run
from .utils import setup_logger


def _positive_int(s: str) -> int:
    v = int(s)
    if v < 1:
        raise argparse.ArgumentTypeError(f"expected a value >= 1, given {v}")
    return v


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Suffix array construction driver",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        required=True,
        help="The input file.",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="The file to save the suffix array to.",
    )

    parser.add_argument(
        "--input-type",
        type=str.lower,
        required=True,
        choices=[k.value for k in InputKind],
        help="""How to read the input file: the first record of a
        FASTA/FASTQ file (dna), the raw bytes of the file (text), or
        a binary file of integer tokens (integer). Case-insensitive.""",
    )

    parser.add_argument(
        "-t",
        "--threads",
        type=_positive_int,
        default=4,
        help="Number of threads used to build the suffix array.",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["debug", "info", "warning", "error", "critical"],
        help="The log level.",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="If given, logs are also saved to this file.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = get_parser().parse_args(argv)
    logger = setup_logger(args.log_file, log_level=args.log_level)
    logger.info(vars(args))

    config = PipelineConfig(
        input_kind=InputKind.from_str(args.input_type),
        input_path=args.file,
        output_path=args.output,
        threads=args.threads,
    )

    try:
        run(config, logger=logger)
    except (OSError, FormatError, ConstructionError):
        # run() has already logged the failing stage.
        return 1

    logger.info("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
