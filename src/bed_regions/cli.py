import argparse
import logging
import os
import sys
import time

from importlib import metadata

import polars as pl

from .bed_io import read_points_from_bed
from .errors import BedParseError
from .memory_logger import configure_memory_logger, MemoryLogger, remove_managed_memory_handlers
from .regions import regions_to_frame


def _construct_cmd_string(args, parser):
    """internal helper function to construct a visually pleasing string of the command line arguments"""

    pos_args = []
    options = []
    NUM_SPACE = 4

    def _add(name, value, action, level):
        spacer = " " * NUM_SPACE * level
        if isinstance(action, argparse._StoreAction):
            if action.option_strings:
                if value is not None and value != action.default:
                    options.append(spacer + f"--{name} {value}")
            else:
                pos_args.append(spacer + str(value))
        elif isinstance(action, argparse._StoreTrueAction):
            if value:
                options.append(spacer + f"--{name}")

    sub_cmd = ""
    for action in parser._actions:
        if isinstance(action, argparse._HelpAction):
            continue
        if isinstance(action, argparse._SubParsersAction):
            sub_cmd = getattr(args, action.dest)
            for sub_action in action.choices[sub_cmd]._actions:
                if isinstance(sub_action, argparse._HelpAction):
                    continue
                _add(sub_action.dest, getattr(args, sub_action.dest), sub_action, level=2)
        else:
            _add(action.dest, getattr(args, action.dest), action, level=1)

    return f"bed-regions {sub_cmd}" + os.linesep + os.linesep.join(pos_args + options)


def _read_regions(args, logger):
    t = time.time()
    regions = read_points_from_bed(args.bed, logger=logger)
    logger.info(f"Parsed {args.bed} in {time.time() - t:.2f} seconds")
    return regions


def _points(args):
    logger = MemoryLogger(__name__)
    regions = _read_regions(args, logger)

    logger.info("Writing points")
    regions_to_frame(regions).write_parquet(f"{args.out}.parquet")
    logger.info(f"Results written to {args.out}.parquet")


def _summary(args):
    logger = MemoryLogger(__name__)
    regions = _read_regions(args, logger)

    summary = (
        regions_to_frame(regions)
        .group_by("region_index", maintain_order=True)
        .agg(
            pl.col("region").first(),
            pl.len().alias("n_points"),
            pl.col("point").min().alias("min_point"),
            pl.col("point").max().alias("max_point"),
        )
        .select("region", "n_points", "min_point", "max_point")
    )
    summary.write_csv(f"{args.out}.tsv", separator="\t")
    logger.info(f"Results written to {args.out}.tsv")


def _create_common_parser(subp, name, help):
    common_p = subp.add_parser(name, help=help)
    common_p.add_argument("bed", help="Path to BED file (tab-delimited, optionally gzipped).")
    common_p.add_argument("--out", default="bed_regions", help="Location to save result files.")
    return common_p


def _main(args):
    argp = argparse.ArgumentParser(
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    argp.add_argument("-v", "--verbose", action="store_true", default=False)
    argp.add_argument("-q", "--quiet", action="store_true", default=False)

    subp = argp.add_subparsers(dest="cmd", required=True, help="Subcommands for bed-regions")

    points_p = _create_common_parser(subp, "points", help="Write the sorted points of every region to parquet.")
    points_p.set_defaults(func=_points)

    summary_p = _create_common_parser(subp, "summary", help="Write one line per region with point counts and range.")
    summary_p.set_defaults(func=_summary)

    # parse arguments
    args = argp.parse_args(args)

    # pull passed arguments/options as a string for printing
    cmd_str = _construct_cmd_string(args, argp)
    masthead = f"bed-regions v{metadata.version('bed-regions')}" + os.linesep

    # setup logging
    log = logging.getLogger(__name__)
    log.propagate = False
    level = logging.DEBUG if args.verbose else logging.INFO

    if not args.quiet:
        sys.stdout.write(masthead)
        sys.stdout.write(cmd_str + os.linesep)
        sys.stdout.write("Starting log..." + os.linesep)

    # setup log file, but write the command first
    log_path = f"{args.out}.log"
    with open(log_path, "w") as disk_log_stream:
        disk_log_stream.write(masthead)
        disk_log_stream.write(cmd_str + os.linesep)
        disk_log_stream.write("Starting log..." + os.linesep)

    configure_memory_logger(
        log,
        stream=None if args.quiet else sys.stdout,
        log_file=log_path,
        level=level,
        replace_managed_handlers=True,
    )

    try:
        args.func(args)
    except (BedParseError, OSError) as e:
        log.error(str(e))
        return 1
    finally:
        for handler in log.handlers:
            handler.flush()
        remove_managed_memory_handlers(log)

    return 0


def run_cli():
    return _main(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(_main(sys.argv[1:]))
