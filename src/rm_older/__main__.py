from __future__ import annotations

import argparse
import logging
import os

from rm_older.rmolder import RmOlder
from rm_older.rmolderconfig import RmOlderConfig
from rm_older.rmolderconfig import load_config
from rm_older.rmolderconfig import parse_age
from rm_older.rmolderconfig import write_new_config

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="rm-older",
        description="Delete the files of a directory that are older than a given age.",
    )
    parser.add_argument(
        "-a",
        "--age",
        type=str,
        help="Age in seconds from which a file is removed. (required)",
        default=None,
    )
    parser.add_argument(
        "-d",
        "--directory",
        type=str,
        help="The directory to clean. Default: the current working directory.",
        default=None,
    )
    parser.add_argument(
        "--dry",
        help="Only print the files that would be removed.",
        default=None,
        action="store_true",
    )
    parser.add_argument(
        "--no-dry",
        help="Remove the files even if the configuration file sets dry.",
        dest="dry",
        default=None,
        action="store_false",
    )
    parser.add_argument(
        "--exclude",
        help="Skip file names matching this regular expression. Can be repeated.",
        default=[],
        action="append",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Read defaults from this configuration file.",
        default=None,
    )
    parser.add_argument(
        "--make-config",
        help="Create a default configuration file at the --config path.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "--debug",
        help="Enable debug logging.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write log records to this file.",
        default=None,
    )
    return parser


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(args)


def add_file_handler_to_logging(log_filepath: str) -> None:
    """Add a file handler to the root logger writing to the path provided."""
    file_handler = logging.FileHandler(log_filepath)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logging.getLogger().addHandler(file_handler)


def build_config(args: argparse.Namespace) -> RmOlderConfig | None:
    """
    Merge the command line with the optional config file.

    Command line values win over the config file.

    Returns:
        The config for the run, or None if no age was given.

    Raises:
        ValueError: When the age is invalid or the config file cannot be read.
    """
    file_config = load_config(args.config) if args.config else None

    if args.age is not None:
        age = parse_age(args.age)
    elif file_config is not None:
        age = file_config.age
    else:
        age = None

    if age is None:
        return None

    if args.directory:
        directory = args.directory
    elif file_config is not None:
        directory = file_config.directory
    else:
        directory = os.getcwd()

    if args.exclude:
        exclude_file_pattern = "|".join(args.exclude)
    elif file_config is not None:
        exclude_file_pattern = file_config.exclude_file_pattern
    else:
        exclude_file_pattern = None

    if args.dry is not None:
        dry = args.dry
    elif file_config is not None:
        dry = file_config.dry
    else:
        dry = False

    return RmOlderConfig(
        directory=directory,
        age=age,
        dry=dry,
        exclude_file_pattern=exclude_file_pattern,
    )


def main(*, cli_args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(cli_args)

    if args.make_config:
        if not args.config:
            print("Option 'config' is required with --make-config")
            parser.print_usage()
            return 2

        write_new_config(args.config)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )

    if args.log_file:
        add_file_handler_to_logging(args.log_file)

    try:
        config = build_config(args)

    except ValueError as error:
        print(error)
        parser.print_usage()
        return 2

    if config is None:
        print("Option 'age' is required")
        parser.print_help()
        return 0

    result = RmOlder(config).execute()
    print(result)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
