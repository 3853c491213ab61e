#!/usr/bin/env python3
"""Main CLI entry point of the MC truth particle selection."""

import argparse
import sys
from typing import List, Optional

from mcselect.config import load_config_file
from mcselect.config.operations import parse_value, set_nested_value
from mcselect.driver import Driver
from mcselect.version import __version__


def main(
    config: str,
    source: Optional[List[str]] = None,
    output: Optional[str] = None,
    n: Optional[int] = None,
    nskip: Optional[int] = None,
    config_overrides: Optional[List[str]] = None,
):
    """Main driver of the selection.

    Performs these basic functions:
    - Update the configuration with the command-line arguments
    - Run the driver over the requested entries

    Parameters
    ----------
    config : str
        Path to the configuration file
    source : List[str], optional
        List of paths to the input files
    output : str, optional
        Path to the output file
    n : int, optional
        Number of entries to process
    nskip : int, optional
        Number of entries to skip
    config_overrides : List[str], optional
        List of config overrides in the form "key.path=value"
    """
    # Load the configuration file
    cfg = load_config_file(config)

    # The configuration must minimally contain an IO block with a reader
    if "io" not in cfg or cfg["io"].get("reader") is None:
        raise KeyError("Configuration file must contain an `io.reader` block.")

    # Override the input command-line information into the configuration
    io_mapping = {"file_keys": source, "n_entry": n, "n_skip": nskip}
    for io_key, io_value in io_mapping.items():
        if io_value is not None:
            cfg["io"]["reader"][io_key] = io_value

    # Override the output path if provided
    if output is not None:
        if cfg["io"].get("writer") is None:
            raise KeyError(
                "--output flag provided: must specify a `writer` in the `io` block."
            )
        cfg["io"]["writer"]["file_name"] = output

    # Apply any generic config overrides from --set arguments
    for override in config_overrides or []:
        if "=" not in override:
            raise ValueError(
                f"Invalid --set format: '{override}'. "
                f"Expected format: 'key.path=value'"
            )

        key_path, value_str = override.split("=", 1)
        set_nested_value(cfg, key_path.strip(), parse_value(value_str.strip()))

    # Run the selection
    Driver(cfg).run()


def cli(argv: Optional[List[str]] = None):
    """Parses the command-line arguments and runs the selection.

    Parameters
    ----------
    argv : List[str], optional
        List of arguments. If not provided, use `sys.argv`
    """
    parser = argparse.ArgumentParser(
        description="Select MC truth particles into a compact collection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mcselect -c select.yaml                                  Run the selection
  mcselect -c select.yaml -s events.h5 -o selected.csv     Override the I/O
  mcselect -c select.yaml --set tasks.mc_track_selector.eta_max=0.9
""",
    )

    # Add a version command
    parser.add_argument(
        "--version", "-v", action="version", version=f"mcselect {__version__}"
    )

    # Add config file argument
    parser.add_argument(
        "-c", "--config", required=True, help="Path to the configuration file"
    )

    # Add input/output arguments
    parser.add_argument(
        "-s", "--source", nargs="+", type=str, help="List of paths to the input files"
    )
    parser.add_argument("-o", "--output", help="Path to the output file")

    # Add entry and skip arguments
    parser.add_argument("-n", "--iterations", type=int, help="Number of entries to run")
    parser.add_argument("--nskip", type=int, help="Number of entries to skip")

    # Add option to dynamically override any config parameter using dot notation
    parser.add_argument(
        "--set",
        action="append",
        dest="config_overrides",
        metavar="KEY=VALUE",
        help="Override any config parameter using dot notation "
        "(e.g., --set tasks.mc_track_selector.eta_max=0.9). "
        "Can be used multiple times for multiple overrides.",
    )

    # Parse the arguments
    args = parser.parse_args(argv)

    main(
        config=args.config,
        source=args.source,
        output=args.output,
        n=args.iterations,
        nskip=args.nskip,
        config_overrides=args.config_overrides,
    )


if __name__ == "__main__":
    sys.exit(cli())
