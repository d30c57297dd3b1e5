#!/usr/bin/env python3
"""
run_mediator.py — Run the read-file mediator once against a message on disk.

Usage:
    python run_mediator.py message.xml
    python run_mediator.py --config config/read_file.yaml message.xml
    python run_mediator.py message.xml --property FILE_PATH=/data/in/order.xml

The message may be a full SOAP envelope or a bare payload (wrapped in a SOAP 1.1
envelope). Prints READ_FILE_RESPONSE and the resulting envelope. Exit code is
0 when the outcome is OK, 1 otherwise.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from filemediator import ConfigLoader, MessageContext, OK, READ_FILE_RESPONSE, ReadFileMediator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Read a file into a SOAP message body using a read-file mediator config.",
    )
    parser.add_argument("message", help="Path to the message XML.")
    parser.add_argument(
        "--config",
        default="config/read_file.yaml",
        help="Mediator YAML config (default: config/read_file.yaml).",
    )
    parser.add_argument(
        "--property",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Message property to set before mediation. Repeatable.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable trace/debug logging.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config)
    if not config_path.exists():
        parser.error(f"Config not found: {config_path}")
    message_path = Path(args.message)
    if not message_path.exists():
        parser.error(f"Message not found: {message_path}")

    properties = {}
    for item in args.property:
        name, sep, value = item.partition("=")
        if not sep or not name:
            parser.error(f"Property must be NAME=VALUE: {item}")
        properties[name] = value

    mediator = ReadFileMediator(ConfigLoader.load(config_path))
    context = MessageContext.from_bytes(message_path.read_bytes(), properties=properties)
    mediator.mediate(context)

    outcome = context.get_property(READ_FILE_RESPONSE)
    print(f"{READ_FILE_RESPONSE}: {outcome}")
    print(context.to_bytes(pretty_print=True).decode("utf-8"))
    return 0 if outcome == OK else 1


if __name__ == "__main__":
    sys.exit(main())
