#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Command-line interface for controlling an eISCP receiver.
"""

from __future__ import annotations

import sys
import argparse
import logging

from .internal_types import *
from .exceptions import OnkyoReceiverError
from .constants import LOG_LEVELS
from .pkg_logging import logger
from .protocol import (
    get_all_source_names,
    source_code_for_name,
    source_name_for_code,
  )
from .client import OnkyoReceiverClient, OnkyoReceiverClientConfig, onkyo_receiver_connect

PARAMS = ("power", "volume", "source")

_true_strings = ("1", "true", "on", "yes")
_false_strings = ("0", "false", "off", "no")

def parse_bool(value: str) -> bool:
    v = value.strip().lower()
    if v in _true_strings:
        return True
    if v in _false_strings:
        return False
    raise ValueError(f"Invalid boolean value: '{value}'")

def get_param(client: OnkyoReceiverClient, param: str) -> str:
    """Reads a parameter from the receiver and returns it formatted for display"""
    if param == "power":
        return "on" if client.get_power() else "off"
    if param == "volume":
        return str(client.get_volume())
    assert param == "source"
    code = client.get_source()
    name = source_name_for_code(code)
    return code if name is None else name

def set_param(client: OnkyoReceiverClient, param: str, value: str) -> None:
    """Sets a parameter on the receiver from its command-line string form"""
    if param == "power":
        client.set_power(parse_bool(value))
    elif param == "volume":
        client.set_volume(int(value, 10))
    else:
        assert param == "source"
        try:
            code = source_code_for_name(value)
        except KeyError:
            raise ValueError(f"Unknown source: '{value}'") from None
        client.set_source(code)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="onkyo-receiver",
        description="Get or set parameters of an eISCP (Onkyo/Integra/Pioneer) receiver.")
    parser.add_argument('--host', default=None,
        help="Receiver host[:port], tcp://host[:port] or sddp://[name]. "
             "Default: $ONKYO_RECEIVER_HOST")
    parser.add_argument('--param', choices=PARAMS, default=None,
        help="Parameter to get or set")
    parser.add_argument('--value', default=None,
        help="New value for the parameter. If omitted, the current value is printed")
    parser.add_argument('--list-source', action='store_true', default=False,
        help="List the known source names and exit")
    parser.add_argument('--log-level', default='warning', type=str.lower, choices=LOG_LEVELS,
        help="Logging level. Default: warning")
    return parser

def run(argv: Optional[List[str]]=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    if args.list_source:
        for name in get_all_source_names():
            print(name)
        return 0

    if args.param is None:
        parser.error("--param is required unless --list-source is given")

    try:
        config = OnkyoReceiverClientConfig(default_host=args.host)
        with onkyo_receiver_connect(config=config) as client:
            if args.value is None:
                print(get_param(client, args.param))
            else:
                set_param(client, args.param, args.value)
    except (OnkyoReceiverError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"onkyo-receiver: error: {e}", file=sys.stderr)
        return 1
    return 0

def main() -> None:
    sys.exit(run())
