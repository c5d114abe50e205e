#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Runs an eISCP receiver emulator until interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from ..constants import DEFAULT_PORT, LOG_LEVELS
from .emulator_impl import OnkyoReceiverEmulator

async def run_emulator(bind_addr: str, port: int) -> None:
    emulator = OnkyoReceiverEmulator(bind_addr=bind_addr, port=port)
    await emulator.run()

def main() -> int:
    parser = argparse.ArgumentParser(description="Emulate an eISCP receiver on TCP/IP.")
    parser.add_argument('--bind', default='0.0.0.0', help="Address to listen on. Default: 0.0.0.0")
    parser.add_argument('--port', type=int, default=DEFAULT_PORT, help=f"Port to listen on. Default: {DEFAULT_PORT}")
    parser.add_argument('--log-level', default='info', type=str.lower, choices=LOG_LEVELS,
        help="Logging level. Default: info")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())
    try:
        asyncio.run(run_emulator(args.bind, args.port))
    except KeyboardInterrupt:
        pass
    return 0

if __name__ == '__main__':
    raise SystemExit(main())
