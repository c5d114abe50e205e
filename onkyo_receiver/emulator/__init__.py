# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver emulator.

Provides a simple emulation of an eISCP receiver on TCP/IP.
"""

from .emulator_impl import OnkyoReceiverEmulator
from .session import OnkyoReceiverEmulatorSession
