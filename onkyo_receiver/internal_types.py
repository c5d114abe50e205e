# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Type hints used internally by package onkyo_receiver.

Intended to be star-imported by the modules of this package.
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Dict,
    List,
    Optional,
    Type,
    Tuple,
    Protocol,
    BinaryIO,
  )

from types import TracebackType

from typing_extensions import Self

class ByteSource(Protocol):
    """Anything that can be read from with blocking read(n) semantics, such as
       a socket file object or io.BytesIO."""
    def read(self, size: int = -1) -> bytes: ...
