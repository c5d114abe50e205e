# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
eISCP receiver client abstract transport connector interface.

Provides a low-level abstract interface for objects that can create
transport connections (including the greeting handshake) to a receiver.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..internal_types import *
from .client_transport import ReceiverClientTransport

class OnkyoReceiverConnector(ABC):
    """Abstract base class for eISCP receiver client transport connectors."""

    @abstractmethod
    def connect(self) -> ReceiverClientTransport:
        """Create and initialize (including handshake)
           a client transport for the receiver associated with this
           connector.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()
