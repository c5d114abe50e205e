#!/usr/bin/env python3
#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Known eISCP input source codes.

The input selector command (SLI) takes a 2-character hex code naming the
input channel. This module maps those codes to friendly lowercase channel
names and back. There is no protocol implementation here; only metadata
about the protocol.
"""
from __future__ import annotations

from types import MappingProxyType

from ..internal_types import *

SourceCode = str

_source_name_to_code: Dict[str, SourceCode] = {
    "vcr":            "00",
    "cbl":            "01",
    "game":           "02",
    "aux1":           "03",
    "aux2":           "04",
    "pc":             "05",
    "dvd":            "10",
    "phono":          "22",
    "cd":             "23",
    "fm":             "24",
    "am":             "25",
    "tuner":          "26",
    "dlna2":          "27",
    "internet-radio": "28",
    "usb-front":      "29",
    "usb-rear":       "2A",
    "network":        "2B",
  }

source_name_to_code = MappingProxyType(_source_name_to_code)
"""Lowercase input channel names, and the source codes they correspond to."""

source_code_to_name = MappingProxyType(dict((v, k) for k, v in _source_name_to_code.items()))
"""Source codes (uppercase hex), and the input channel names they correspond to."""

def get_all_source_names() -> List[str]:
    """Returns the names of all known input channels, in source code order"""
    return sorted(source_name_to_code, key=lambda name: source_name_to_code[name])

def source_code_for_name(name: str) -> SourceCode:
    """Returns the source code for an input channel name. Raises KeyError if unknown."""
    return source_name_to_code[name.lower()]

def source_name_for_code(code: SourceCode) -> Optional[str]:
    """Returns the input channel name for a source code, or None if the code is not known"""
    return source_code_to_name.get(code.upper())
