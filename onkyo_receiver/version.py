# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Version of package onkyo_receiver"""

__version__ = "0.1.0"
