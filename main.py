#!/usr/bin/env python3
# Pendant Watch (serial pendant keyboard bridge)
# Copyright (C) 2026 Pendant Watch contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
#
# SPDX-License-Identifier: GPL-3.0-or-later
""" 
    Pendant Watch - run from a source checkout: python main.py --port COM6
"""

import sys

from pendant_watch.cli import main

if __name__ == "__main__":
    sys.exit(main())
