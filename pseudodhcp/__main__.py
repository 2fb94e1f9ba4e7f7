# SPDX-License-Identifier: MIT

import sys

from .cli import main

sys.exit(main())

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
