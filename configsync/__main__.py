#!/usr/bin/env python3
"""Allow running ConfigSync with ``python -m configsync``."""

import sys

from .main import main

sys.exit(main())
