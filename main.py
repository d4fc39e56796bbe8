#!/usr/bin/env python3
"""
asciigen
========
Run the converter from a source checkout: ``python main.py image.png -w 80``.
"""

import sys

from asciigen.cli import main


if __name__ == '__main__':
    sys.exit(main())
