#!/usr/bin/env python3
"""
Plot records launcher script.

Run this from the project root to start the records browser.
"""

import sys

if __name__ == '__main__':
    from plotview.run_gui import run_gui
    sys.exit(run_gui(sys.argv[1:]))
