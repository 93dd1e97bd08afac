import sys

from plotview.run_gui import run_gui

sys.exit(run_gui(sys.argv[1:]))
