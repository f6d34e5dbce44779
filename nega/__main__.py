"""
Same as the `nega` console script, for use as:

    py -m nega program.nega
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from nega.cmdline import main

main()
