#!/usr/bin/env python3
# /candy/main.py
"""
candy Main Entry Point
======================

Runs the editor straight from a source checkout (``python main.py [FILE]``).
Installed copies use the ``candy`` console script instead; both end up in
`candy.__main__.start`.
"""

import os
import sys

# Ensure the 'candy' package under src/ is importable for source runs.
project_root = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(project_root, "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from candy.__main__ import start  # noqa: E402


if __name__ == "__main__":
    start()
