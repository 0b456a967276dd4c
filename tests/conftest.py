import os
import sys


# Ensure the repository root is on sys.path for `from knights_tour...` imports
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
