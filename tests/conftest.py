# tests/conftest.py
import sys

from pathlib import Path

# Put "src" on sys.path so `import dirpoll` works without an editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
