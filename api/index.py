import sys
from pathlib import Path

# Add the backend directory to the Python path so that
# `from auditpro.xxx import ...` resolves without an install.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from auditpro.main import app  # noqa: E402, F401
