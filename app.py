from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent
if str(REPO_ROOT / "src" / "attendease") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src" / "attendease"))

from attendease.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000)
