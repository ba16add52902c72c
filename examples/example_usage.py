"""Example: use the service layer directly, without Flask.

Controllers are thin; the numbers a dashboard shows come from the services.
"""

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "attendease"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from attendease.container import build_container


def main(user_id: int = 1):
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)

    summary = container.attendance_service.summary(user_id)
    for s in summary.subjects:
        flag = "" if s.classes_needed == 0 else f"  (attend next {s.classes_needed} to reach {summary.threshold:g}%)"
        print(f"{s.subject:<28} {s.present:>3}/{s.total:<3} {s.percent:>3}%{flag}")
    print(f"{'Overall':<28} {summary.overall.total_present:>3}/{summary.overall.total_classes:<3} "
          f"{summary.overall.overall_percent:>3}%")


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 1)
