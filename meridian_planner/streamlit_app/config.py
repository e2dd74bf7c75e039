from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = BASE_DIR / "data"
DB_PATH = Path(os.environ.get("MERIDIAN_DB_PATH", DATA_DIR / "meridian.db"))

OBJECTS_PAGE = "pages/Objects.py"
ISSUES_PAGE = "pages/Issues.py"
NEW_OBJECT_PAGE = "pages/New_object.py"

# URL paths Streamlit serves the list pages under.
OBJECTS_PATH = "/Objects"
ISSUES_PATH = "/Issues"
