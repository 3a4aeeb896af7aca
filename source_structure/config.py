import os
from typing import Tuple

PROJECT_FILE_NAME = "source_structure.json"

REPORT_HEADER = "Path\tFiles (cumulative)\tLines (cumulative)"
REPORT_ROOT_MARKER = "$"
REPORT_ENCODING = "utf-8"

# New projects track every extension unless the caller lists some here.
DEFAULT_EXCLUDED_EXTENSIONS: Tuple[str, ...] = ()

HOST = os.environ.get("SOURCE_STRUCTURE_HOST", "127.0.0.1")
PORT = int(os.environ.get("SOURCE_STRUCTURE_PORT", "8000"))
