from __future__ import annotations

import json
from typing import Any


def dumps(obj: Any) -> str:
    """
    Minimal JSON dumper for CLI answers:
    no prettify, ensure_ascii=False, the CLI writes the final newline itself.
    """
    return json.dumps(obj, ensure_ascii=False)
