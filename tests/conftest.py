import textwrap
from pathlib import Path

import pytest

from tests.infrastructure.file_utils import write


@pytest.fixture
def tmpproj(tmp_path: Path, monkeypatch):
    """Small project: two JS/TS sources, one vendored file and a text file."""
    root = tmp_path
    write(
        root / "src" / "app.js",
        textwrap.dedent("""\
        // #if DEBUG
        console.log('debug');
        // #endif
        run();
        """),
    )
    write(
        root / "src" / "lib" / "util.ts",
        textwrap.dedent("""\
        export const modes: string[] = [
          // #if MODE === 'dev'
          'dev',
          // #else
          'prod',
          // #endif
        ];
        """),
    )
    write(
        root / "src" / "vendor" / "dep.js",
        "// #if DEBUG\nvendor();\n// #endif\n",
    )
    write(root / "src" / "notes.txt", "// #if DEBUG\nplain text\n// #endif\n")
    monkeypatch.chdir(root)
    return root
