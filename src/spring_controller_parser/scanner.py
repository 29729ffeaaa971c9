"""Controller 후보 파일 스캐너."""
from __future__ import annotations
import re
from pathlib import Path

CONTROLLER_ANN_RE = re.compile(r"@\s*(RestController|Controller)\b")

CONTROLLER_NAME_RE = re.compile(r".*(Controller|Resource|Api)\.java$", re.IGNORECASE)

SKIP_DIRS = {".git", "target", "build", "out", ".gradle", ".idea", "node_modules", "generated-sources"}


def load_text(p: Path) -> str:
    return p.read_text(encoding="utf-8", errors="ignore")


def scan_controller_files(repo_path: Path) -> list[Path]:
    """@RestController, @Controller 가 포함된 Java 파일(또는 *Controller.java)을 찾는다."""
    candidates: set[Path] = set()

    for f in repo_path.rglob("*.java"):
        if not f.is_file():
            continue
        if SKIP_DIRS.intersection(f.relative_to(repo_path).parts[:-1]):
            continue
        try:
            text = load_text(f)
        except OSError:
            continue

        if CONTROLLER_ANN_RE.search(text):
            candidates.add(f)
        elif CONTROLLER_NAME_RE.match(f.name):
            candidates.add(f)

    return sorted(candidates)
