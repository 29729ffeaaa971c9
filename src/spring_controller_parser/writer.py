"""Controller 목록 → Markdown 라우트 목록 / JSON."""
from __future__ import annotations
import json
from pathlib import Path
from typing import Sequence

from spring_controller_parser.models import Controller, join_route


def _cell(s: str) -> str:
    return s.replace("|", "\\|")


def to_markdown(controllers: Sequence[Controller]) -> str:
    lines: list[str] = []
    lines.append("# Controller Routes\n")

    total_endpoints = sum(len(c.methods) for c in controllers)
    lines.append(f"- Controllers: {len(controllers)}")
    lines.append(f"- Total endpoints: {total_endpoints}\n")

    for ctrl in controllers:
        lines.append(f"## {ctrl.name}")
        if ctrl.class_mapping is not None:
            lines.append(f"**Base path:** `{ctrl.class_mapping}`\n")

        if not ctrl.methods:
            lines.append("_No mapped handler methods._\n")
        else:
            lines.append("| Method | Path | Annotation | Header |")
            lines.append("|--------|------|------------|--------|")
            for m in ctrl.methods:
                path = join_route(ctrl.class_mapping, m.annotation_args)
                lines.append(
                    f"| {m.http_method} | `{_cell(path)}` | @{m.annotation} | `{_cell(m.header)}` |"
                )
            lines.append("")

        lines.append("---\n")

    return "\n".join(lines)


def to_json(controllers: Sequence[Controller]) -> str:
    data = [c.model_dump(mode="json") for c in controllers]
    return json.dumps(data, ensure_ascii=False, indent=2)


def write_routes(controllers: Sequence[Controller], out_path: Path, fmt: str = "markdown") -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    text = to_json(controllers) if fmt == "json" else to_markdown(controllers)
    out_path.write_text(text, encoding="utf-8")
    return out_path
