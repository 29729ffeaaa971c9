"""라우트 목록 생성: Controller 파일 스캔 → 파싱 → Markdown 출력."""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.markup import escape

from spring_controller_parser.config import ErrorPolicy, settings
from spring_controller_parser.errors import NoControllersFound, ParseError
from spring_controller_parser.models import Controller
from spring_controller_parser.parser import parse
from spring_controller_parser.scanner import load_text, scan_controller_files
from spring_controller_parser.writer import write_routes

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class ScanSummary:
    out_path: Path
    controllers: list[Controller] = field(default_factory=list)
    failures: list[tuple[Path, ParseError]] = field(default_factory=list)


def run_scan(
    repo: Union[str, Path],
    out_dir: Optional[Path] = None,
    out_file: str = "controller_routes.md",
    policy: Optional[ErrorPolicy] = None,
) -> ScanSummary:
    repo_path = Path(repo).expanduser()
    if not repo_path.is_dir():
        raise ValueError(f"repo는 로컬 디렉터리여야 합니다: {repo}")
    repo_path = repo_path.resolve()

    base = out_dir or settings.output_dir
    base.mkdir(parents=True, exist_ok=True)
    summary = ScanSummary(out_path=base / out_file)

    console.print(f"[bold]Repo:[/bold] {escape(str(repo_path))}")
    controller_files = scan_controller_files(repo_path)
    console.print(f"Found [green]{len(controller_files)}[/green] controller candidates")

    for f in controller_files:
        rel = f.relative_to(repo_path).as_posix()
        try:
            summary.controllers.extend(parse(load_text(f), policy=policy))
        except NoControllersFound:
            # 파일명만 후보였던 경우
            logger.debug("no controllers in %s", rel)
        except ParseError as e:
            summary.failures.append((f, e))
            console.print(f"[yellow]Skipped[/yellow] {escape(rel)}: {escape(str(e))}")

    summary.controllers.sort(key=lambda c: c.name)
    write_routes(summary.controllers, summary.out_path)
    console.print(f"[bold green]Routes:[/bold green] {escape(str(summary.out_path))}")
    return summary
