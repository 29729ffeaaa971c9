"""
Spring 컨트롤러 파서 CLI.
- parse <file>: 파일 하나를 파싱해 결과 출력 (오류 시 exit 1)
- scan <dir>:   디렉터리 전체 컨트롤러 → Markdown 라우트 목록
- help / credits
"""
from __future__ import annotations
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from spring_controller_parser.config import ErrorPolicy, settings
from spring_controller_parser.errors import NoControllersFound, ParseError
from spring_controller_parser.models import Controller, join_route
from spring_controller_parser.parser import parse_report
from spring_controller_parser.run import run_scan
from spring_controller_parser.scanner import load_text
from spring_controller_parser.writer import to_json, to_markdown, write_routes

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="spring-controller-parser",
    add_completion=False,
    help="Java Spring 컨트롤러 소스에서 클래스/라우트/핸들러 메서드를 추출합니다.",
)


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    MARKDOWN = "markdown"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="DEBUG 로그 출력"),
):
    level = "DEBUG" if verbose else settings.log_level
    logging.basicConfig(level=level.upper(), format="%(levelname)s %(name)s: %(message)s")


def _print_table(controllers: list[Controller]) -> None:
    for ctrl in controllers:
        title = ctrl.name
        if ctrl.class_mapping is not None:
            title += f"  ({ctrl.class_mapping})"
        table = Table(title=escape(title), title_justify="left")
        table.add_column("Method")
        table.add_column("Path")
        table.add_column("Annotation")
        table.add_column("Header")
        for m in ctrl.methods:
            table.add_row(
                m.http_method,
                escape(join_route(ctrl.class_mapping, m.annotation_args)),
                f"@{m.annotation}",
                escape(m.header),
            )
        console.print(table)


@app.command("parse")
def parse_cmd(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Java 소스 파일"),
    policy: Optional[ErrorPolicy] = typer.Option(None, "--policy", help="오류 정책 (기본: 설정값)"),
    fmt: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="출력 형식"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="결과를 파일로 저장 (json/markdown)"),
    allow_empty: bool = typer.Option(False, "--allow-empty", help="컨트롤러가 없어도 exit 0"),
):
    """파일 하나를 파싱한다."""
    source = load_text(file)
    try:
        report = parse_report(source, policy)
        if not report.controllers:
            raise report.errors[0]
    except NoControllersFound:
        if allow_empty:
            console.print("No controllers found.")
            return
        err_console.print(f"[bold red]No controllers found[/bold red] in {escape(str(file))}")
        raise typer.Exit(code=1)
    except ParseError as e:
        err_console.print(f"[bold red]Parse failed:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    controllers = list(report.controllers)
    for e in report.errors:
        err_console.print(f"[yellow]Skipped:[/yellow] {escape(str(e))}")

    if out is not None:
        write_routes(controllers, out, fmt="json" if fmt is OutputFormat.JSON else "markdown")
        console.print(f"[bold green]Written:[/bold green] {escape(str(out))}")
    elif fmt is OutputFormat.JSON:
        typer.echo(to_json(controllers))
    elif fmt is OutputFormat.MARKDOWN:
        typer.echo(to_markdown(controllers))
    else:
        _print_table(controllers)

    if report.errors:
        raise typer.Exit(code=1)


@app.command("scan")
def scan_cmd(
    repo: Path = typer.Argument(..., exists=True, file_okay=False, help="로컬 프로젝트 디렉터리"),
    out_file: str = typer.Option("controller_routes.md", help="출력 파일명"),
    out_dir: Optional[Path] = typer.Option(None, help="출력 디렉터리 (기본: 설정값)"),
    policy: Optional[ErrorPolicy] = typer.Option(None, "--policy", help="오류 정책 (기본: 설정값)"),
):
    """디렉터리의 모든 컨트롤러를 파싱해 Markdown 라우트 목록을 만든다."""
    summary = run_scan(repo, out_dir=out_dir, out_file=out_file, policy=policy)
    if summary.failures:
        raise typer.Exit(code=1)


@app.command("help")
def help_cmd():
    """사용 가능한 명령 목록."""
    console.print("Spring controller parser CLI help")
    console.print("To use: spring-controller-parser <command>")
    console.print()
    console.print("Commands:")
    console.print("  parse <file_path>  -   Parse the file")
    console.print("  scan <dir_path>    -   Write a route inventory for a directory")
    console.print("  help               -   Show help")
    console.print("  credits            -   Show credits (author)")
    console.print()
    console.print("Parse example")
    console.print("  spring-controller-parser parse example.java")


@app.command("credits")
def credits_cmd():
    """제작자 정보."""
    console.print("Spring controller parser created by Stanislav Kulakevych")


if __name__ == "__main__":
    app()
