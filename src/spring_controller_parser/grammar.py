"""
Spring 컨트롤러 인식에 필요한 Java 문법의 부분집합.

- identifier / annotation / mapping 인자 / class 선언 / 메서드 헤더 / 중괄호 블록
- 문자열·문자 리터럴과 주석은 상태 머신으로 공백 처리(mask)한 뒤 구조를 찾는다.
  마스킹된 텍스트는 원문과 길이가 같으므로 오프셋을 그대로 원문에 적용할 수 있다.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"

ANNOTATION_RE = re.compile(rf"@\s*({IDENTIFIER}(?:\s*\.\s*{IDENTIFIER})*)")
# Foo.class 같은 클래스 리터럴은 제외
CLASS_KEYWORD_RE = re.compile(rf"(?<![.\w$])class\s+({IDENTIFIER})")
MODIFIER_RE = re.compile(r"(?:public|protected|private|abstract|static|final|strictfp|non-sealed|sealed)\b")
DECL_KEYWORD_RE = re.compile(r"(?:class|interface|enum|record)\b")
NAMED_ARG_RE = re.compile(rf"\s*({IDENTIFIER})\s*=(?!=)")

CONTROLLER_ANNOTATIONS = frozenset({"Controller", "RestController"})
MAPPING_ANNOTATIONS = (
    "GetMapping",
    "PostMapping",
    "PutMapping",
    "DeleteMapping",
    "PatchMapping",
    "RequestMapping",
)
CLASS_MAPPING_ANNOTATION = "RequestMapping"
# @RequestMapping(value = "/api"), @GetMapping(path = "/x")
ROUTE_ELEMENTS = ("value", "path")

FILL = " "
_CLOSERS = {"(": ")", "{": "}", "[": "]"}


class LexState(Enum):
    CODE = "code"
    STRING = "string"
    TEXT_BLOCK = "text_block"
    CHAR = "char"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"


def _scan(source: str, keep_literals: bool) -> str:
    out = list(source)
    state = LexState.CODE
    n = len(source)
    i = 0
    while i < n:
        ch = source[i]

        if state is LexState.CODE:
            if source.startswith('"""', i):
                state = LexState.TEXT_BLOCK
                i += 3
                continue
            if source.startswith("//", i):
                state = LexState.LINE_COMMENT
                out[i] = out[i + 1] = FILL
                i += 2
                continue
            if source.startswith("/*", i):
                state = LexState.BLOCK_COMMENT
                out[i] = out[i + 1] = FILL
                i += 2
                continue
            if ch == '"':
                state = LexState.STRING
            elif ch == "'":
                state = LexState.CHAR
            i += 1
            continue

        if state is LexState.LINE_COMMENT:
            if ch == "\n":
                state = LexState.CODE
            else:
                out[i] = FILL
            i += 1
            continue

        if state is LexState.BLOCK_COMMENT:
            if source.startswith("*/", i):
                out[i] = out[i + 1] = FILL
                state = LexState.CODE
                i += 2
                continue
            if ch != "\n":
                out[i] = FILL
            i += 1
            continue

        # 리터럴 내부 (STRING / CHAR / TEXT_BLOCK)
        if ch == "\\" and i + 1 < n and source[i + 1] != "\n":
            if not keep_literals:
                out[i] = out[i + 1] = FILL
            i += 2
            continue
        if state is LexState.TEXT_BLOCK:
            if source.startswith('"""', i):
                state = LexState.CODE
                i += 3
                continue
        elif (state is LexState.STRING and ch == '"') or (state is LexState.CHAR and ch == "'"):
            state = LexState.CODE
            i += 1
            continue
        elif ch == "\n":
            # 닫히지 않은 한 줄 리터럴은 줄 끝에서 끝난 것으로 본다
            state = LexState.CODE
            i += 1
            continue
        if not keep_literals and ch != "\n":
            out[i] = FILL
        i += 1

    return "".join(out)


def mask_literals(source: str) -> str:
    """리터럴 내용과 주석을 공백으로 바꾼다. 따옴표 자체는 남긴다."""
    return _scan(source, keep_literals=False)


def strip_comments(source: str) -> str:
    """주석만 공백으로 바꾼다. 헤더/인자 값을 원문 그대로 꺼낼 때 사용."""
    return _scan(source, keep_literals=True)


def skip_whitespace(masked: str, pos: int, end: Optional[int] = None) -> int:
    stop = len(masked) if end is None else end
    while pos < stop and masked[pos].isspace():
        pos += 1
    return pos


def find_closing(masked: str, open_idx: int, end: Optional[int] = None) -> Optional[int]:
    """open_idx 의 여는 괄호와 짝이 맞는 닫는 괄호 위치 (카운터 기반)."""
    opener = masked[open_idx]
    closer = _CLOSERS[opener]
    stop = len(masked) if end is None else end
    depth = 0
    for i in range(open_idx, stop):
        c = masked[i]
        if c == opener:
            depth += 1
        elif c == closer:
            depth -= 1
            if depth == 0:
                return i
    return None


def find_block_open(masked: str, pos: int, end: Optional[int] = None) -> Optional[int]:
    """
    pos 이후 처음 나오는 블록 시작 '{' 위치.
    괄호 그룹(annotation 인자, 파라미터 목록)은 통째로 건너뛰고,
    ';' 또는 '}' 를 먼저 만나면 본문이 없는 선언이므로 None.
    """
    stop = len(masked) if end is None else end
    i = pos
    while i < stop:
        c = masked[i]
        if c == "(":
            close = find_closing(masked, i, stop)
            if close is None:
                return None
            i = close + 1
            continue
        if c == "{":
            return i
        if c in ";}":
            return None
        i += 1
    return None


def split_top_level(masked: str) -> list[tuple[int, int]]:
    """괄호 깊이 0 의 ',' 로 나눈 (start, end) 구간 목록."""
    parts: list[tuple[int, int]] = []
    depth = 0
    start = 0
    for i, c in enumerate(masked):
        if c in "({[":
            depth += 1
        elif c in ")}]":
            depth -= 1
        elif c == "," and depth == 0:
            parts.append((start, i))
            start = i + 1
    parts.append((start, len(masked)))
    return parts


def is_single_string_literal(masked: str) -> bool:
    s = masked.strip()
    return len(s) >= 2 and s[0] == '"' and s[-1] == '"' and s.count('"') == 2


@dataclass(frozen=True)
class AnnotationMatch:
    name: str                      # 단순 이름 (qualified 이면 마지막 segment)
    start: int                     # '@' 위치
    name_end: int
    args_open: Optional[int] = None
    args_close: Optional[int] = None

    @property
    def has_args(self) -> bool:
        return self.args_open is not None

    @property
    def unclosed(self) -> bool:
        return self.args_open is not None and self.args_close is None

    @property
    def end(self) -> int:
        if self.args_close is not None:
            return self.args_close + 1
        return self.name_end


def match_annotation(masked: str, pos: int, end: Optional[int] = None) -> Optional[AnnotationMatch]:
    """pos 위치의 annotation 을 읽는다. '@interface' 는 선언 키워드이므로 None."""
    stop = len(masked) if end is None else end
    m = ANNOTATION_RE.match(masked, pos, stop)
    if m is None:
        return None
    name = re.split(r"\s*\.\s*", m.group(1))[-1]
    if name == "interface":
        return None

    j = skip_whitespace(masked, m.end(), stop)
    if j < stop and masked[j] == "(":
        return AnnotationMatch(name, pos, m.end(), j, find_closing(masked, j, stop))
    return AnnotationMatch(name, pos, m.end())


def iter_annotations(masked: str, start: int = 0, end: Optional[int] = None) -> Iterator[AnnotationMatch]:
    stop = len(masked) if end is None else end
    pos = start
    while True:
        at = masked.find("@", pos, stop)
        if at < 0:
            return
        ann = match_annotation(masked, at, stop)
        if ann is None:
            pos = at + 1
            continue
        yield ann
        pos = ann.name_end if ann.unclosed else ann.end


@dataclass(frozen=True)
class Preamble:
    """선언 앞의 annotation / modifier 묶음."""
    start: int
    end: int                                # 선언 키워드(또는 그 밖의 토큰) 위치
    annotations: tuple[AnnotationMatch, ...]
    keyword: Optional[str] = None           # class / interface / enum / record / @interface

    @property
    def unclosed(self) -> Optional[AnnotationMatch]:
        for ann in self.annotations:
            if ann.unclosed:
                return ann
        return None

    def find(self, names) -> Optional[AnnotationMatch]:
        for ann in self.annotations:
            if ann.name in names:
                return ann
        return None


def read_preamble(masked: str, pos: int) -> Preamble:
    annotations: list[AnnotationMatch] = []
    i = pos
    while True:
        i = skip_whitespace(masked, i)
        ann = match_annotation(masked, i)
        if ann is not None:
            annotations.append(ann)
            if ann.unclosed:
                return Preamble(pos, ann.args_open + 1, tuple(annotations))
            i = ann.end
            continue
        m = MODIFIER_RE.match(masked, i)
        if m is not None:
            i = m.end()
            continue
        break

    keyword = None
    if masked.startswith("@", i):
        j = skip_whitespace(masked, i + 1)
        if masked.startswith("interface", j):
            keyword = "@interface"
    else:
        m = DECL_KEYWORD_RE.match(masked, i)
        if m is not None:
            keyword = m.group(0)
    return Preamble(pos, i, tuple(annotations), keyword)


@dataclass(frozen=True)
class ClassDecl:
    name: str
    keyword_start: int
    body_open: int


def read_class_decl(masked: str, pos: int) -> Optional[ClassDecl]:
    """pos 에서 시작하는 'class Name ... {' 를 읽는다."""
    m = CLASS_KEYWORD_RE.match(masked, pos)
    if m is None:
        return None
    body_open = find_block_open(masked, m.end())
    if body_open is None:
        return None
    return ClassDecl(m.group(1), m.start(), body_open)


def join_header_lines(fragment: str) -> str:
    """여러 줄에 걸친 메서드 헤더를 한 줄로 합친다."""
    header = ""
    for line in fragment.splitlines():
        line = line.strip()
        if not line:
            continue
        if header and not header.endswith("(") and not line.startswith((")", ",")):
            header += " "
        header += line
    return header
