"""파싱 오류 타입."""
from __future__ import annotations
from typing import Optional

Span = tuple[int, int]


class ParseError(Exception):
    """parse() 가 던지는 모든 오류의 부모."""


class GrammarError(ParseError):
    """입력이 컨트롤러 문법과 맞지 않는다 (구조 오류)."""

    def __init__(self, position: int, message: str):
        super().__init__(f"grammar error at offset {position}: {message}")
        self.position = position
        self.message = message


class NoControllersFound(ParseError):
    """구조는 정상이지만 @Controller/@RestController 클래스가 하나도 없다."""

    def __init__(self, message: str = "no controllers found"):
        super().__init__(message)


class ClassNameMissing(ParseError):
    def __init__(self, span: Span):
        super().__init__(f"failed to extract class name in span {span[0]}..{span[1]}")
        self.span = span


class AnnotationArgumentError(ParseError):
    """annotation 인자 목록의 괄호가 닫히지 않았다."""

    def __init__(self, annotation: str, span: Span, detail: Optional[str] = None):
        msg = f"failed to extract @{annotation} arguments in span {span[0]}..{span[1]}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
        self.annotation = annotation
        self.span = span


class MethodHeaderError(ParseError):
    """mapping annotation 뒤에서 메서드 본문 '{' 를 찾지 못했다."""

    def __init__(self, annotation: str, span: Span, detail: Optional[str] = None):
        msg = f"failed to locate method header for @{annotation} in span {span[0]}..{span[1]}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
        self.annotation = annotation
        self.span = span
