"""컨트롤러 블록 하나에서 클래스명 / class mapping / 핸들러 메서드를 추출한다."""
from __future__ import annotations
from typing import Optional

import javalang

from spring_controller_parser.errors import (
    AnnotationArgumentError,
    ClassNameMissing,
    GrammarError,
    MethodHeaderError,
)
from spring_controller_parser.grammar import (
    CLASS_KEYWORD_RE,
    CLASS_MAPPING_ANNOTATION,
    MAPPING_ANNOTATIONS,
    NAMED_ARG_RE,
    ROUTE_ELEMENTS,
    find_block_open,
    find_closing,
    is_single_string_literal,
    iter_annotations,
    join_header_lines,
    mask_literals,
    match_annotation,
    read_preamble,
    skip_whitespace,
    split_top_level,
    strip_comments,
)
from spring_controller_parser.matcher import ControllerSpan
from spring_controller_parser.models import Controller, ControllerMethod


def _unquote(value: str, masked: str) -> str:
    value = value.strip()
    if is_single_string_literal(masked):
        # 바깥 따옴표 한 겹만 제거 (내부의 \" 는 그대로)
        return value[1:-1]
    return value


def reduce_mapping_args(raw: str) -> Optional[str]:
    """
    annotation 괄호 안 텍스트 → 경로 문자열.
    - 비어 있으면 None
    - "..." 하나면 따옴표 제거
    - value= / path= 형태면 그 값이 문자열 리터럴 하나일 때만 추출, 아니면 None
    - 그 밖의 위치 인자(상수, 배열, 연결식)는 식 그대로
    """
    masked = mask_literals(raw)
    if not masked.strip():
        return None

    named: dict[str, tuple[int, int]] = {}
    for start, end in split_top_level(masked):
        m = NAMED_ARG_RE.match(masked, start, end)
        if m is not None:
            named[m.group(1)] = (m.end(), end)

    if not named:
        return _unquote(raw, masked)

    for key in ROUTE_ELEMENTS:
        if key in named:
            start, end = named[key]
            if is_single_string_literal(masked[start:end]):
                return _unquote(raw[start:end], masked[start:end])
            return None
    return None


def extract_name(text: str, masked: str, span: ControllerSpan) -> tuple[str, int, int]:
    """(클래스명, class 키워드 위치, 본문 '{' 위치)"""
    m = CLASS_KEYWORD_RE.search(masked)
    if m is None:
        raise ClassNameMissing(span.bounds)
    body_open = find_block_open(masked, m.end())
    if body_open is None:
        raise ClassNameMissing(span.bounds)

    # annotation 인자 안의 Foo.class 와 구분하려고 토큰 단위로 읽는다
    try:
        tokens = list(javalang.tokenizer.tokenize(text[:body_open]))
    except javalang.tokenizer.LexerError as e:
        raise GrammarError(span.start + m.start(), f"cannot tokenize class header: {e}") from e

    prev = None
    for cur, nxt in zip(tokens, tokens[1:]):
        if (
            isinstance(cur, javalang.tokenizer.Keyword)
            and cur.value == "class"
            and not (prev is not None and prev.value == ".")
            and isinstance(nxt, javalang.tokenizer.Identifier)
        ):
            return nxt.value, m.start(), body_open
        prev = cur
    raise ClassNameMissing(span.bounds)


def extract_class_mapping(plain: str, masked: str, class_pos: int, span: ControllerSpan) -> Optional[str]:
    for ann in iter_annotations(masked, 0, class_pos):
        if ann.name != CLASS_MAPPING_ANNOTATION:
            continue
        if ann.unclosed:
            raise AnnotationArgumentError(ann.name, span.bounds, "missing ')'")
        if not ann.has_args:
            return None
        return reduce_mapping_args(plain[ann.args_open + 1:ann.args_close])
    return None


def _method_header(plain: str, masked: str, start: int, brace: int) -> str:
    # mapping 뒤에 붙은 다른 annotation(@PreAuthorize 등)은 헤더에서 뺀다
    i = start
    while True:
        i = skip_whitespace(masked, i, brace)
        ann = match_annotation(masked, i, brace)
        if ann is None or ann.unclosed:
            break
        i = ann.end
    return join_header_lines(plain[i:brace])


def extract_methods(plain: str, masked: str, body_open: int, body_close: int, span: ControllerSpan) -> list[ControllerMethod]:
    """
    클래스 본문을 왼쪽부터 훑으며 mapping annotation 이 붙은 메서드를 모은다.
    메서드 하나를 읽으면 그 본문 '}' 다음부터 이어서 찾으므로 같은 구간을 두 번 읽지 않는다.
    """
    methods: list[ControllerMethod] = []
    pos = body_open + 1
    while True:
        at = masked.find("@", pos, body_close)
        if at < 0:
            break
        ann = match_annotation(masked, at, body_close)
        if ann is None:
            pos = at + 1
            continue
        if ann.name not in MAPPING_ANNOTATIONS:
            pos = ann.name_end if ann.unclosed else ann.end
            continue
        if ann.unclosed:
            raise AnnotationArgumentError(ann.name, span.bounds, "missing ')'")

        # 내부 클래스에 붙은 mapping 은 핸들러가 아니다. 본문 안쪽을 계속 훑는다
        if read_preamble(masked, ann.end).keyword is not None:
            brace = find_block_open(masked, ann.end, body_close)
            pos = ann.end if brace is None else brace + 1
            continue

        args = None
        if ann.has_args:
            args = reduce_mapping_args(plain[ann.args_open + 1:ann.args_close])

        brace = find_block_open(masked, ann.end, body_close)
        if brace is None:
            raise MethodHeaderError(ann.name, span.bounds, "no method body '{' after annotation")
        header = _method_header(plain, masked, ann.end, brace)
        if not header:
            raise MethodHeaderError(ann.name, span.bounds, "empty method header")
        close = find_closing(masked, brace, body_close)
        if close is None:
            raise MethodHeaderError(ann.name, span.bounds, "unbalanced method body")

        methods.append(ControllerMethod(annotation=ann.name, annotation_args=args, header=header))
        pos = close + 1
    return methods


def extract_controller(span: ControllerSpan) -> Controller:
    text = span.text
    masked = mask_literals(text)
    plain = strip_comments(text)

    name, class_pos, body_open = extract_name(text, masked, span)
    class_mapping = extract_class_mapping(plain, masked, class_pos, span)

    body_close = find_closing(masked, body_open)
    if body_close is None:
        body_close = len(text)
    methods = extract_methods(plain, masked, body_open, body_close, span)

    return Controller(name=name, class_mapping=class_mapping, methods=tuple(methods))
