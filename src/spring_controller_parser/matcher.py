"""컨트롤러 블록 매처: 소스 전체에서 @Controller / @RestController 클래스 구간을 찾는다."""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from spring_controller_parser.errors import AnnotationArgumentError, GrammarError, ParseError
from spring_controller_parser.grammar import (
    CONTROLLER_ANNOTATIONS,
    MAPPING_ANNOTATIONS,
    AnnotationMatch,
    find_closing,
    mask_literals,
    read_class_decl,
    read_preamble,
)

logger = logging.getLogger(__name__)

_GAP_STOP_RE = re.compile(r";|\b(?:class|interface|enum|record)\b")


@dataclass(frozen=True)
class ControllerSpan:
    source: str = field(repr=False)
    start: int
    end: int

    @classmethod
    def of(cls, text: str) -> "ControllerSpan":
        return cls(text, 0, len(text))

    @property
    def text(self) -> str:
        return self.source[self.start:self.end]

    @property
    def bounds(self) -> tuple[int, int]:
        return (self.start, self.end)


class BlockMatcher:
    """
    소스 텍스트의 컨트롤러 블록 구간을 왼쪽부터 차례로 돌려준다.
    - 블록 = (class-level annotation 들) + class 선언 + 짝이 맞는 '}' 까지
    - 리터럴/주석 안의 중괄호는 마스킹되어 있으므로 개수에 포함되지 않는다
    - iter() 할 때마다 처음부터 다시 스캔한다
    """

    def __init__(self, source: str):
        self.source = source
        self._masked: Optional[str] = None

    @property
    def masked(self) -> str:
        if self._masked is None:
            self._masked = mask_literals(self.source)
        return self._masked

    def __iter__(self) -> Iterator[ControllerSpan]:
        for item in self.scan():
            if isinstance(item, ParseError):
                raise item
            yield item

    def scan(self) -> Iterator[Union[ControllerSpan, ParseError]]:
        """구간과 구조 오류를 등장 순서대로 돌려준다. 오류 뒤에도 스캔을 이어간다."""
        masked = self.masked
        pos = 0
        while True:
            at = masked.find("@", pos)
            if at < 0:
                return

            preamble = read_preamble(masked, at)
            controller = preamble.find(CONTROLLER_ANNOTATIONS)
            unclosed = preamble.unclosed
            if controller is None and unclosed is not None:
                controller = self._controller_after(unclosed)
            if controller is None:
                pos = max(preamble.end, at + 1)
                continue

            if unclosed is not None:
                if unclosed.name in MAPPING_ANNOTATIONS:
                    yield AnnotationArgumentError(unclosed.name, (preamble.start, len(self.source)), "missing ')'")
                else:
                    yield GrammarError(
                        controller.start,
                        f"unclosed argument list of @{unclosed.name} before class declaration",
                    )
                pos = max(controller.name_end, unclosed.name_end)
                continue

            decl = read_class_decl(masked, preamble.end)
            if decl is None:
                found = preamble.keyword or "no class declaration"
                yield GrammarError(controller.start, f"@{controller.name} must precede a class declaration (found: {found})")
                pos = controller.name_end
                continue

            close = find_closing(masked, decl.body_open)
            if close is None:
                yield GrammarError(controller.start, f"unbalanced braces in body of class {decl.name}")
                pos = controller.name_end
                continue

            logger.debug("controller block %s: offsets %d..%d", decl.name, preamble.start, close + 1)
            yield ControllerSpan(self.source, preamble.start, close + 1)
            pos = close + 1

    def _controller_after(self, ann: AnnotationMatch) -> Optional[AnnotationMatch]:
        """
        닫히지 않은 annotation 바로 뒤에 이어지는 controller annotation.
        사이에 ';' 나 선언 키워드가 있으면 다른 선언으로 보고 None.
        """
        masked = self.masked
        pos = ann.args_open + 1
        while True:
            at = masked.find("@", pos)
            if at < 0 or _GAP_STOP_RE.search(masked, pos, at):
                return None
            tail = read_preamble(masked, at)
            found = tail.find(CONTROLLER_ANNOTATIONS)
            if found is not None or tail.unclosed is None:
                return found
            pos = tail.unclosed.args_open + 1


def iter_controller_spans(source: str) -> Iterator[ControllerSpan]:
    return iter(BlockMatcher(source))
