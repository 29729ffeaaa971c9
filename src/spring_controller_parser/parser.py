"""
파싱 파이프라인: 소스 텍스트 → 컨트롤러 블록 → Controller 목록.

오류 정책
- fail-fast (기본): 첫 오류를 그대로 던진다.
- best-effort: 블록 단위 오류를 모아 두고 나머지 컨트롤러를 돌려준다.
  모든 블록이 실패하면 첫 오류를 던진다.
- 컨트롤러 모양의 블록이 하나도 없으면 두 정책 모두 NoControllersFound.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Union

from spring_controller_parser.config import ErrorPolicy, settings
from spring_controller_parser.errors import NoControllersFound, ParseError
from spring_controller_parser.extractor import extract_controller
from spring_controller_parser.matcher import BlockMatcher
from spring_controller_parser.models import Controller

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseReport:
    controllers: tuple[Controller, ...]
    errors: tuple[ParseError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


def _resolve_policy(policy: Union[ErrorPolicy, str, None]) -> ErrorPolicy:
    return ErrorPolicy(policy) if policy is not None else settings.error_policy


def parse_report(source: str, policy: Union[ErrorPolicy, str, None] = None) -> ParseReport:
    policy = _resolve_policy(policy)
    controllers: list[Controller] = []
    errors: list[ParseError] = []

    for item in BlockMatcher(source).scan():
        if isinstance(item, ParseError):
            if policy is ErrorPolicy.FAIL_FAST:
                raise item
            logger.warning("skipping malformed controller: %s", item)
            errors.append(item)
            continue
        try:
            controllers.append(extract_controller(item))
        except ParseError as e:
            if policy is ErrorPolicy.FAIL_FAST:
                raise
            logger.warning("skipping controller block %d..%d: %s", item.start, item.end, e)
            errors.append(e)

    logger.debug("parsed %d controllers, %d errors (%s)", len(controllers), len(errors), policy.value)
    if not controllers and not errors:
        raise NoControllersFound()
    return ParseReport(tuple(controllers), tuple(errors))


def parse(source: str, policy: Union[ErrorPolicy, str, None] = None) -> list[Controller]:
    """
    Java 소스에서 Spring 컨트롤러를 추출한다.
    반환: 소스 순서의 Controller 목록 / 실패 시 ParseError 하위 타입을 던진다.
    """
    report = parse_report(source, policy)
    if not report.controllers:
        raise report.errors[0]
    return list(report.controllers)
