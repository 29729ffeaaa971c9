"""Spring MVC 컨트롤러 소스 파서."""
from spring_controller_parser.config import ErrorPolicy
from spring_controller_parser.errors import (
    AnnotationArgumentError,
    ClassNameMissing,
    GrammarError,
    MethodHeaderError,
    NoControllersFound,
    ParseError,
)
from spring_controller_parser.models import Controller, ControllerMethod
from spring_controller_parser.parser import ParseReport, parse, parse_report

__all__ = [
    "AnnotationArgumentError",
    "ClassNameMissing",
    "Controller",
    "ControllerMethod",
    "ErrorPolicy",
    "GrammarError",
    "MethodHeaderError",
    "NoControllersFound",
    "ParseError",
    "ParseReport",
    "parse",
    "parse_report",
]
