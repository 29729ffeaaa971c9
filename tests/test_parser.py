"""Tests for the parse() pipeline and error policies."""

import pytest

from spring_controller_parser import (
    AnnotationArgumentError,
    Controller,
    ControllerMethod,
    ErrorPolicy,
    GrammarError,
    MethodHeaderError,
    NoControllersFound,
    parse,
    parse_report,
)
from spring_controller_parser.config import settings


class TestParse:
    """Test successful parsing."""

    def test_parse_simple(self, sample_simple):
        controllers = parse(sample_simple)
        assert controllers == [
            Controller(
                name="HelloController",
                class_mapping="/api",
                methods=(
                    ControllerMethod(annotation="GetMapping", annotation_args="/hi", header="public String hi()"),
                    ControllerMethod(annotation="GetMapping", annotation_args=None, header="public String ping()"),
                ),
            )
        ]

    def test_controllers_in_source_order(self, sample_multi):
        controllers = parse(sample_multi)
        assert [c.name for c in controllers] == ["UserController", "HealthController"]
        assert controllers[0].class_mapping == "/users"
        assert len(controllers[0].methods) == 6
        assert controllers[1].class_mapping is None

    def test_n_controllers(self):
        src = "\n".join(
            f'@RestController\nclass C{i} {{\n  @GetMapping("/{i}") public int get() {{ return {i}; }}\n}}\n'
            for i in range(5)
        )
        controllers = parse(src)
        assert [c.name for c in controllers] == [f"C{i}" for i in range(5)]
        assert [c.methods[0].annotation_args for c in controllers] == [f"/{i}" for i in range(5)]

    def test_idempotent(self, sample_multi):
        assert parse(sample_multi) == parse(sample_multi)

    def test_nested_braces(self, sample_nested):
        controllers = parse(sample_nested)
        assert len(controllers) == 1
        assert [m.annotation for m in controllers[0].methods] == ["GetMapping", "PostMapping"]

    def test_qualified_controller_annotation(self):
        src = "@org.springframework.web.bind.annotation.RestController\npublic class Q { }"
        assert parse(src)[0].name == "Q"

    def test_controller_annotation_with_argument(self):
        src = '@Controller("userController")\npublic class Named { }'
        assert parse(src)[0].name == "Named"


class TestErrors:
    """Test failure outcomes and the error policy."""

    def test_no_controllers(self, sample_no_controllers):
        with pytest.raises(NoControllersFound):
            parse(sample_no_controllers)

    def test_empty_input(self):
        with pytest.raises(NoControllersFound):
            parse("")

    def test_fail_fast(self, sample_broken_then_good):
        with pytest.raises(MethodHeaderError):
            parse(sample_broken_then_good, policy=ErrorPolicy.FAIL_FAST)

    def test_best_effort_keeps_good_controllers(self, sample_broken_then_good):
        controllers = parse(sample_broken_then_good, policy="best-effort")
        assert [c.name for c in controllers] == ["GoodController"]

    def test_best_effort_report(self, sample_broken_then_good):
        report = parse_report(sample_broken_then_good, policy=ErrorPolicy.BEST_EFFORT)
        assert not report.ok
        assert len(report.errors) == 1
        assert isinstance(report.errors[0], MethodHeaderError)
        assert report.errors[0].annotation == "GetMapping"

    def test_best_effort_records_grammar_errors(self):
        src = "@RestController\ninterface Broken { }\n\n@RestController\nclass Good { }\n"
        report = parse_report(src, policy=ErrorPolicy.BEST_EFFORT)
        assert [c.name for c in report.controllers] == ["Good"]
        assert isinstance(report.errors[0], GrammarError)
        assert report.errors[0].position == 0

    def test_unclosed_class_mapping_before_controller_annotation(self):
        """A broken class mapping written first is reported, not dropped."""
        src = (
            '@RequestMapping("/api"\n@RestController\nclass A {\n'
            '  @GetMapping("/x") public String x() { return "x"; }\n}\n'
        )
        with pytest.raises(AnnotationArgumentError) as exc_info:
            parse(src)
        assert exc_info.value.annotation == "RequestMapping"
        assert exc_info.value.span[0] == 0

    def test_unclosed_class_mapping_after_controller_annotation(self):
        src = (
            '@RestController\n@RequestMapping("/api"\nclass A {\n'
            '  @GetMapping("/x") public String x() { return "x"; }\n}\n'
        )
        with pytest.raises(AnnotationArgumentError) as exc_info:
            parse(src)
        assert exc_info.value.annotation == "RequestMapping"
        assert exc_info.value.span[0] == 0

    def test_best_effort_records_unclosed_class_mapping(self):
        src = '@RestController\n@RequestMapping("/api"\nclass A { }\n'
        report = parse_report(src, policy=ErrorPolicy.BEST_EFFORT)
        assert report.controllers == ()
        assert [type(e) for e in report.errors] == [AnnotationArgumentError]

    def test_best_effort_all_failed_raises_first_error(self):
        src = "@RestController\ninterface Broken { }\n"
        with pytest.raises(GrammarError):
            parse(src, policy=ErrorPolicy.BEST_EFFORT)

    def test_default_policy_from_settings(self, monkeypatch, sample_broken_then_good):
        monkeypatch.setattr(settings, "error_policy", ErrorPolicy.BEST_EFFORT)
        assert [c.name for c in parse(sample_broken_then_good)] == ["GoodController"]

    def test_each_controller_evaluated_independently(self, sample_good, sample_broken_then_good):
        """The good block parses the same whether or not a broken sibling precedes it."""
        alone = parse(sample_good)
        together = parse(sample_broken_then_good, policy=ErrorPolicy.BEST_EFFORT)
        assert alone == together
