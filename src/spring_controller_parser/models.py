"""컨트롤러 추출 결과 Pydantic 모델 (생성 후 변경 불가)."""
from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from spring_controller_parser.grammar import MAPPING_ANNOTATIONS

HTTP_METHODS = {
    "GetMapping": "GET",
    "PostMapping": "POST",
    "PutMapping": "PUT",
    "DeleteMapping": "DELETE",
    "PatchMapping": "PATCH",
    "RequestMapping": "ANY",
}


def join_route(prefix: Optional[str], path: Optional[str]) -> str:
    """클래스 prefix 와 메서드 경로를 '/' 하나로 잇는다."""
    parts = [p.strip("/") for p in (prefix, path) if p]
    return "/" + "/".join(p for p in parts if p)


class ControllerMethod(BaseModel):
    model_config = ConfigDict(frozen=True)

    annotation: str                          # GetMapping / PostMapping / ... (no '@')
    annotation_args: Optional[str] = None    # "/users/{id}"
    header: str = Field(min_length=1)        # public User get(@PathVariable Long id)

    @field_validator("annotation")
    @classmethod
    def known_mapping(cls, v: str) -> str:
        if v not in MAPPING_ANNOTATIONS:
            raise ValueError(f"unknown mapping annotation: {v}")
        return v

    @property
    def http_method(self) -> str:
        return HTTP_METHODS[self.annotation]


class Controller(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)          # 클래스명
    class_mapping: Optional[str] = None      # @RequestMapping("/api/users")
    methods: tuple[ControllerMethod, ...] = ()

    def routes(self) -> list[tuple[str, str, str]]:
        """(HTTP method, 전체 경로, 헤더) 목록. 소스 순서 유지."""
        return [
            (m.http_method, join_route(self.class_mapping, m.annotation_args), m.header)
            for m in self.methods
        ]
