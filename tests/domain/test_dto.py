"""Tests for DTO binding."""

import dataclasses

import pytest

from querystudy.domain.dto import MemberDto, UserDto, bind_fields
from querystudy.domain.errors import ProjectionError, QueryStudyError


class TestBindFields:
    def test_binds_by_name(self) -> None:
        assert bind_fields(MemberDto, {"username": "member1", "age": 10}) == MemberDto(
            "member1", 10
        )

    def test_label_order_does_not_matter(self) -> None:
        assert bind_fields(UserDto, {"age": 40, "name": "member1"}) == UserDto("member1", 40)

    def test_null_username(self) -> None:
        assert bind_fields(MemberDto, {"username": None, "age": 0}).username is None

    def test_unaliased_columns_rejected(self) -> None:
        with pytest.raises(ProjectionError) as excinfo:
            bind_fields(UserDto, {"username": "member1", "age": 10})
        err = excinfo.value
        assert err.dto_name == "UserDto"
        assert err.labels == ["username", "age"]
        assert err.expected == ["name", "age"]
        assert "UserDto" in str(err)

    def test_extra_label_rejected(self) -> None:
        with pytest.raises(ProjectionError):
            bind_fields(MemberDto, {"username": "member1", "age": 10, "team": "teamA"})

    def test_missing_label_rejected(self) -> None:
        with pytest.raises(ProjectionError):
            bind_fields(MemberDto, {"username": "member1"})


class TestDtos:
    def test_frozen(self) -> None:
        dto = MemberDto("member1", 10)
        with pytest.raises(dataclasses.FrozenInstanceError):
            dto.age = 11  # type: ignore[misc]

    def test_value_equality(self) -> None:
        assert UserDto("member1", 40) == UserDto("member1", 40)
        assert MemberDto("member1", 40) != MemberDto("member1", 41)

    def test_projection_error_is_query_study_error(self) -> None:
        assert issubclass(ProjectionError, QueryStudyError)
