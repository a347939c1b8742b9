"""Tests for data-driven argument validation."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from itemledger.contract import validator
from itemledger.errors import ValidationError

_VALID_CREATE = ["i1", "Widget", "A widget", "9.99", "ACTIVE"]

_blank = st.sampled_from(["", " ", "   ", "\t", "\n", " \t\r\n "])


class TestArity:
    @pytest.mark.parametrize("args", [[], ["i1"], _VALID_CREATE[:4], [*_VALID_CREATE, "extra"]])
    def test_create_requires_exactly_five(self, args: list[str]) -> None:
        with pytest.raises(ValidationError, match="Expecting 5 arguments"):
            validator.validate(validator.CREATE, args)

    @pytest.mark.parametrize("spec", [validator.SOFT_DELETE, validator.QUERY, validator.HISTORY])
    @pytest.mark.parametrize("args", [[], ["i1", "i2"]])
    def test_single_id_operations_require_exactly_one(
        self, spec: validator.OperationSpec, args: list[str]
    ) -> None:
        with pytest.raises(ValidationError, match="Expecting the ID of the Item"):
            validator.validate(spec, args)

    @pytest.mark.parametrize("args", [[], ["i1"]])
    def test_update_price_requires_at_least_two(self, args: list[str]) -> None:
        with pytest.raises(ValidationError, match="Expecting 2 arguments"):
            validator.validate(validator.UPDATE_PRICE, args)

    def test_update_price_drops_extra_arguments(self) -> None:
        assert validator.validate(validator.UPDATE_PRICE, ["i1", "12.50", "ignored", ""]) == ["i1", "12.50"]


class TestBlankArguments:
    @pytest.mark.parametrize(
        ("position", "message"),
        [
            (0, "The id must be a non-empty string"),
            (1, "The name must be a non-empty string"),
            (2, "The description must be a non-empty string"),
            (3, "The price argument must be a non-empty string"),
            (4, "The state argument must be a non-empty string"),
        ],
    )
    def test_create_names_the_blank_field(self, position: int, message: str) -> None:
        args = list(_VALID_CREATE)
        args[position] = "  "
        with pytest.raises(ValidationError) as exc_info:
            validator.validate(validator.CREATE, args)
        assert exc_info.value.message == message

    def test_update_price_blank_price(self) -> None:
        with pytest.raises(ValidationError, match="The Item price must be a non-empty string."):
            validator.validate(validator.UPDATE_PRICE, ["i1", " "])

    @given(spec=st.sampled_from([validator.SOFT_DELETE, validator.QUERY, validator.HISTORY]), blank=_blank)
    def test_blank_id_always_rejected(self, spec: validator.OperationSpec, blank: str) -> None:
        with pytest.raises(ValidationError, match="The Item ID must be a non-empty string."):
            validator.validate(spec, [blank])

    @given(position=st.integers(min_value=0, max_value=4), blank=_blank)
    def test_any_blank_create_field_rejected(self, position: int, blank: str) -> None:
        args = list(_VALID_CREATE)
        args[position] = blank
        with pytest.raises(ValidationError):
            validator.validate(validator.CREATE, args)

    def test_arguments_pass_through_untrimmed(self) -> None:
        args = [" i1 ", "Widget", "A widget", "9.99", "ACTIVE"]
        assert validator.validate(validator.CREATE, args) == args

    def test_arity_checked_before_blanks(self) -> None:
        with pytest.raises(ValidationError, match="Expecting 5 arguments"):
            validator.validate(validator.CREATE, ["", ""])
