"""Argument validation for contract operations.

Each operation declares its arguments once as an ``OperationSpec``; the
same declaration drives both the arity check and the blank-argument checks.
"""

from __future__ import annotations

from dataclasses import dataclass

from itemledger.errors import ValidationError


@dataclass(frozen=True)
class ArgSpec:
    """One positional argument and the message used when it is blank."""

    name: str
    blank_message: str


@dataclass(frozen=True)
class OperationSpec:
    """Declared shape of an operation's argument list.

    ``exact`` operations require exactly ``len(args)`` arguments; the others
    accept trailing extras, which are dropped.
    """

    name: str
    args: tuple[ArgSpec, ...]
    arity_message: str
    exact: bool = True

    @property
    def arity(self) -> int:
        return len(self.args)


def validate(spec: OperationSpec, args: list[str]) -> list[str]:
    """Check *args* against *spec* and return the declared arguments.

    Raises:
        ValidationError: wrong arity, or a declared argument is blank
            after stripping whitespace.
    """
    if spec.exact and len(args) != spec.arity:
        raise ValidationError(spec.arity_message)
    if not spec.exact and len(args) < spec.arity:
        raise ValidationError(spec.arity_message)

    declared = list(args[: spec.arity])
    for arg_spec, value in zip(spec.args, declared, strict=True):
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(arg_spec.blank_message)
    return declared


_ITEM_ID = ArgSpec("id", "The Item ID must be a non-empty string.")
_EXPECT_ID = "Incorrect number of arguments. Expecting the ID of the Item."

CREATE = OperationSpec(
    name="create",
    args=(
        ArgSpec("id", "The id must be a non-empty string"),
        ArgSpec("name", "The name must be a non-empty string"),
        ArgSpec("description", "The description must be a non-empty string"),
        ArgSpec("price", "The price argument must be a non-empty string"),
        ArgSpec("state", "The state argument must be a non-empty string"),
    ),
    arity_message="Incorrect number of arguments. Expecting 5 arguments.",
)

UPDATE_PRICE = OperationSpec(
    name="updatePrice",
    args=(_ITEM_ID, ArgSpec("price", "The Item price must be a non-empty string.")),
    arity_message="Incorrect number of arguments. Expecting 2 arguments.",
    exact=False,
)

SOFT_DELETE = OperationSpec(name="softDelete", args=(_ITEM_ID,), arity_message=_EXPECT_ID)
QUERY = OperationSpec(name="query", args=(_ITEM_ID,), arity_message=_EXPECT_ID)
HISTORY = OperationSpec(name="history", args=(_ITEM_ID,), arity_message=_EXPECT_ID)
