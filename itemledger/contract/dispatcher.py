"""Operation dispatch.

Maps an operation name plus its string arguments to a repository call and
wraps the outcome in a ``Response`` envelope. The dispatch table is the
single source of truth for which operations exist and what they accept;
the legacy chaincode function names are kept as aliases.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from itemledger.contract import validator
from itemledger.contract.history import serialize_history
from itemledger.contract.repository import ItemRepository
from itemledger.errors import ItemLedgerError, UnknownOperationError
from itemledger.models.responses import Response
from itemledger.observability.logging import get_logger
from itemledger.observability.metrics import invocation_duration_seconds, invocations_total

_logger = get_logger("contract.dispatcher")

Handler = Callable[[ItemRepository, list[str]], bytes]


@dataclass(frozen=True)
class Operation:
    spec: validator.OperationSpec
    handler: Handler


def _history(repo: ItemRepository, args: list[str]) -> bytes:
    return serialize_history(repo.history(*args))


_CREATE = Operation(validator.CREATE, lambda repo, args: repo.create(*args))
_UPDATE_PRICE = Operation(validator.UPDATE_PRICE, lambda repo, args: repo.update_price(*args))
_SOFT_DELETE = Operation(validator.SOFT_DELETE, lambda repo, args: repo.soft_delete(*args))
_QUERY = Operation(validator.QUERY, lambda repo, args: repo.query(*args))
_HISTORY = Operation(validator.HISTORY, _history)

OPERATIONS: dict[str, Operation] = {
    "create": _CREATE,
    "updatePrice": _UPDATE_PRICE,
    "softDelete": _SOFT_DELETE,
    "query": _QUERY,
    "history": _HISTORY,
    # legacy chaincode names
    "addItem": _CREATE,
    "modifyPrice": _UPDATE_PRICE,
    "removeItem": _SOFT_DELETE,
    "queryItem": _QUERY,
}


class Dispatcher:
    """Stateless router from (function, args) to the item repository."""

    def __init__(self, repository: ItemRepository) -> None:
        self._repository = repository

    def init(self) -> Response:
        """Initialisation hook invoked once when the contract is instantiated."""
        _logger.info("init")
        return Response.success(None)

    def invoke(self, function: str, args: list[str]) -> Response:
        """Run one operation. Never raises for contract errors."""
        start = time.monotonic()
        try:
            payload = self._run(function, args)
        except ItemLedgerError as exc:
            self._record(function, exc.code.lower(), start)
            _logger.info("invoke", function=function, outcome="error", error=exc.code, detail=exc.message)
            return Response.error(exc.message, exc.code)

        self._record(function, "success", start)
        _logger.info("invoke", function=function, outcome="success")
        return Response.success(payload)

    def _run(self, function: str, args: list[str]) -> bytes:
        operation = OPERATIONS.get(function)
        if operation is None:
            raise UnknownOperationError("Received unknown function invocation")
        declared = validator.validate(operation.spec, list(args))
        return operation.handler(self._repository, declared)

    @staticmethod
    def _record(function: str, outcome: str, start: float) -> None:
        # unknown names share one label to keep cardinality bounded
        label = function if function in OPERATIONS else "unknown"
        invocations_total.labels(function=label, outcome=outcome).inc()
        invocation_duration_seconds.labels(function=label).observe(time.monotonic() - start)
