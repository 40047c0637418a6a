"""Tagged results for report store operations.

Every ``ReportStore`` coroutine returns ``Ok`` wrapping its value or ``Err``
wrapping a :class:`~phenomena.board.errors.StoreError`. Callers branch with
``match``::

    match await store.close_report(report_id, password):
        case Ok(value=ack):
            ...
        case Err(error=error):
            ...

"""

from __future__ import annotations

import dataclasses as dc

from phenomena.board.errors import StoreError  # noqa: TC001


@dc.dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome carrying the operation's value."""

    value: T

    @property
    def is_ok(self) -> bool:
        """Return ``True``."""
        return True


@dc.dataclass(frozen=True, slots=True)
class Err:
    """Failed outcome carrying exactly one store error."""

    error: StoreError

    @property
    def is_ok(self) -> bool:
        """Return ``False``."""
        return False


type StoreResult[T] = Ok[T] | Err


def unwrap[T](result: StoreResult[T]) -> T:
    """Return the value of an ``Ok`` result.

    Raises
    ------
    TypeError
        If *result* is an ``Err``. Intended for call sites that have already
        ruled the failure out, such as test setup.

    """
    if isinstance(result, Err):
        msg = f"expected Ok, got {result.error.kind}: {result.error.message}"
        raise TypeError(msg)
    return result.value


__all__ = ["Err", "Ok", "StoreResult", "unwrap"]
