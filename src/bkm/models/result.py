"""Success/failure carrier returned by every core operation.

Core code never raises for expected failures. It returns ``Ok(value)`` or
``Err(errors)``, where ``errors`` is a non-empty list of :class:`BkmError`
records. Callers branch on :meth:`is_ok` or use :func:`unwrap` when an
exception is more convenient (tests, one-off scripts).
"""

from dataclasses import dataclass, field
from typing import Generic, Iterable, List, TypeVar, Union

from .errors import BkmError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err:
    errors: List[BkmError] = field(default_factory=list)

    def __post_init__(self):
        if not self.errors:
            raise ValueError("Err requires at least one error")

    @property
    def error(self) -> BkmError:
        """First error, for call sites that only report one."""
        return self.errors[0]

    def messages(self) -> List[str]:
        return [str(e) for e in self.errors]

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err]


def fail(*errors: BkmError) -> Err:
    """Build an Err from one or more error records."""
    return Err(list(errors))


def unwrap(result: "Result[T]") -> T:
    """Return the Ok value or raise the first carried error."""
    if isinstance(result, Err):
        raise result.error
    return result.value


def collect(results: Iterable["Result[T]"]) -> "Result[List[T]]":
    """Combine results, accumulating every error instead of stopping early."""
    values: List[T] = []
    errors: List[BkmError] = []
    for result in results:
        if isinstance(result, Err):
            errors.extend(result.errors)
        else:
            values.append(result.value)

    if errors:
        return Err(errors)

    return Ok(values)
