"""Unification constraints and affine resource tracking for type inference."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Hashable, TypeVar

T = TypeVar("T")
Owner = TypeVar("Owner")
Resource = TypeVar("Resource", bound=Hashable)


@dataclass(eq=False)
class UnificationConstraint(Generic[T]):
    """A requirement that ``expected`` and ``actual`` be the same.

    A constraint derived while unifying another keeps that constraint as its
    ``source``, so errors can point back at where the mismatch began.
    """

    expected: T
    actual: T
    source: UnificationConstraint[T] | None = field(default=None, repr=False)

    @staticmethod
    def derived(
        expected: T, actual: T, source: UnificationConstraint[T]
    ) -> UnificationConstraint[T]:
        """A constraint that arose from unifying ``source``."""
        return UnificationConstraint(expected, actual, source)

    def origin_expected(self) -> T:
        """The expected side of the constraint this one ultimately came from."""
        if self.source is None:
            return self.expected
        return self.source.origin_expected()

    def origin_actual(self) -> T:
        """The actual side of the constraint this one ultimately came from."""
        if self.source is None:
            return self.actual
        return self.source.origin_actual()

    def immediate(self) -> UnificationConstraint[T] | None:
        """This constraint if it was derived from another, else None."""
        return self if self.source is not None else None


class AffineResourceError(Exception, Generic[Owner, Resource]):
    """Raised when a resource is consumed a second time in a local scope."""

    def __init__(
        self, owner: Owner, owned: Resource, taker: Owner, taken: Resource, fix: str
    ):
        super().__init__(f"Cannot use affine resource `{owned}` twice")
        self.owner = owner
        self.owned = owned
        self.taker = taker
        self.taken = taken
        self.fix = fix


class AffineEnvironment(Generic[Owner, Resource]):
    """An affine environment where only the root permits repeated consumption."""

    def __init__(self, fix: str):
        self.fix = str(fix)
        self._nesting = 0
        self._resources: dict[Resource, tuple[Resource, Owner]] = {}

    @property
    def nesting(self) -> int:
        return self._nesting

    def enter_local(self) -> None:
        self._nesting += 1

    def exit_local(self) -> None:
        """Leave a local scope; leaving the last one forgets every resource."""
        if self._nesting == 0:
            raise ValueError("not inside a local scope")
        self._nesting -= 1
        if self._nesting == 0:
            self._resources.clear()

    def take(self, taker: Owner, resource: Resource) -> None:
        """Record ``taker`` as consuming ``resource``.

        Raises AffineResourceError if the resource was already taken and a
        local scope is open.
        """
        previous = self._resources.get(resource)
        if previous is not None and self._nesting > 0:
            owned, owner = previous
            raise AffineResourceError(owner, owned, taker, resource, self.fix)
        self._resources[resource] = (resource, taker)