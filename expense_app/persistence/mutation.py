"""Tagged outcomes of IndexedEntity.mutate. Rejections never touch the stored record."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Rejection:
    """Returned by a transformation to refuse the change. Nothing is written."""

    reason: str


@dataclass(frozen=True)
class Applied(Generic[T]):
    """Transformation produced a new record and it was written."""

    record: T


@dataclass(frozen=True)
class Unchanged(Generic[T]):
    """Transformation returned an equal record; nothing was written."""

    record: T


@dataclass(frozen=True)
class Rejected:
    """Transformation returned a Rejection; stored record left as it was."""

    reason: str


@dataclass(frozen=True)
class Missing:
    """No record exists for the id."""

    entity_id: str


MutationResult = Union[Applied[T], Unchanged[T], Rejected, Missing]
