"""Processing items and user data through caller-supplied callbacks."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Item:
    """An item of a collection."""

    id: int
    name: str = ""


class ItemProcessingError(Exception):
    """Raised when a callback rejects an item or fails on it."""

    def __init__(self, item_id: int, cause: BaseException | None = None) -> None:
        message = f"failed to process item {item_id}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
        self.item_id = item_id
        self.cause = cause


def process_collection(items: Iterable[Item], process_item: Callable[[Item], bool]) -> None:
    """Pass each item to ``process_item``, stopping at the first failure.

    The callback receives a copy of each item. It fails an item by returning a
    false value or by raising; either way :class:`ItemProcessingError` is raised.
    """
    for item in items:
        try:
            ok = process_item(dataclasses.replace(item))
        except Exception as exc:
            raise ItemProcessingError(item.id, exc) from exc
        if not ok:
            raise ItemProcessingError(item.id)


def process_data(callback: Callable[[str], str]) -> str:
    """Call ``callback`` with the string ``"data"`` and return its result."""
    return callback("data")


def process_data_twice(callback: Callable[[str], str]) -> str:
    """Call ``callback`` for ``"call"`` and ``"another call"`` and join the results."""
    return callback("call") + callback("another call")


class MultiError(Exception):
    """Several errors gathered into one."""

    def __init__(self, errors: Iterable[BaseException] = (), data: Any = None) -> None:
        super().__init__()
        self.errors: list[BaseException] = list(errors)
        self.data = data

    def add(self, error: BaseException) -> None:
        """Append another error."""
        self.errors.append(error)

    def __len__(self) -> int:
        return len(self.errors)

    def __str__(self) -> str:
        listed = " ".join(str(e) for e in self.errors)
        return f"{len(self.errors)} errors occurred: [{listed}]"


@dataclass(frozen=True)
class UserData:
    """A user's data."""

    id: int
    name: str
    email: str


ValidationCallback = Callable[[UserData], None]
TransformationCallback = Callable[[UserData], UserData]
LoggingCallback = Callable[[UserData], None]


@dataclass
class CallbackManager:
    """Holds validation, transformation and logging callbacks for user data."""

    validation_callbacks: list[ValidationCallback] = field(default_factory=list)
    transformation_callbacks: list[TransformationCallback] = field(default_factory=list)
    logging_callbacks: list[LoggingCallback] = field(default_factory=list)

    def add_validation_callback(self, callback: ValidationCallback) -> None:
        """Register a callback that raises when the data is invalid."""
        self.validation_callbacks.append(callback)

    def add_transformation_callback(self, callback: TransformationCallback) -> None:
        """Register a callback that returns transformed data."""
        self.transformation_callbacks.append(callback)

    def add_logging_callback(self, callback: LoggingCallback) -> None:
        """Register a callback that observes the final data."""
        self.logging_callbacks.append(callback)

    def execute(self, data: UserData) -> UserData:
        """Run all callbacks and return the transformed data.

        Validations run concurrently on the input; transformations run in
        registration order; logging callbacks run concurrently on the result.
        If any validation raised, a :class:`MultiError` holding every error,
        with the transformed data in its ``data`` attribute, is raised.
        """
        with ThreadPoolExecutor() as pool:
            errors = [e for e in pool.map(_validation_error, self.validation_callbacks,
                                          [data] * len(self.validation_callbacks))
                      if e is not None]
            for transform in self.transformation_callbacks:
                data = transform(data)
            list(pool.map(lambda cb: cb(data), self.logging_callbacks))
        if errors:
            raise MultiError(errors, data)
        return data


def _validation_error(callback: ValidationCallback, data: UserData) -> Exception | None:
    try:
        callback(data)
    except Exception as exc:
        return exc
    return None