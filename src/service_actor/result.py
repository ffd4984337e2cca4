"""The shared result threaded through an actor and everything it plays."""

from __future__ import annotations

from collections.abc import ItemsView, Iterator, KeysView, Mapping
from typing import Any, NoReturn

from service_actor.errors import Failure, Success


class Result:
    """Mutable, ordered key/value store plus a failure flag.

    Unknown keys read as ``None``; use ``key in result`` to test presence.
    Once failed, a result stays failed for the rest of the call chain.
    """

    __slots__ = ("_data", "_failure")

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})
        self._failure = False

    @classmethod
    def to_result(cls, data: Result | Mapping[str, Any] | None) -> Result:
        """Reuse an existing result, or wrap a mapping into a new one."""

        if isinstance(data, Result):
            return data
        return cls(data)

    def __getitem__(self, key: str) -> Any:
        return self._data.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Result):
            return self._data == other._data and self._failure == other._failure
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "failure" if self._failure else "success"
        return f"<Result {state} {self._data!r}>"

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def keys(self) -> KeysView[str]:
        return self._data.keys()

    def items(self) -> ItemsView[str, Any]:
        return self._data.items()

    def to_dict(self) -> dict[str, Any]:
        """Shallow copy of the stored keys, without the failure flag."""

        return dict(self._data)

    def merge(self, data: Mapping[str, Any] | Result) -> Result:
        """Overwrite the keys present in ``data``; other keys are kept."""

        self._data.update(data.to_dict() if isinstance(data, Result) else data)
        return self

    def delete(self, key: str) -> Any:
        """Remove ``key`` and return its value (``None`` if absent)."""

        return self._data.pop(key, None)

    def fail(self, failure_class: type[Failure] | None = None, **data: Any) -> NoReturn:
        """Merge ``data``, mark the result failed and raise a failure signal."""

        self.merge(data)
        self._failure = True
        raise (failure_class or Failure)(self)

    def succeed(self, **data: Any) -> NoReturn:
        """Merge ``data`` and raise a success signal.

        A result that already failed stays failed.
        """

        self.merge(data)
        raise Success(self)

    @property
    def failure(self) -> bool:
        return self._failure

    @property
    def success(self) -> bool:
        return not self._failure

    def is_failure(self) -> bool:
        return self._failure

    def is_success(self) -> bool:
        return not self._failure
