from typing import Any, Type, TypeVar, Union

from typing_extensions import Protocol

T = TypeVar("T", bound="Comparable")


class Comparable(Protocol):
    def __lt__(self: T, other: T) -> bool:
        pass  # pragma: no cover

    def __le__(self: T, other: T) -> bool:
        pass  # pragma: no cover

    def __gt__(self: T, other: T) -> bool:
        pass  # pragma: no cover

    def __ge__(self: T, other: T) -> bool:
        pass  # pragma: no cover


class RafError(Exception):
    """Base error for all errors in the library."""


class ArchiveReadError(RafError, OSError):
    """The underlying file ended before a field could be read."""


class ArchiveParseError(RafError):
    """An error when parsing the metadata file."""


class CorruptIndexError(ArchiveParseError):
    """A path could not be resolved, or did not match its stored hash."""


class SizeLimitError(RafError):
    """An entry is too large to be extracted."""


def _assert_base(  # pylint: disable=too-many-arguments
    result: bool,
    operator: str,
    name: str,
    expected: Any,
    actual: Any,
    location: Union[int, str],
    error_class: Type[RafError] = ArchiveParseError,
) -> None:
    if not result:
        raise error_class(f"{name}: {actual!r} {operator} {expected!r} (at {location})")


def assert_eq(
    name: str,
    expected: T,
    actual: T,
    location: Union[int, str],
    error_class: Type[RafError] = ArchiveParseError,
) -> None:
    result = actual == expected
    _assert_base(result, "==", name, expected, actual, location, error_class)


def assert_ge(
    name: str,
    expected: T,
    actual: T,
    location: Union[int, str],
    error_class: Type[RafError] = ArchiveParseError,
) -> None:
    result = actual >= expected
    _assert_base(result, ">=", name, expected, actual, location, error_class)


def assert_le(
    name: str,
    expected: T,
    actual: T,
    location: Union[int, str],
    error_class: Type[RafError] = ArchiveParseError,
) -> None:
    result = actual <= expected
    _assert_base(result, "<=", name, expected, actual, location, error_class)
