"""Input parsing at the library boundary.

The engines assume every value can be ordered against every other value.
These helpers turn user input into such values, rejecting anything that
cannot be compared before it reaches the balancing code.
"""

from typing import Any, List

from .errors import InvalidValueError


def parse_values(text: str, separator: str = ",", skip_invalid: bool = False) -> List[int]:
    """Parse a separated list of integers such as ``"50, 30, 70"``.

    Args:
        text: Raw input text
        separator: Token separator
        skip_invalid: Drop tokens that are not integers instead of failing

    Returns:
        The parsed integers in input order (empty for blank input)

    Raises:
        InvalidValueError: If a token is not an integer and
            ``skip_invalid`` is False
    """
    values: List[int] = []
    if not text or not text.strip():
        return values

    for token in text.split(separator):
        token = token.strip()
        if not token:
            continue
        try:
            values.append(int(token))
        except ValueError:
            if skip_invalid:
                continue
            raise InvalidValueError(f"Not an integer: {token!r}", value=token) from None
    return values


def ensure_orderable(value: Any) -> Any:
    """Reject values that cannot be ordered against themselves.

    Returns:
        ``value`` unchanged

    Raises:
        InvalidValueError: For None and types without ``<``, e.g. dicts
    """
    if value is None:
        raise InvalidValueError("None cannot be stored in the tree", value=value)
    try:
        _ = value < value
    except TypeError:
        raise InvalidValueError(
            f"Values of type {type(value).__name__} are not orderable", value=value) from None
    return value
