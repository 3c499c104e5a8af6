import re

from ..core.errors import InvalidEmailError

# Same acceptance as yup's string().email(): dotted domain labels are optional
# and no TLD is required.
EMAIL_REGEX = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*"
)


def parse_email(content: str | None) -> str:
    """Parse a DM body as a single email address.

    The whole message must be the address; surrounding whitespace is not
    trimmed.

    Args:
        content: Raw message text.

    Returns:
        The email address, unchanged.

    Raises:
        InvalidEmailError: If the text is empty or not a valid address.
    """
    if not content:
        raise InvalidEmailError("email address is required")
    if not EMAIL_REGEX.fullmatch(content):
        raise InvalidEmailError(f"not a valid email address: {content!r}")
    return content
