import re

from errors import InvalidAddressError
from models import ResourceAddress

# figma:///file/{file_key}
# figma:///file/{file_key}/{category}
# figma:///file/{file_key}/{category}/{sub_id}
# sub_id is any text up to a line terminator (\n, \r, U+2028, U+2029)
_URI_PATTERN = re.compile(
    r"figma:///file/(?P<key>[\w-]+)(?:/(?P<category>\w+)(?:/(?P<sub_id>[^\n\r\u2028\u2029]+))?)?",
    re.ASCII,
)


def resolve(uri: str) -> ResourceAddress:
    """
    Parse a resource identifier into a ResourceAddress.

    The category is returned as written; callers reject categories they
    do not serve. Anything after the category, slashes included, is the
    sub id.
    """
    if not isinstance(uri, str):
        raise InvalidAddressError(repr(uri), "not a string")

    match = _URI_PATTERN.fullmatch(uri)
    if not match:
        raise InvalidAddressError(uri)

    return ResourceAddress(
        container_key=match.group("key"),
        category=match.group("category"),
        sub_id=match.group("sub_id"),
    )
