"""Data URL encoding for fetched media bytes."""

import base64

DEFAULT_MIME_TYPE = "application/octet-stream"


def to_data_url(data: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """
    Encode bytes as a self-contained ``data:`` URL.

    Args:
        data: Payload bytes
        mime_type: Declared content type, defaults to generic binary

    Returns:
        ``data:<mime>;base64,<payload>``
    """
    payload = base64.b64encode(bytes(data)).decode("ascii")
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{payload}"
