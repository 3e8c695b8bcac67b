"""Character encoding policy for file nodes.

Encodings may be given by name ("utf-8", "latin-1") or as a concrete
codecs.CodecInfo. Either way they are resolved once, at construction, so an
unknown encoding is a configuration error and never a processing failure.
"""

import codecs

DEFAULT_ENCODING = "utf-8"


def resolve_encoding(encoding: str | codecs.CodecInfo) -> codecs.CodecInfo:
    """Resolve an encoding name or CodecInfo to a text codec.

    Args:
        encoding: Encoding name or concrete CodecInfo

    Returns:
        The resolved CodecInfo

    Raises:
        LookupError: If the name is empty, unknown, or not a text encoding
        TypeError: If encoding is neither a str nor a CodecInfo
    """
    if isinstance(encoding, codecs.CodecInfo):
        info = encoding
    elif isinstance(encoding, str):
        name = encoding.strip()
        if not name:
            raise LookupError("encoding name cannot be empty")
        info = codecs.lookup(name)
    else:
        raise TypeError(f"encoding must be a name or codecs.CodecInfo, got {type(encoding).__name__}")

    # bytes-to-bytes codecs (base64, zlib, ...) resolve but cannot back a text file
    if not getattr(info, "_is_text_encoding", True):
        raise LookupError(f"'{info.name}' is not a text encoding")
    return info


def canonical_encoding_name(encoding: str | codecs.CodecInfo) -> str:
    """Return the display name recorded in message metadata.

    This is the codec's own name upper-cased, so "utf8", "UTF-8" and
    codecs.lookup("utf_8") all report "UTF-8".
    """
    return resolve_encoding(encoding).name.upper()
