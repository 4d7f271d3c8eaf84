"""
=============================================================================
MIME TYPE DETECTION
=============================================================================

Maps file extensions to the Content-Type sent with each file.

MIME types tell the client how to interpret the response body. They
follow the format type/subtype:

    text/html           A web page
    text/css            A stylesheet
    image/png           A PNG image
    application/octet-stream
                        "Unknown binary data" - the fallback

Detection looks at the file extension ONLY. There is no content
sniffing: a PNG saved as "photo.txt" is served as text/plain.

=============================================================================
"""

from pathlib import Path


# =============================================================================
# MIME TYPE TABLE
# =============================================================================
#
# Keys are lowercase extensions with the leading dot, matching Path.suffix.
#
# =============================================================================

MIME_TYPES = {
    # Text
    ".css": "text/css",
    ".html": "text/html",
    ".js": "text/javascript",
    ".md": "text/markdown",
    ".txt": "text/plain",

    # Images
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".svg": "image/svg+xml",
}

# application/octet-stream = "I don't know what this is, treat as binary"
DEFAULT_MIME_TYPE = "application/octet-stream"


def get_content_type(path: str | Path) -> str:
    """
    Get the Content-Type for a file based on its extension.

    The lookup is case-insensitive. A missing extension, a dotfile such
    as ".css", or an unknown extension all yield the default type.

    Examples:
        >>> get_content_type("style.css")
        'text/css'

        >>> get_content_type("/srv/site/PHOTO.JPEG")
        'image/jpeg'

        >>> get_content_type("Makefile")
        'application/octet-stream'
    """
    if isinstance(path, str):
        path = Path(path)

    extension = path.suffix.lower()  # .PNG → .png
    return MIME_TYPES.get(extension, DEFAULT_MIME_TYPE)
