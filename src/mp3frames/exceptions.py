class MP3FormatError(Exception): ...


class UnsupportedTagError(MP3FormatError):
    """Raised when the buffer starts with a tag type that cannot be skipped."""
