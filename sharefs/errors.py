"""Exceptions raised by sharefs."""


class ShareFSError(Exception):
    """Base class for all sharefs errors."""


class ObjectNotFound(ShareFSError, IOError):
    """Raised when no stored object can be served for an address.

    Attributes:
        address (str): Address that was looked up.
    """

    def __init__(self, message, address=None):
        super(ObjectNotFound, self).__init__(message)
        self.address = address


class FormatError(ObjectNotFound):
    """Raised when a container does not start with the magic bytes or its
    header is truncated. Such a file is never partially trusted and is
    reported like a missing object.
    """


class StateError(ShareFSError):
    """Raised when compress/decompress is called on a buffer that is not in
    the required state.
    """


class IntegrityError(ShareFSError):
    """Raised when the storage location for an address is taken by a file
    that is not a container. The file is left untouched.
    """

    def __init__(self, message, address=None):
        super(IntegrityError, self).__init__(message)
        self.address = address


class AccessDenied(ShareFSError):
    """Raised when a protected object is requested without its secret."""


class ConfigError(ShareFSError):
    """Raised when required configuration is missing."""


class HighlightUnavailable(ShareFSError):
    """Raised when the highlighting socket cannot be reached."""
