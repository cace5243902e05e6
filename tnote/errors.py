from __future__ import annotations


class TnoteError(Exception):
    """Base for every error the command-line tools report to the user."""


class ConfigMissing(TnoteError):
    pass


class ConfigKeyMissing(TnoteError):
    pass


class NotFound(TnoteError):
    pass


class ValidationError(TnoteError):
    pass


class IOFailure(TnoteError):
    pass


class StorageFailure(TnoteError):
    pass
