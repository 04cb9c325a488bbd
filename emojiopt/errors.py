class OptimizeError(Exception):
    """Base class for failures that abort an optimization run."""

    kind = "unknown"


class StorageError(OptimizeError):
    """A backup or output file could not be written."""

    kind = "storage"

    def __init__(self, path, cause: OSError):
        super().__init__(f"could not write {path}: {cause}")
        self.path = path
        self.cause = cause


class TranscodeError(OptimizeError):
    """An embedded image could not be decoded or re-encoded."""

    kind = "transcode"

    def __init__(self, index: int, cause: BaseException):
        super().__init__(f"record {index}: {type(cause).__name__}: {cause}")
        self.index = index
        self.cause = cause
