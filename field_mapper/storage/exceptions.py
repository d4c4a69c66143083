class StorageIOError(Exception):
    """Raised when the snapshot document cannot be read or written.

    Fatal to the current call only. Nothing in the service retries it.
    """
