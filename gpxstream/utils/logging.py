"""
Thread-local logging utilities for GPX decoding.

Messages go to the ``gpxstream`` logger and, if one is set for the current
thread, to a thread-local log file. This lets a caller capture the log of one
decode into its own file without passing file handles through the decoder,
while concurrent decodes in other threads keep their own files.

Usage:
    from gpxstream.utils.logging import log, set_log_file, close_log_file

    set_log_file(open("decode.log", "w"))
    try:
        doc = decode_file("run.gpx", config=DecoderConfig(debug=True))
    finally:
        close_log_file()
"""

import logging
import threading
from typing import Optional, TextIO

logger = logging.getLogger("gpxstream")

# Thread-local storage for log file
_thread_local = threading.local()


def log(message: str, debug: bool = False, level: Optional[int] = None) -> None:
    """
    Log a message to the package logger and the thread-local log file.

    Args:
        message: Message to log
        debug: Promote the message to INFO (decoder debug mode); otherwise it
            is logged at DEBUG
        level: Explicit logging level, overrides ``debug``
    """
    if level is None:
        level = logging.INFO if debug else logging.DEBUG
    logger.log(level, message)

    log_file = getattr(_thread_local, 'log_file', None)
    if log_file and (debug or level > logging.DEBUG):
        try:
            log_file.write(message + "\n")
            log_file.flush()
        except (OSError, ValueError):
            # Closed or unwritable file must not break the decode
            logger.warning("Thread-local log file is not writable, detaching it")
            set_log_file(None)


def set_log_file(log_file: Optional[TextIO]) -> None:
    """Set (or clear, with None) the log file for the current thread."""
    _thread_local.log_file = log_file


def close_log_file() -> None:
    """
    Close and clear the thread-local log file if one is open.

    Safe to call multiple times; use it in a finally block.
    """
    log_file = getattr(_thread_local, 'log_file', None)
    if log_file:
        set_log_file(None)  # Clear the reference first to prevent further writes
        try:
            log_file.close()
        except OSError:
            pass


def get_log_file() -> Optional[TextIO]:
    """Return the current thread's log file, or None."""
    return getattr(_thread_local, 'log_file', None)
