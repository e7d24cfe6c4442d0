"""Pass latexmk's stdout through while detecting whether it typeset anything.

latexmk prints "Latexmk: applying rule ..." when it actually runs the engine
and "Latexmk: All targets ... are up-to-date" when there is nothing to do.
The first of the two to appear classifies the run.
"""

import threading
from typing import BinaryIO

APPLYING_RULE = b"Latexmk: applying rule "
ALL_TARGETS = b"Latexmk: All targets "
CHUNK_SIZE = 64 * 1024


def scan_output(source: BinaryIO, sink: BinaryIO) -> bool:
    """Copy lines from source to sink until one of the markers shows up.

    Works on raw bytes, so logs with invalid UTF-8 pass through unchanged.
    Lines after the deciding one are left unread in source.

    Returns:
        True if the "applying rule" line came first, False if the
        "all targets" line came first or the stream ended.
    """
    for line in iter(source.readline, b""):
        sink.write(line)
        sink.flush()
        if line.startswith(APPLYING_RULE):
            return True
        if line.startswith(ALL_TARGETS):
            return False
    return False


def forward_output(source: BinaryIO, sink: BinaryIO) -> None:
    """Copy whatever is left in source to sink, chunk by chunk as it arrives."""
    read = getattr(source, "read1", source.read)
    for chunk in iter(lambda: read(CHUNK_SIZE), b""):
        sink.write(chunk)
        sink.flush()


def start_forwarding(source: BinaryIO, sink: BinaryIO) -> threading.Thread:
    """Forward the rest of source on a background thread.

    Errors end the copy silently; the user has already seen the part of the
    log that mattered for classification.
    """
    def copy():
        try:
            forward_output(source, sink)
        except (OSError, ValueError):
            pass

    thread = threading.Thread(target=copy, name="diffmk-forward", daemon=True)
    thread.start()
    return thread
