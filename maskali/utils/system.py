"""
System-level helpers: file checks and opening
(possibly compressed) input files.
"""

import io
import os
import gzip

# first two bytes of any gzip stream
GZIP_MAGIC = b"\x1f\x8b"


class ResourceError(Exception):
    """
    Exception for missing resources (files, URLs, ...)
    """


def valid_file(file_path):
    """
    Verify if a file exists and is not empty.

    Parameters
    ----------
    file_path : str
        Path to file to check

    Returns
    -------
    bool
        True if file exists and is non-zero size,
        False otherwise.
    """
    try:
        return os.stat(file_path).st_size > 0
    except (OSError, TypeError):
        # catch TypeError for nonsense paths, e.g. None
        return False


def verify_resources(message, *args):
    """
    Verify if a set of files exists and is not empty.

    Parameters
    ----------
    message : str
        Message to display with raised ResourceError
    *args : List of str
        Path(s) of file(s) to be checked

    Raises
    ------
    ResourceError
        If any of the resources does not exist or is empty
    """
    invalid = [str(f) for f in args if not valid_file(f)]

    if len(invalid) > 0:
        raise ResourceError(
            "{}:\n{}".format(message, ", ".join(invalid))
        )
    else:
        return True


def is_gzipped(file_path):
    """
    Check if a file is gzip-compressed by
    looking at its magic bytes

    Parameters
    ----------
    file_path : str
        Path of file to check

    Returns
    -------
    bool
        True if file starts with gzip header
    """
    with open(file_path, "rb") as f:
        return f.read(len(GZIP_MAGIC)) == GZIP_MAGIC


def open_text(file_path, encoding="utf-8"):
    """
    Open a plain or gzip-compressed text file for reading.

    Parameters
    ----------
    file_path : str or path-like
        Path of file to open
    encoding : str, optional (default: "utf-8")
        Text encoding of (decompressed) file content

    Returns
    -------
    file-like object
        Text stream over the (decompressed) file

    Raises
    ------
    ResourceError
        If file does not exist
    """
    # empty files are passed on, the parser decides if content is missing
    if not os.path.isfile(file_path):
        raise ResourceError(
            "Input file does not exist: {}".format(file_path)
        )

    if is_gzipped(file_path):
        return io.TextIOWrapper(
            gzip.open(file_path, mode="rb"), encoding=encoding
        )

    return open(file_path, encoding=encoding)
