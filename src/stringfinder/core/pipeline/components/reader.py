from __future__ import annotations

"""
File Content Reading Component.

Loads whole files as text for substring matching. Decoding is strict:
a file that is not valid text in the configured encoding aborts the run
instead of being matched against replacement characters.
"""

from typing import Iterator

from stringfinder.domain.errors import ContentReadError

# -----------------------------------------------------------------------------
# READING OPERATIONS
# -----------------------------------------------------------------------------

def read_file_text(file_path: str, encoding: str = "utf-8") -> str:
    """
    Read the full content of a file as text.

    Args:
        file_path: Absolute path to the target file.
        encoding: Text encoding used for strict decoding.

    Returns:
        str: The decoded file content.

    Raises:
        ContentReadError: If the file cannot be opened or decoded.
    """
    try:
        with open(file_path, "r", encoding=encoding) as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise ContentReadError(file_path, f"not valid {encoding} text: {e.reason}") from e
    except LookupError as e:
        raise ContentReadError(file_path, f"unknown encoding '{encoding}'") from e
    except OSError as e:
        raise ContentReadError(file_path, e.strerror or str(e)) from e


def iter_text_lines(file_path: str, encoding: str = "utf-8") -> Iterator[str]:
    """
    Yield the lines of a text file without trailing newlines.

    Used for line-oriented inputs such as the marker list. Opening
    errors propagate as OSError; the caller maps them to its domain error.

    Args:
        file_path: Path to the text file.
        encoding: Text encoding.

    Yields:
        str: One line at a time.
    """
    with open(file_path, "r", encoding=encoding) as f:
        for line in f:
            yield line.rstrip("\r\n")
