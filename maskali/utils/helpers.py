"""
Useful Python helpers
"""

from collections.abc import Mapping


def wrap(text, width=80):
    """
    Wraps a string at a fixed width.

    Arguments
    ---------
    text : str
        Text to be wrapped
    width : int
        Line width

    Returns
    -------
    str
        Wrapped string
    """
    return "\n".join(
        [text[i:i + width] for i in range(0, len(text), width)]
    )


def merge_dicts(base, update):
    """
    Recursively merge a dictionary into a copy of another one.
    Nested mappings are merged, all other values in update
    replace those in base.

    Parameters
    ----------
    base : dict
        Dictionary with default values
    update : dict
        Dictionary with values taking precedence

    Returns
    -------
    dict
        Merged dictionary (base is not modified)
    """
    merged = dict(base)

    for key, value in update.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value

    return merged
