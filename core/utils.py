"""
Small helpers shared by the API resources.
"""


def is_empty(value):
    """
    Loose emptiness check used for request parameters.

    ``None``, ``''``, ``'0'``, ``0``, ``False`` and empty containers are
    all empty; everything else is present.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value in ('', '0')
    if isinstance(value, (bool, int, float, list, tuple, dict)):
        return not value
    return False
