"""Celsius / Fahrenheit reconciliation.

Decoders report temperature in whichever unit the sensor uses, and
some report both.  The metrics feed always carries both units, so the
missing one is derived from the one that is present.

Example:
    >>> reconcile(20.0, None)
    (20.0, 68.0)
    >>> reconcile(None, 68.0)
    (20.0, 68.0)
"""


def c_to_f(celsius: float) -> float:
    """Convert degrees Celsius to degrees Fahrenheit."""
    return celsius * 1.8 + 32


def f_to_c(fahrenheit: float) -> float:
    """Convert degrees Fahrenheit to degrees Celsius."""
    return (fahrenheit - 32) * 5 / 9


def reconcile(
    celsius: float | None, fahrenheit: float | None
) -> tuple[float | None, float | None]:
    """Return a ``(celsius, fahrenheit)`` pair with the gaps filled.

    If both values are present they are returned unchanged, even when
    they disagree.  If neither is present the result is ``(None, None)``.
    """
    if celsius is not None and fahrenheit is None:
        return celsius, c_to_f(celsius)
    if celsius is None and fahrenheit is not None:
        return f_to_c(fahrenheit), fahrenheit
    return celsius, fahrenheit
