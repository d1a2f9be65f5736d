"""
Leaf value classification.

A leaf carries one of five kinds of value: absent (None), boolean, string,
integer count, or a list of strings ("many"). Python already has a type for each,
so values stay native and this module only tells them apart for the accumulator.

Notes
- bool is checked before int: True/False are flags, never counts.
- tuples of strings are accepted as "many" values alongside lists.
"""
from enum import IntEnum


class ValueKind(IntEnum):
    """
    kinds of value a leaf pattern can hold.

    COUNT and MANY are the two kinds the accumulator merges; every other kind is
    appended as an independent binding.
    """
    NONE    = 0
    BOOLEAN = 1
    STRING  = 2
    COUNT   = 3
    MANY    = 4

    @property
    def mergeable(self):
        return self in (ValueKind.COUNT, ValueKind.MANY)


def kindof(value, /):
    """
    classify a leaf value.

    raises TypeError for anything outside the five supported kinds, including
    lists holding non-string items.
    """
    match value:
        case None:
            return ValueKind.NONE
        case bool():
            return ValueKind.BOOLEAN
        case str():
            return ValueKind.STRING
        case int():
            return ValueKind.COUNT
        case list() | tuple() if all(isinstance(item, str) for item in value):
            return ValueKind.MANY
    raise TypeError(f"unsupported leaf value {value!r}")


__all__ = (
    "ValueKind",
    "kindof",
)
