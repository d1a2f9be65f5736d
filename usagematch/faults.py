"""
usagematch faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the
  package can raise. Codes are grouped by domain so logs/searches stay
  predictable.
- MatchException: base type that carries message + options and knows how to
  render itself with rich (plain, colorful, or fancy panel).
- getdoc(): optional description lookup for a code from the host application.

What is NOT a fault
- A pattern that simply does not match its input. The matcher answers None
  for that; faults are reserved for malformed pattern trees and for callers of
  bind() asking for a complete match.

Integration
- The matcher raises faults; reporting them to a user is up to the caller,
  which may print one with any rich console (`console.print(fault)`).
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text


class FaultCode(IntEnum):
    """
    canonical fault codes used across the matcher (stable identifiers).

    grouping (by high-level domain)
    - pattern trees (2110x)
      • MALFORMED_PATTERN, UNKNOWN_PATTERN
    - input conformance (2120x)
      • USAGE_MISMATCH

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- pattern tree errors (21xxx) ---
    MALFORMED_PATTERN = 21101
    UNKNOWN_PATTERN   = 21102

    # --- input conformance errors (21xxx) ---
    USAGE_MISMATCH    = 21201

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class MatchException(Exception):
    """
    base of every usagematch fault.

    options (read-only mapping)
    - code, title, hint: what the renderer shows.
    - fancy, colorful: how __rich__ draws the fault.
    - any additional context the raise-site attaches (pattern, remaining, ...).
    """

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        self.message = message
        self.options = MappingProxyType({
            "fancy": False,
            "colorful": True,
            "title": "error",
            "hint": "",
        } | options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if self.options["colorful"] else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self.options["colorful"]:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", "usagematch"), styler("prog-name"))

        try:
            code = self.options["code"].normalize()
        except KeyError:
            code = "?"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))

        if not self.options["hint"]:
            body = Group(message)
        else:
            body = Group(message, Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint"))))

        if self.options["fancy"]:
            return Panel(body, title=header, title_align="left")

        return Group(header, body)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class PatternArityError(MatchException, ValueError):
    """a composite pattern holds a number of children its combinator cannot accept."""

class UnknownPatternError(MatchException, TypeError):
    """an object outside the closed pattern hierarchy reached the matcher."""

class UsageMismatchError(MatchException):
    """
    the input did not conform to the pattern (no match, or tokens left over).

    the leftover tokens are exposed as `remaining` (a tuple of leaves).
    """

    @property
    def remaining(self):
        return tuple(self.options.get("remaining", ()))


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "MatchException",
    "PatternArityError",
    "UnknownPatternError",
    "UsageMismatchError",
    "getdoc",
)
