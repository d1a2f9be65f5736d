"""
Logging for usagematch (loguru, rendered by rich).

The package logs through loguru's global `logger` and disables its own records
on import (usagematch/__init__.py), as a library should. Hosts that want to
see how a usage line was matched call configure():

    >>> from usagematch.logs import configure
    >>> configure("TRACE")  # every dispatch decision
    >>> configure("DEBUG")  # tie-breaks, repetition stops, bind outcomes

Records emitted
- TRACE: dispatcher entries and leaf hits/misses.
- DEBUG: Either tie-breaks, OneOrMore stops, bind() results.
- ERROR: faults right before they are raised.
"""
from loguru import logger
from rich import get_console
from rich.logging import RichHandler

_sink = None


def configure(level="DEBUG", /, *, console=None):
    """
    enable usagematch records and route them to a rich handler.

    calling it again replaces the previous sink; returns the loguru sink id.
    """
    global _sink
    if not isinstance(level, str | int):
        raise TypeError("configure() level must be a string or an integer")
    if _sink is not None:
        logger.remove(_sink)
    logger.enable("usagematch")
    _sink = logger.add(
        RichHandler(
            console=console or get_console(),
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        ),
        level=level.upper() if isinstance(level, str) else level,
        format="{message}",
        filter="usagematch",
        backtrace=False,
        diagnose=False,
    )
    return _sink


def unconfigure():
    """
    remove the sink installed by configure() and silence the package again.
    """
    global _sink
    if _sink is not None:
        logger.remove(_sink)
        _sink = None
    logger.disable("usagematch")


__all__ = (
    "logger",
    "configure",
    "unconfigure",
)
