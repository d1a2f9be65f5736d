"""
usagematch.matching
~~~~~~~~~~~~~~~~~~~

Match a classified token list against a usage pattern tree.

Contract
- match(pattern, remaining, collected=()) returns (remaining', collected') when
  the pattern accepts the input, and None when it does not.
- remaining holds the tokens not consumed yet, collected the leaves bound so
  far. Both are tuples: every step builds new ones, the inputs are never
  touched, so Either can explore its alternatives and OneOrMore can try one
  more repetition from the same state.
- A None result is an ordinary outcome. Only malformed trees raise
  (PatternArityError, UnknownPatternError).

Pieces
- dispatcher: match(), one case per pattern variant.
- leaf scanners: find the first token an Argument/Command/Option accepts.
- combinators: Required, Optional, Either, OneOrMore (AnyOptions is an empty Optional).
- accumulator: merge(), folds a resolved leaf into the collected bindings.

On top of that, bind() gives the name -> value view a CLI layer wants once the
whole input has been consumed.
"""
import copy
from types import MappingProxyType

from .faults import FaultCode, PatternArityError, UnknownPatternError, UsageMismatchError, getdoc
from .logs import logger
from .patterns import Argument, Command, Option, Required, Optional, Either, OneOrMore, AnyOptions
from .values import ValueKind


def match(pattern, remaining, collected=(), /):
    """
    match `pattern` against the `remaining` tokens.

    parameters
    - pattern: Pattern, the (sub)tree to match.
    - remaining: Iterable[Leaf], classified input tokens not consumed yet.
    - collected: Iterable[Leaf], bindings accumulated by earlier matches.

    returns
    - (remaining', collected') as tuples on success, None otherwise.

    raises
    - PatternArityError when a OneOrMore does not hold exactly one child.
    - UnknownPatternError when something other than a pattern is given.
    """
    remaining, collected = tuple(remaining), tuple(collected)
    logger.trace("matching {!r} against {} token(s)", pattern, len(remaining))
    match pattern:
        case Argument() | Command() | Option():
            return _match_leaf(pattern, remaining, collected)
        case Required():
            return _match_required(pattern, remaining, collected)
        case Optional():
            return _match_optional(pattern, remaining, collected)
        case AnyOptions():
            return _match_optional(Optional(), remaining, collected)
        case Either():
            return _match_either(pattern, remaining, collected)
        case OneOrMore():
            return _match_one_or_more(pattern, remaining, collected)
    raise UnknownPatternError(
        "cannot match a %r object, only patterns can be matched" % type(pattern).__name__,
        title="unknown pattern",
        code=FaultCode.UNKNOWN_PATTERN,
        pattern=pattern,
        hint="build the tree from usagematch.patterns variants",
        docs=getdoc(FaultCode.UNKNOWN_PATTERN),
    )


def _scan_argument(argument, remaining):
    # Purely positional: the first Argument token wins whatever its name.
    for index, token in enumerate(remaining):
        if isinstance(token, Argument):
            return index, Argument(argument.name, token.value)
    return None


def _scan_command(command, remaining):
    # Only the first Argument token is considered; options before it are skipped.
    for index, token in enumerate(remaining):
        if isinstance(token, Argument):
            if isinstance(token.value, str) and token.value == command.name:
                return index, Command(command.name, True)
            return None
    return None


def _scan_option(option, remaining):
    for index, token in enumerate(remaining):
        if isinstance(token, Option) and token.name == option.name:
            return index, token
    return None


def _match_leaf(leaf, remaining, collected):
    match leaf:
        case Argument():
            found = _scan_argument(leaf, remaining)
        case Command():
            found = _scan_command(leaf, remaining)
        case Option():
            found = _scan_option(leaf, remaining)
    if found is None:
        logger.trace("{} {!r} found no token", type(leaf).__typename__, leaf.name)
        return None
    index, resolved = found
    logger.trace("{} {!r} took token #{}", type(leaf).__typename__, leaf.name, index)
    return remaining[:index] + remaining[index + 1:], merge(resolved, collected)


def merge(leaf, collected, /):
    """
    fold a resolved leaf into the collected bindings.

    policy by value kind
    - COUNT: the first binding with the same name gets its count incremented;
      without one, the leaf is appended with a count of 1.
    - MANY: the first binding with the same name gets the leaf's strings appended
      to its own; without one, the leaf is appended as-is.
    - anything else: appended, even if the name is already bound.

    merged bindings are replaced at their own position; every other binding is
    kept where it was. a same-named binding of another kind is restarted from
    the zero value of the leaf's kind (0 or no strings).
    """
    collected = tuple(collected)
    if not (kind := leaf.kind).mergeable:
        return collected + (leaf,)

    for index, binding in enumerate(collected):
        if binding.name == leaf.name:
            break
    else:
        return collected + (copy.replace(leaf, value=1) if kind is ValueKind.COUNT else leaf,)

    if kind is ValueKind.COUNT:
        value = (binding.value if binding.kind is kind else 0) + 1
    else:
        # Existing strings first, so repeated arguments keep command-line order.
        value = (binding.value if binding.kind is kind else ()) + leaf.value
    return collected[:index] + (copy.replace(binding, value=value),) + collected[index + 1:]


def _match_required(required, remaining, collected):
    for child in required.children:
        if (outcome := match(child, remaining, collected)) is None:
            return None
        remaining, collected = outcome
    return remaining, collected


def _match_optional(optional, remaining, collected):
    for child in optional.children:
        if (outcome := match(child, remaining, collected)) is not None:
            remaining, collected = outcome
    return remaining, collected


def _match_either(either, remaining, collected):
    best = None
    for position, child in enumerate(either.children):
        outcome = match(child, remaining, collected)
        # Strictly fewer leftovers replaces the current best; ties keep the earlier child.
        if outcome is not None and (best is None or len(outcome[0]) < len(best[0])):
            best = outcome
            logger.debug("either: alternative #{} leads with {} token(s) left", position, len(outcome[0]))
    return best


def _match_one_or_more(repeated, remaining, collected):
    if len(repeated.children) != 1:
        logger.error("one-or-more pattern with {} children", len(repeated.children))
        raise PatternArityError(
            "one-or-more pattern expects exactly one child, got %d" % len(repeated.children),
            title="malformed pattern",
            code=FaultCode.MALFORMED_PATTERN,
            pattern=repeated,
            hint="wrap several children in a required group before repeating them",
            docs=getdoc(FaultCode.MALFORMED_PATTERN),
        )
    child, = repeated.children

    if (outcome := match(child, remaining, collected)) is None:
        return None
    while len(outcome[0]) < len(remaining):
        remaining, collected = outcome
        if (outcome := match(child, remaining, collected)) is None:
            logger.debug("one-or-more: stopped after a failed repetition")
            return remaining, collected
    logger.debug("one-or-more: stopped, last repetition consumed nothing")
    return outcome


def bind(pattern, tokens, /):
    """
    match the whole token list and return the resulting name -> value mapping.

    behavior
    - every leaf of the pattern contributes its declared value as a default.
    - collected bindings override the defaults, in collection order.
    - the result is a read-only mapping.

    raises
    - UsageMismatchError when the pattern does not match or leaves tokens
      unconsumed; the leftovers are available as `error.remaining`.
    """
    tokens = tuple(tokens)
    outcome = match(pattern, tokens)
    if outcome is None or outcome[0]:
        remaining = tokens if outcome is None else outcome[0]
        logger.debug("bind: input does not conform, {} token(s) left", len(remaining))
        raise UsageMismatchError(
            "input does not conform to the usage pattern, %d token(s) left" % len(remaining),
            title="usage mismatch",
            code=FaultCode.USAGE_MISMATCH,
            pattern=pattern,
            remaining=remaining,
            docs=getdoc(FaultCode.USAGE_MISMATCH),
        )

    namespace = {leaf.name: leaf.value for leaf in pattern.leaves()}
    for leaf in outcome[1]:
        namespace[leaf.name] = leaf.value
    logger.debug("bind: {} name(s) bound", len(namespace))
    return MappingProxyType(namespace)


__all__ = (
    "match",
    "merge",
    "bind",
)
