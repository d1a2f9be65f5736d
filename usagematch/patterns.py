r"""
usagematch pattern tree.

Overview
- Leaves (match a single classified token)
  • Argument: positional value, e.g. <file>.
  • Command: literal sub-command word, e.g. "ship".
  • Option: named switch with short/long spellings, e.g. -v/--verbose.

- Branches (combine child patterns)
  • Required: every child, in order.
  • Optional: every child that can match, in order; never fails.
  • Either: the most specific matching child.
  • OneOrMore: its single child, repeated while it makes progress.
  • AnyOptions: placeholder for "[options]"; matched as an empty Optional.

- The same leaf classes double as input tokens: the argv classifier turns
  `ship --speed 10 Guardian` into Argument/Option leaves, and the matcher
  answers with leaves carrying the requested names and the found values.

Introspection & representation
- PatternType metaclass provides stable __repr__/__rich_repr__, structural
  equality/hashing and read-only properties for every name declared in
  __introspectable__.
- Concrete variants are sealed: the set of patterns is closed, which is what
  lets the dispatcher in usagematch.matching handle every case.
- copy.replace(leaf, value=...) derives a new pattern; nothing is mutated.

Quick example:
    >>> from usagematch.patterns import *
    >>> usage = Required(Command("ship"), OneOrMore(Argument("<name>")), Optional(Option("-s", "--speed", 1)))
    >>> [leaf.name for leaf in usage.leaves()]
    ['ship', '<name>', '--speed']
"""
import functools
import operator
import re

from .utils import *
from .values import kindof


class PatternType(type):
    """
    Metaclass shared by every pattern variant.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens)
      for messages and reprs, e.g. OneOrMore -> "one-or-more".
    - Expose the names listed in __introspectable__ as read-only properties
      backed by "_<name>" fields (see utils.mirror).
    - Provide __repr__/__rich_repr__ plus __eq__/__hash__ over those names.
    - Seal variants declared with `sealed=True` against subclassing.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
                "__sealed__": options.get("sealed", False),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        def identity(self):
            # Value types take part: a flag (True) and a count (1) are different leaves.
            return tuple((name, type(value), value) for name, value in self.__rich_repr__())

        @rename("__eq__")
        def __eq__(self, other):
            if type(self) is not type(other):
                return NotImplemented
            return identity(self) == identity(other)
        self.__eq__ = __eq__

        @rename("__hash__")
        def __hash__(self):
            return hash((type(self), identity(self)))
        self.__hash__ = __hash__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


class Pattern(metaclass=PatternType):
    """
    Root of the closed pattern hierarchy. Not instantiable by itself.
    """

    def __new__(cls, *args, **kwargs):
        if not cls.__sealed__:
            raise TypeError(f"{cls.__typename__} is abstract, use one of its variants")
        return super().__new__(cls)

    def leaves(self):
        """
        Yield every leaf of the tree, depth-first and left to right.
        """
        raise NotImplementedError


class Leaf(Pattern):
    """
    A pattern matched against exactly one input token.

    The name identifies the binding; the value is the declared default before
    matching and the resolved occurrence after it.
    """

    __introspectable__ = (
        "name",
        "value",
    )

    def __new__(cls, name, value, /):
        self = super().__new__(cls)
        # Lists are frozen so that a leaf can be shared between branches safely.
        self._value = tuple(value) if isinstance(value, list) else value
        self._name = name
        kindof(self._value)
        return self

    def leaves(self):
        yield self

    @property
    def kind(self):
        return kindof(self._value)

    def __replace__(self, /, **changes):
        return type(self)(**(self._arguments() | changes))

    def _arguments(self):
        return {"name": self.name, "value": self.value}


class Argument(Leaf, sealed=True):
    """
    Positional argument, e.g. <file> or FILE.

    As an input token the name is usually None: the classifier cannot know which
    <argument> a word belongs to; the matcher decides by position.
    """

    def __new__(cls, name=None, value=None):
        if not isinstance(name, str | None):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        return super().__new__(cls, name, value)


class Command(Leaf, sealed=True):
    """
    Literal sub-command word. Its value is False until the word is matched.
    """

    def __new__(cls, name, value=False):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not name:
            raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
        return super().__new__(cls, name, value)


class Option(Leaf, sealed=True):
    """
    Named switch with an optional short (-v) and long (--verbose) spelling.

    The binding name is the long spelling when there is one, the short one
    otherwise. argcount only records how many parameters the option takes; the
    classifier has already folded any parameter into the token's value.
    """

    __introspectable__ = (
        "short",
        "long",
        "argcount",
        "value",
    )

    def __new__(cls, short=None, long=None, argcount=0, value=Unset):
        if not isinstance(short, str | None) or not isinstance(long, str | None):
            raise TypeError(f"{cls.__typename__} spellings must be strings")
        elif not (short or long):
            raise TypeError(f"{cls.__typename__} must specify at least one spelling")
        if not isinstance(argcount, int) or isinstance(argcount, bool):
            raise TypeError(f"{cls.__typename__} 'argcount' must be an integer")
        elif argcount < 0:
            raise ValueError(f"{cls.__typename__} 'argcount' cannot be negative")

        # Flags default to False, parametric options to "no value".
        self = super().__new__(cls, long or short, coalesce(value, None if argcount else False))
        self._short = short
        self._long = long
        self._argcount = argcount
        return self

    def _arguments(self):
        return {"short": self.short, "long": self.long, "argcount": self.argcount, "value": self.value}


class Branch(Pattern):
    """
    A pattern combining an ordered tuple of child patterns.
    """

    __introspectable__ = (
        "children",
    )

    def __new__(cls, *children):
        for child in children:
            if not isinstance(child, Pattern):
                raise TypeError(f"{cls.__typename__} children must be patterns, not {type(child).__name__!r}")
        self = super().__new__(cls)
        self._children = children
        return self

    def leaves(self):
        for child in self._children:
            yield from child.leaves()

    def __replace__(self, /, **changes):
        return type(self)(*changes.pop("children", self._children), **changes)


class Required(Branch, sealed=True):
    """All children must match, in order."""


class Optional(Branch, sealed=True):
    """Children are matched when possible; an Optional never fails."""


class Either(Branch, sealed=True):
    """Mutually exclusive alternatives; the one consuming most tokens wins."""


class OneOrMore(Branch, sealed=True):
    """
    Repetition of a single child ("<name>..." in usage text).

    Exactly one child is expected. The constructor accepts any number so that
    trees coming from a parser can be built as-is; the arity is enforced when
    the pattern is matched.
    """


class AnyOptions(Branch, sealed=True):
    """
    The "[options]" shortcut of a usage line.

    It is matched as an empty Optional: it always succeeds, consuming and
    collecting nothing, whatever options it holds.
    """


__all__ = (
    "PatternType",
    "Pattern",
    "Leaf",
    "Argument",
    "Command",
    "Option",
    "Branch",
    "Required",
    "Optional",
    "Either",
    "OneOrMore",
    "AnyOptions",
)
