from rich.pretty import pprint

from usagematch import *

# naval_fate ship <name> move <x> <y> [--speed=<kn>]
usage = Required(
    Command("ship"),
    Argument("<name>"),
    Command("move"),
    Argument("<x>"),
    Argument("<y>"),
    Optional(Option(long="--speed", argcount=1, value="10")),
)

tokens = (
    Argument(None, "ship"),
    Argument(None, "Guardian"),
    Argument(None, "move"),
    Argument(None, "150"),
    Option(long="--speed", argcount=1, value="15"),
    Argument(None, "300"),
)


if __name__ == '__main__':
    pprint(usage)
    pprint(dict(bind(usage, tokens)))
