import sys

from flagtree import CommandBuilder, run, strings_flag
from flagtree.utils import setup_logging

setup_logging()

names = strings_flag("name", None, "Widget name").nargs(1, 0)


def create_widgets(args: list[str]) -> int:
    print(f"Created new widgets: {', '.join(names.get())}")
    return 0


cmd = (
    CommandBuilder("create-widgets", "Create some widgets")
    .flags(names)
    .handle(create_widgets)
)

if __name__ == "__main__":
    # python widgets.py --name=foo --name=bar
    sys.exit(run(cmd))
