import sys

import rich
from rich.pretty import pprint

from slimargs import *

__prog__ = "demo"

parser = Parser(
    "Copy files to a destination, optionally in parallel.",
    "Report bugs to the issue tracker.",
    colorful=True,
)
parser.add_signal("h", "help", "Show this help message and exit.")
parser.add_signal(long_name="version", descr="Show the version and exit.")
parser.add_flag("v", "verbose", "Print every copied file.")
parser.add_option("j", "jobs", "N", "Number of parallel workers.", type=uint8, default=1)
parser.add_option("m", "mode", "MODE", "Permission bits of created files.", type=uint16, default=0o644)
parser.add_operand("DEST", "Destination directory.", True)
parser.add_sink("SOURCE", "Files to copy.", True, dest="sources")


if __name__ == '__main__':
    match parser.parse(sys.argv):
        case Parsed(values):
            pprint(values)
        case SignalRequested(long_name="version"):
            rich.print(version_info)
        case SignalRequested():
            parser.print_help()
        case Failed(error):
            rich.print(error)
            sys.exit(2)
