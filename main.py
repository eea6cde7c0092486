import enum
import logging
import pathlib

from rich.pretty import pprint

from coreargs import *


class When(enum.Enum):
    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"


class Arg(Arguments, help=("-h", "--help"), version=("--version",), release="0.1.0"):
    """
    usage: $bin_name [OPTION]... [TEMPLATE]

    Create a temporary file or directory, safely, and print its name.
    """
    directory = Option("-d", "--directory", help="create a directory, not a file")
    dry_run = Option("-u", "--dry-run", help="do not create anything; merely print a name")
    quiet = Option("-q", "--quiet", help="suppress diagnostics about file/dir-creation failure")
    suffix = Option("--suffix=SUFF", type=text, help="append SUFF to TEMPLATE")
    tmpdir = Option("-p DIR", "--tmpdir[=DIR]", type=path, default=pathlib.Path("/tmp"), help="interpret TEMPLATE relative to DIR")
    color = Option(
        "--color[=WHEN]",
        type=Choice.of(When, ALWAYS=("always", "yes", "force"), NEVER=("never", "no", "none")),
        default=When.ALWAYS,
        hidden=True,
    )
    template = Positional(nargs="?", help="template ending in at least three consecutive X")


class Settings(Options, arguments=Arg, fancy=True):
    def __init__(self):
        self.directory = False
        self.dry_run = False
        self.quiet = False
        self.suffix = None
        self.tmpdir = None
        self.color = When.AUTO
        self.template = "tmp.XXXXXXXXXX"

    def apply(self, event):
        match event:
            case Event("directory" | "dry_run" | "quiet" as name):
                setattr(self, name, True)
            case Event(name, value):
                setattr(self, name, value)


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    pprint(vars(Settings().parse()))
