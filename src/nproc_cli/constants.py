"""Program name, version and usage text."""

from . import __version__

PACKAGE_ROOT = "nproc_cli"

PROGRAM_NAME = "nproc"
PROGRAM_VERSION = __version__

USAGE = f"usage: {PROGRAM_NAME} [--all] [--online] [--usable] [--ignore=COUNT] [--help] [--version]"

# Long options recognized on the command line, in the order they are documented
LONG_OPTIONS = ("all", "online", "usable", "ignore", "help", "version")

CONFIG_FILE_NAME = "config.yaml"
ENV_PREFIX = "NPROC_"
