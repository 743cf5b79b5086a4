"""
Turns a parsed request into the single line nproc prints.

Precedence is the order of :data:`RULES`; the first rule whose condition holds decides the output.
"""

import logging
from collections.abc import Callable
from typing import NamedTuple

from .constants import PROGRAM_NAME, PROGRAM_VERSION, USAGE
from .models.request import Request
from .utils.system import CpuQuerySource

log = logging.getLogger(__name__)


class Rule(NamedTuple):
    name: str
    applies: Callable[[Request | None], bool]
    action: Callable[[Request | None, CpuQuerySource], str]


def adjust_count(base: int, ignore: int) -> int:
    """
    Subtract ``ignore`` from ``base`` without ever dropping below one processor.

    >>> adjust_count(8, 2)
    6
    >>> adjust_count(4, 4)
    1
    """
    return max(1, base - ignore)


def _ignore_base(request: Request, source: CpuQuerySource) -> int:
    # usable is the implicit base when no count was selected
    if request.include_usable or not request.selects_count:
        return source.usable()
    if request.include_all:
        return source.configured()
    return source.online()


def _adjusted(request: Request, source: CpuQuerySource) -> str:
    base = _ignore_base(request, source)
    count = adjust_count(base, request.ignore_count)
    log.debug(f"Ignoring {request.ignore_count} of {base} CPUs leaves {count}.")
    return str(count)


def _without_ignore(request: Request | None) -> bool:
    return request is not None and request.ignore_count is None


RULES: tuple[Rule, ...] = (
    Rule(
        "no-arguments",
        lambda request: request is None,
        lambda request, source: str(source.usable()),
    ),
    Rule(
        "all",
        lambda request: _without_ignore(request) and request.include_all,
        lambda request, source: str(source.configured()),
    ),
    Rule(
        "online",
        lambda request: _without_ignore(request) and request.include_online,
        lambda request, source: str(source.online()),
    ),
    Rule(
        "usable",
        lambda request: _without_ignore(request) and request.include_usable,
        lambda request, source: str(source.usable()),
    ),
    Rule(
        "ignore",
        lambda request: request.ignore_count is not None,
        _adjusted,
    ),
    Rule(
        "help",
        lambda request: request.show_help,
        lambda request, source: USAGE,
    ),
    Rule(
        "version",
        lambda request: request.show_version,
        lambda request, source: f"{PROGRAM_NAME} {PROGRAM_VERSION}",
    ),
    Rule(
        "default",
        lambda request: True,
        lambda request, source: str(source.usable()),
    ),
)


def select_rule(request: Request | None) -> Rule:
    """
    Return the first rule in :data:`RULES` that applies to the request.

    :param request: The parsed flags, or ``None`` when nproc was run without any arguments.
    """
    # "no-arguments" always matches None, so later rules only ever see a Request
    return next(rule for rule in RULES if rule.applies(request))


def resolve(request: Request | None, source: CpuQuerySource) -> str:
    """
    Compute the line to print for a request.

    :param request: The parsed flags, or ``None`` when nproc was run without any arguments.
    :param source: Where to read CPU counts from.
    :return: The output line, without the trailing newline.
    :raises CpuQueryError: If the operating system query needed by the selected rule fails.
    """
    rule = select_rule(request)
    log.debug(f"Selected rule '{rule.name}'.")
    return rule.action(request, source)
