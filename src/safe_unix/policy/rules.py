"""Argument-vector validation rules.

Each rule is a frozen dataclass with a ``check(args)`` method that returns
``None`` when the vector is acceptable and raises ``PolicyViolationError``
naming the offending token otherwise. Rules are pure: no I/O, no state.

The set of rule types is closed (see ``Rule``). They fall into three
families:

- Allowlist: ``FlagAllowlist``
- Denylist: ``TokenDenylist``, ``PrefixDenylist``
- Structural precondition: ``RequireFlag``, ``SubcommandAllowlist``,
  ``FirstOperandIn``, ``OperandsRequireFlag``, ``LeadingFlag``,
  ``NoArguments``, ``NoOperands``, ``MaxOperands``, ``OperandPattern``
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
import re

from safe_unix.core.errors import PolicyViolationError

FLAG_MARKER = "-"
END_OF_OPTIONS = "--"
STDIN_OPERAND = "-"


def is_flag(token: str) -> bool:
    """Return True for option-shaped tokens.

    A lone ``-`` names standard input and is an operand.
    """
    return token.startswith(FLAG_MARKER) and token != STDIN_OPERAND


def operands(
    args: Sequence[str], value_flags: frozenset[str] = frozenset()
) -> list[str]:
    """Return the operand tokens of `args`.

    Tokens that directly follow a flag in `value_flags` are that flag's value
    and are not operands. Everything after ``--`` is an operand.
    """
    result: list[str] = []
    skip_next = False
    options_ended = False
    for token in args:
        if options_ended:
            result.append(token)
            continue
        if skip_next:
            skip_next = False
            continue
        if token == END_OF_OPTIONS:
            options_ended = True
            continue
        if is_flag(token):
            skip_next = token in value_flags
            continue
        result.append(token)
    return result


@dataclass(frozen=True)
class FlagAllowlist:
    """Every flag-shaped token must be declared.

    `flags` are matched exactly. `prefixes` admit options with an attached
    value (``--lines=5``, ``-n5``). A short prefix is only sound when the tool
    reads the rest of the token as that option's value; tools that walk a
    cluster letter by letter must list the option exactly. Operands pass
    through unchecked.
    """

    flags: frozenset[str]
    prefixes: tuple[str, ...] = ()

    def check(self, args: Sequence[str]) -> None:
        for token in args:
            if not is_flag(token) or token == END_OF_OPTIONS:
                continue
            if token in self.flags or token.startswith(self.prefixes):
                continue
            raise PolicyViolationError(f"flag not allowed here: {token}", token)


@dataclass(frozen=True)
class TokenDenylist:
    """Reject exact, case-sensitive matches anywhere in the vector.

    Clustered short flags are not expanded.
    """

    tokens: frozenset[str]

    def check(self, args: Sequence[str]) -> None:
        for token in args:
            if token in self.tokens:
                raise PolicyViolationError(f"forbidden argument: {token}", token)


@dataclass(frozen=True)
class PrefixDenylist:
    """Reject any token starting with one of `prefixes`."""

    prefixes: tuple[str, ...]
    reason: str = "forbidden argument"

    def check(self, args: Sequence[str]) -> None:
        for token in args:
            if token.startswith(self.prefixes):
                raise PolicyViolationError(f"{self.reason}: {token}", token)


@dataclass(frozen=True)
class RequireFlag:
    """At least one of `any_of` must appear in the vector."""

    any_of: tuple[str, ...]
    message: str

    def check(self, args: Sequence[str]) -> None:
        if not any(token in self.any_of for token in args):
            raise PolicyViolationError(self.message)


@dataclass(frozen=True)
class SubcommandAllowlist:
    """The first argument selects a mode from a closed set.

    The remaining arguments are checked against the nested rules declared
    for that mode. A missing first argument is rejected like any other
    unknown value.
    """

    label: str
    subcommands: Mapping[str, tuple[Rule, ...]] = field(default_factory=dict)

    def check(self, args: Sequence[str]) -> None:
        sub = args[0] if args else ""
        nested = self.subcommands.get(sub)
        if nested is None:
            raise PolicyViolationError(
                f"{self.label} subcommand not allowed: {sub}", sub
            )
        rest = args[1:]
        for rule in nested:
            rule.check(rest)


@dataclass(frozen=True)
class FirstOperandIn:
    """If any operand is present, the first one must be in `values`."""

    values: frozenset[str]
    label: str

    def check(self, args: Sequence[str]) -> None:
        found = operands(args)
        if found and found[0] not in self.values:
            raise PolicyViolationError(
                f"{self.label} mode not allowed: {found[0]}", found[0]
            )


@dataclass(frozen=True)
class OperandsRequireFlag:
    """Operands are only allowed alongside one of `any_of`.

    Used where a bare operand switches a listing command into a creating
    one (``git branch NAME``).
    """

    any_of: tuple[str, ...]
    label: str

    def check(self, args: Sequence[str]) -> None:
        found = operands(args)
        if found and not any(token in self.any_of for token in args):
            raise PolicyViolationError(
                f"{self.label} accepts operands only in list mode "
                f"({' or '.join(self.any_of)}): {found[0]}",
                found[0],
            )


@dataclass(frozen=True)
class LeadingFlag:
    """A non-empty vector must open with a flag.

    Some tools read a bare first word as a cluster of old-style options
    (``tar xf``), which would bypass the flag allowlist.
    """

    label: str

    def check(self, args: Sequence[str]) -> None:
        if args and not is_flag(args[0]):
            raise PolicyViolationError(
                f"{self.label} must start with a flag: {args[0]}", args[0]
            )


@dataclass(frozen=True)
class NoArguments:
    """The operation takes no arguments at all."""

    label: str

    def check(self, args: Sequence[str]) -> None:
        if args:
            raise PolicyViolationError(
                f"{self.label} takes no arguments: {args[0]}", args[0]
            )


@dataclass(frozen=True)
class NoOperands:
    """Only flags are accepted."""

    label: str
    reason: str = ""

    def check(self, args: Sequence[str]) -> None:
        found = operands(args)
        if found:
            suffix = f" ({self.reason})" if self.reason else ""
            raise PolicyViolationError(
                f"{self.label} takes no operands{suffix}: {found[0]}", found[0]
            )


@dataclass(frozen=True)
class MaxOperands:
    """Reject vectors with more than `limit` operands."""

    limit: int
    label: str
    value_flags: frozenset[str] = frozenset()

    def check(self, args: Sequence[str]) -> None:
        found = operands(args, self.value_flags)
        if len(found) > self.limit:
            extra = found[self.limit]
            raise PolicyViolationError(
                f"{self.label} accepts at most {self.limit} operand(s): {extra}",
                extra,
            )


@dataclass(frozen=True)
class OperandPattern:
    """Every operand must fully match `pattern`."""

    pattern: re.Pattern[str]
    reason: str
    value_flags: frozenset[str] = frozenset()

    def check(self, args: Sequence[str]) -> None:
        for token in operands(args, self.value_flags):
            if not self.pattern.fullmatch(token):
                raise PolicyViolationError(f"{self.reason}: {token}", token)


Rule = (
    FlagAllowlist
    | TokenDenylist
    | PrefixDenylist
    | RequireFlag
    | SubcommandAllowlist
    | FirstOperandIn
    | OperandsRequireFlag
    | LeadingFlag
    | NoArguments
    | NoOperands
    | MaxOperands
    | OperandPattern
)


def drop_long_options(args: Sequence[str]) -> list[str]:
    """Argument filter removing every ``--name`` style option."""
    return [token for token in args if not token.startswith(END_OF_OPTIONS)]
