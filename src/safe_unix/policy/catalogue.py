"""The closed catalogue of operations and their policies.

Built once at import time and exposed read-only. Nothing can be added or
removed at runtime: ``Operation`` is the complete capability surface, and
``CATALOGUE`` has exactly one descriptor per member.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
import re
from types import MappingProxyType

from safe_unix.core.errors import UnknownOperationError
from safe_unix.policy.rules import (
    FirstOperandIn,
    FlagAllowlist,
    LeadingFlag,
    MaxOperands,
    NoArguments,
    NoOperands,
    OperandPattern,
    OperandsRequireFlag,
    PrefixDenylist,
    RequireFlag,
    Rule,
    SubcommandAllowlist,
    TokenDenylist,
    drop_long_options,
)

ArgumentFilter = Callable[[Sequence[str]], list[str]]


class Operation(str, Enum):
    """Every operation the gateway exposes, in announcement order."""

    LS = "safe_ls"
    PWD = "safe_pwd"
    STAT = "safe_stat"
    FILE = "safe_file"
    CAT = "safe_cat"
    HEAD = "safe_head"
    TAIL = "safe_tail"
    LESS = "safe_less"
    MORE = "safe_more"
    GREP = "safe_grep"
    AWK = "safe_awk"
    SED = "safe_sed"
    CUT = "safe_cut"
    PASTE = "safe_paste"
    TR = "safe_tr"
    SORT = "safe_sort"
    UNIQ = "safe_uniq"
    FMT = "safe_fmt"
    FOLD = "safe_fold"
    COLUMN = "safe_column"
    WC = "safe_wc"
    CKSUM = "safe_cksum"
    SHA = "safe_sha"
    TAR_LIST = "safe_tar_list"
    ZIPINFO = "safe_zipinfo"
    UNZIP_LIST = "safe_unzip_list"
    DU = "safe_du"
    DF = "safe_df"
    ENV = "safe_env"
    ID = "safe_id"
    UNAME = "safe_uname"
    DATE = "safe_date"
    PS = "safe_ps"
    UPTIME = "safe_uptime"
    FIND = "safe_find"
    GIT = "safe_git"
    JQ = "safe_jq"
    YQ = "safe_yq"
    HEXDUMP = "safe_hexdump"
    XXD = "safe_xxd"
    OD = "safe_od"
    TREE = "safe_tree"
    SW_VERS = "safe_sw_vers"


@dataclass(frozen=True)
class CommandSelector:
    """Pick the executable from a closed set named by the first argument.

    When the first argument is not one of `choices`, `default` runs with the
    whole vector.
    """

    choices: frozenset[str]
    default: str

    def select(self, args: Sequence[str]) -> tuple[str, list[str]]:
        if args and args[0] in self.choices:
            return args[0], list(args[1:])
        return self.default, list(args)


@dataclass(frozen=True)
class PolicyDescriptor:
    """How one operation maps onto an underlying command."""

    command: str
    description: str
    rules: tuple[Rule, ...]
    argument_filter: ArgumentFilter | None = None
    command_selector: CommandSelector | None = None
    fixed_args: tuple[str, ...] = ()
    environment: Mapping[str, str] = field(default_factory=dict)

    def validate(self, args: Sequence[str]) -> None:
        """Apply every rule; the first rejection propagates."""
        for rule in self.rules:
            rule.check(args)

    def resolve(self, args: Sequence[str]) -> tuple[str, list[str]]:
        """Return the final (command, argv) for an already validated vector."""
        filtered = (
            self.argument_filter(args) if self.argument_filter else list(args)
        )
        if self.command_selector is not None:
            command, filtered = self.command_selector.select(filtered)
        else:
            command = self.command
        return command, [*self.fixed_args, *filtered]


def _allow(*flags: str, prefixes: tuple[str, ...] = ()) -> FlagAllowlist:
    return FlagAllowlist(flags=frozenset(flags), prefixes=prefixes)


# Shared by find and sed. Each entry either executes a program, deletes,
# writes a file, or edits in place.
MUTATION_TOKENS = frozenset(
    {
        "-exec",
        "-execdir",
        "-ok",
        "-okdir",
        "-delete",
        "-fprint",
        "-fprint0",
        "-fprintf",
        "-fls",
        "-i",
        "--in-place",
    }
)

SHA_TOOLS = frozenset(
    {
        "sha1sum",
        "sha224sum",
        "sha256sum",
        "sha384sum",
        "sha512sum",
        "shasum",
        "md5sum",
        "md5",
    }
)

GIT_SUBCOMMANDS: Mapping[str, tuple[Rule, ...]] = MappingProxyType(
    {
        "status": (),
        "diff": (),
        "show": (),
        "log": (),
        "ls-files": (),
        "rev-parse": (),
        "blame": (),
        "cat-file": (),
        "describe": (),
        "branch": (
            _allow(
                "-a",
                "--all",
                "-r",
                "--remotes",
                "-l",
                "--list",
                "-v",
                "-vv",
                "--verbose",
                "-i",
                "--ignore-case",
                "--show-current",
                "--no-color",
                "--no-column",
                "--omit-empty",
                prefixes=(
                    "--contains",
                    "--no-contains",
                    "--merged",
                    "--no-merged",
                    "--points-at",
                    "--sort=",
                    "--format=",
                    "--color",
                    "--column",
                    "--abbrev=",
                ),
            ),
            OperandsRequireFlag(("-l", "--list"), "git branch"),
        ),
        "tag": (
            _allow(
                "-l",
                "--list",
                "-i",
                "--ignore-case",
                "--no-column",
                "--omit-empty",
                prefixes=(
                    "-n",
                    "--contains",
                    "--no-contains",
                    "--merged",
                    "--no-merged",
                    "--points-at",
                    "--sort=",
                    "--format=",
                    "--color",
                    "--column",
                ),
            ),
            OperandsRequireFlag(("-l", "--list"), "git tag"),
        ),
        "remote": (
            _allow("-v", "--verbose", "-n", "--push", "--all"),
            FirstOperandIn(frozenset({"show", "get-url"}), "git remote"),
        ),
    }
)

_FILE_VIEW_PREFIXES = ("-n", "-c", "--lines=", "--bytes=")

_CATALOGUE: dict[Operation, PolicyDescriptor] = {
    Operation.LS: PolicyDescriptor(
        command="ls",
        description="List directory contents.",
        rules=(
            _allow(
                "-l", "-la", "-lah", "-1", "-A", "-F", "-p", "-R",
                "-a", "-h", "-d", "-t", "-r", "-S",
            ),
        ),
    ),
    Operation.PWD: PolicyDescriptor(
        command="pwd",
        description="Print the working directory.",
        rules=(NoArguments("safe_pwd"),),
    ),
    Operation.STAT: PolicyDescriptor(
        command="stat",
        description="Show file status. Long options are dropped.",
        rules=(_allow("-L", "-f", "-t", "-c", prefixes=("--", "-c")),),
        argument_filter=drop_long_options,
    ),
    Operation.FILE: PolicyDescriptor(
        command="file",
        description="Classify file contents by type.",
        rules=(
            _allow(
                "-b", "--brief", "-i", "--mime", "--mime-type",
                "--mime-encoding", "-L", "--dereference", "-h",
                "--no-dereference", "-z", "--uncompress", "-k",
                "--keep-going", "-s", "--special-files",
            ),
        ),
    ),
    Operation.CAT: PolicyDescriptor(
        command="cat",
        description="Print file contents.",
        rules=(
            _allow(
                "-n", "--number", "-b", "--number-nonblank", "-A",
                "--show-all", "-e", "-E", "--show-ends", "-s",
                "--squeeze-blank", "-t", "-T", "--show-tabs", "-v",
                "--show-nonprinting", "-u",
            ),
        ),
    ),
    Operation.HEAD: PolicyDescriptor(
        command="head",
        description="Print the first lines of files.",
        rules=(
            _allow(
                "-q", "--quiet", "--silent", "-v", "--verbose", "-z",
                "--zero-terminated",
                prefixes=_FILE_VIEW_PREFIXES,
            ),
        ),
    ),
    Operation.TAIL: PolicyDescriptor(
        command="tail",
        description="Print the last lines of files. Follow mode is not available.",
        rules=(
            _allow(
                "-q", "--quiet", "--silent", "-v", "--verbose", "-z",
                "--zero-terminated",
                prefixes=_FILE_VIEW_PREFIXES,
            ),
        ),
    ),
    Operation.LESS: PolicyDescriptor(
        command="less",
        description="Page through files (non-interactive passthrough).",
        rules=(
            PrefixDenylist(("+",), "startup commands are not allowed"),
            _allow("-N", "-S", "-R", "-r", "-X", "-F", "-f"),
        ),
    ),
    Operation.MORE: PolicyDescriptor(
        command="more",
        description="Page through files (non-interactive passthrough).",
        rules=(
            PrefixDenylist(("+",), "startup commands are not allowed"),
            _allow("-d", "-f", "-l", "-c", "-p", "-s", "-u"),
        ),
    ),
    Operation.GREP: PolicyDescriptor(
        command="grep",
        description="Search files for lines matching a pattern.",
        rules=(
            _allow(
                "-i", "--ignore-case", "-v", "--invert-match", "-n",
                "--line-number", "-c", "--count", "-l",
                "--files-with-matches", "-L", "--files-without-match", "-r",
                "--recursive", "-R", "--dereference-recursive", "-E",
                "--extended-regexp", "-F", "--fixed-strings", "-G",
                "--basic-regexp", "-P", "--perl-regexp", "-w",
                "--word-regexp", "-x", "--line-regexp", "-o",
                "--only-matching", "-h", "--no-filename", "-H",
                "--with-filename", "-s", "--no-messages", "-q", "--quiet",
                "--silent", "-I", "-a", "--text", "-z", "--null-data",
                "-Z", "--null", "-b", "--byte-offset", "--color",
                "--colour", "-T", "--initial-tab",
                prefixes=(
                    "-e", "-f", "-A", "-B", "-C", "-m", "--regexp=",
                    "--file=", "--after-context=", "--before-context=",
                    "--context=", "--max-count=", "--include=",
                    "--exclude=", "--exclude-dir=", "--color=",
                    "--colour=", "--label=", "--binary-files=",
                ),
            ),
        ),
    ),
    Operation.AWK: PolicyDescriptor(
        command="gawk",
        description=(
            "Run an awk program over files in sandbox mode "
            "(no system(), no redirection, no pipes)."
        ),
        rules=(
            _allow(
                "--sandbox", "-b", "--characters-as-bytes", "-c",
                "--traditional", "-P", "--posix", "-n",
                "--non-decimal-data", "-S",
                prefixes=(
                    "-F", "-v", "-f", "-e", "--field-separator=",
                    "--assign=", "--file=", "--source=",
                ),
            ),
        ),
        fixed_args=("--sandbox",),
    ),
    Operation.SED: PolicyDescriptor(
        command="sed",
        description=(
            "Stream-edit text to stdout in sandbox mode. In-place editing "
            "is refused."
        ),
        rules=(
            TokenDenylist(MUTATION_TOKENS),
            PrefixDenylist(("-i", "--in-place="), "in-place editing is not allowed"),
            _allow(
                "-n", "--quiet", "--silent", "-E", "-r", "--regexp-extended",
                "-s", "--separate", "-u", "--unbuffered", "-z",
                "--null-data", "--posix", "--debug", "--sandbox",
                prefixes=("-e", "-f", "-l", "--expression=", "--file=", "--line-length="),
            ),
        ),
        fixed_args=("--sandbox",),
    ),
    Operation.CUT: PolicyDescriptor(
        command="cut",
        description="Select fields or columns from each line.",
        rules=(
            _allow(
                "-s", "--only-delimited", "-n", "--complement", "-z",
                "--zero-terminated",
                prefixes=(
                    "-b", "-c", "-f", "-d", "--bytes=", "--characters=",
                    "--fields=", "--delimiter=", "--output-delimiter=",
                ),
            ),
        ),
    ),
    Operation.PASTE: PolicyDescriptor(
        command="paste",
        description="Merge lines of files side by side.",
        rules=(
            _allow(
                "-s", "--serial", "-z", "--zero-terminated",
                prefixes=("-d", "--delimiters="),
            ),
        ),
    ),
    Operation.TR: PolicyDescriptor(
        command="tr",
        description="Translate or delete characters from standard input.",
        rules=(
            _allow(
                "-c", "-C", "--complement", "-d", "--delete", "-s",
                "--squeeze-repeats", "-t", "--truncate-set1",
            ),
        ),
    ),
    Operation.SORT: PolicyDescriptor(
        command="sort",
        description="Sort lines of text files to stdout.",
        rules=(
            _allow(
                "-b", "--ignore-leading-blanks", "-d", "--dictionary-order",
                "-f", "--ignore-case", "-g", "--general-numeric-sort", "-i",
                "--ignore-nonprinting", "-M", "--month-sort", "-h",
                "--human-numeric-sort", "-n", "--numeric-sort", "-R",
                "--random-sort", "-r", "--reverse", "-V", "--version-sort",
                "-u", "--unique", "-s", "--stable", "-z",
                "--zero-terminated", "-c", "-C", "--check", "-m", "--merge",
                prefixes=("-k", "-t", "--key=", "--field-separator=", "--sort="),
            ),
        ),
    ),
    Operation.UNIQ: PolicyDescriptor(
        command="uniq",
        description="Report or omit repeated lines (output to stdout only).",
        rules=(
            _allow(
                "-c", "--count", "-d", "--repeated", "-D", "-u", "--unique",
                "-i", "--ignore-case", "-z", "--zero-terminated",
                prefixes=(
                    "-f", "-s", "-w", "--skip-fields=", "--skip-chars=",
                    "--check-chars=", "--all-repeated", "--group",
                ),
            ),
            MaxOperands(
                1,
                "safe_uniq",
                value_flags=frozenset({"-f", "-s", "-w"}),
            ),
        ),
    ),
    Operation.FMT: PolicyDescriptor(
        command="fmt",
        description="Reformat paragraph text.",
        rules=(
            _allow(
                "-c", "--crown-margin", "-s", "--split-only", "-t",
                "--tagged-paragraph", "-u", "--uniform-spacing",
                prefixes=("-w", "-g", "-p", "--width=", "--goal=", "--prefix="),
            ),
        ),
    ),
    Operation.FOLD: PolicyDescriptor(
        command="fold",
        description="Wrap input lines to a width.",
        rules=(
            _allow(
                "-b", "--bytes", "-s", "--spaces",
                prefixes=("-w", "--width="),
            ),
        ),
    ),
    Operation.COLUMN: PolicyDescriptor(
        command="column",
        description="Format input into columns.",
        rules=(
            _allow(
                "-t", "--table", "-x", "--fillrows", "-n", "-e",
                "--table-noextreme", "-J", "--json",
                prefixes=(
                    "-s", "-c", "-o", "-N", "-R", "--separator=",
                    "--output-width=", "--output-separator=",
                    "--table-columns=", "--table-right=",
                ),
            ),
        ),
    ),
    Operation.WC: PolicyDescriptor(
        command="wc",
        description="Count lines, words and bytes.",
        rules=(
            _allow(
                "-l", "--lines", "-w", "--words", "-c", "--bytes", "-m",
                "--chars", "-L", "--max-line-length",
            ),
        ),
    ),
    Operation.CKSUM: PolicyDescriptor(
        command="cksum",
        description="Print CRC checksums and byte counts.",
        rules=(
            _allow(
                "--tag", "--untagged", "--base64", "--raw", "-c", "--check",
                "--quiet", "--status", "--strict", "-w", "--warn", "-z",
                "--zero",
                prefixes=("-a", "-l", "--algorithm=", "--length="),
            ),
        ),
    ),
    Operation.SHA: PolicyDescriptor(
        command="sha256sum",
        description=(
            "Compute message digests. The first argument may name the tool "
            "(sha1sum .. sha512sum, shasum, md5sum, md5); default sha256sum."
        ),
        rules=(
            _allow(
                "-b", "--binary", "-t", "--text", "-c", "--check", "--tag",
                "-z", "--zero", "--quiet", "--status", "-w", "--warn",
                "--strict", "--ignore-missing", "-q", "-r",
                prefixes=("-a", "--algorithm="),
            ),
        ),
        command_selector=CommandSelector(choices=SHA_TOOLS, default="sha256sum"),
    ),
    Operation.TAR_LIST: PolicyDescriptor(
        command="tar",
        description="List the members of a tar archive (no extraction).",
        rules=(
            _allow(
                "-t", "-f", "-v", "--list", "-z", "-j", "-J", "-tf",
                "-tvf", "-tzf", "-tzvf", "-tvzf", "-tjf", "-tJf",
            ),
            LeadingFlag("safe_tar_list"),
            RequireFlag(
                ("-t", "--list", "-tf", "-tvf", "-tzf", "-tzvf", "-tvzf", "-tjf", "-tJf"),
                "safe_tar_list requires -t or --list (list) mode",
            ),
            OperandPattern(
                re.compile(r"[^:]*"),
                "remote archive names are not allowed",
            ),
        ),
    ),
    Operation.ZIPINFO: PolicyDescriptor(
        command="zipinfo",
        description="Show detailed information about zip archive members.",
        rules=(
            _allow(
                "-1", "-2", "-s", "-m", "-l", "-v", "-h", "-M", "-t", "-T",
                "-z",
            ),
        ),
    ),
    Operation.UNZIP_LIST: PolicyDescriptor(
        command="unzip",
        description="List the members of a zip archive (requires -l).",
        rules=(
            RequireFlag(("-l",), "safe_unzip_list requires -l (list) mode"),
            _allow("-l", "-v", "-q", "-qq", "-Z", "-C"),
        ),
    ),
    Operation.DU: PolicyDescriptor(
        command="du",
        description="Estimate file space usage.",
        rules=(
            _allow(
                "-a", "--all", "-b", "--bytes", "-c", "--total", "-h",
                "--human-readable", "-k", "-m", "-s", "--summarize", "-x",
                "--one-file-system", "-L", "--dereference", "-P",
                "--no-dereference", "-H", "--apparent-size", "-0", "--null",
                "--si",
                prefixes=(
                    "-d", "--max-depth=", "--exclude=", "--threshold=",
                    "--time", "-t",
                ),
            ),
        ),
    ),
    Operation.DF: PolicyDescriptor(
        command="df",
        description="Report file system disk space usage.",
        rules=(
            _allow(
                "-a", "--all", "-h", "--human-readable", "-H", "--si", "-k",
                "-i", "--inodes", "-l", "--local", "-P", "--portability",
                "-T", "--print-type", "--total",
                prefixes=("-t", "-x", "--type=", "--exclude-type=", "--output"),
            ),
        ),
    ),
    Operation.ENV: PolicyDescriptor(
        command="env",
        description="Print the environment of the gateway process.",
        rules=(
            _allow("-0", "--null"),
            NoOperands("safe_env", "operands would run a program"),
        ),
    ),
    Operation.ID: PolicyDescriptor(
        command="id",
        description="Print user and group identity.",
        rules=(
            _allow(
                "-u", "--user", "-g", "--group", "-G", "--groups", "-n",
                "--name", "-r", "--real", "-z", "--zero",
            ),
        ),
    ),
    Operation.UNAME: PolicyDescriptor(
        command="uname",
        description="Print system information.",
        rules=(
            _allow(
                "-a", "--all", "-s", "--kernel-name", "-n", "--nodename",
                "-r", "--kernel-release", "-v", "--kernel-version", "-m",
                "--machine", "-p", "--processor", "-i",
                "--hardware-platform", "-o", "--operating-system",
            ),
        ),
    ),
    Operation.DATE: PolicyDescriptor(
        command="date",
        description="Print the date. Setting the clock is refused.",
        rules=(
            _allow(
                "-u", "--utc", "--universal", "-R", "--rfc-email",
                prefixes=(
                    "-I", "--iso-8601", "--rfc-3339=", "--date=",
                    "--reference=",
                ),
            ),
            OperandPattern(
                re.compile(r"\+.*", re.DOTALL),
                "only +FORMAT operands are allowed",
            ),
        ),
    ),
    Operation.PS: PolicyDescriptor(
        command="ps",
        description="Report a snapshot of current processes.",
        rules=(
            _allow(
                "-e", "-A", "-a", "-d", "-f", "-F", "-l", "-j", "-H", "-w",
                "-ww", "-x", "-ef", "-eF", "-ely", "-aux", "--forest",
                "--no-headers", "--headers",
                prefixes=(
                    "-o", "-p", "-u", "-U", "-g", "-G", "-C", "-t",
                    "--sort=", "--pid=", "--ppid=", "--user=", "--format=",
                    "-O",
                ),
            ),
        ),
    ),
    Operation.UPTIME: PolicyDescriptor(
        command="uptime",
        description="Show how long the system has been running.",
        rules=(
            _allow("-p", "--pretty", "-s", "--since"),
            NoOperands("safe_uptime"),
        ),
    ),
    Operation.FIND: PolicyDescriptor(
        command="find",
        description=(
            "Search for files. Actions that execute, delete or write "
            "(-exec, -ok, -delete, -fprint, ...) are refused."
        ),
        rules=(TokenDenylist(MUTATION_TOKENS),),
    ),
    Operation.GIT: PolicyDescriptor(
        command="git",
        description=(
            "Read-only git queries: " + ", ".join(GIT_SUBCOMMANDS) + "."
        ),
        rules=(
            SubcommandAllowlist("git", GIT_SUBCOMMANDS),
            TokenDenylist(frozenset({"--ext-diff"})),
            PrefixDenylist(("--output",), "writing output files is not allowed"),
        ),
        environment=MappingProxyType(
            {"GIT_OPTIONAL_LOCKS": "0", "GIT_TERMINAL_PROMPT": "0"}
        ),
    ),
    Operation.JQ: PolicyDescriptor(
        command="jq",
        description="Query and format JSON.",
        rules=(
            _allow(
                "-r", "--raw-output", "-j", "--join-output", "-c",
                "--compact-output", "-n", "--null-input", "-e",
                "--exit-status", "-s", "--slurp", "-S", "--sort-keys", "-C",
                "--color-output", "-M", "--monochrome-output", "-a",
                "--ascii-output", "-R", "--raw-input", "--tab", "--arg",
                "--argjson", "--slurpfile", "--rawfile", "--args",
                "--jsonargs", "--seq", "--stream", "-f", "--from-file",
                prefixes=("--indent",),
            ),
        ),
    ),
    Operation.YQ: PolicyDescriptor(
        command="yq",
        description="Query and format YAML. In-place editing is refused.",
        rules=(
            _allow(
                "-r", "--unwrapText", "-e", "--exit-status", "-j",
                "-P", "--prettyPrint", "-C", "--colors", "-M", "--no-colors",
                "-N", "--no-doc", "-n", "--null-input",
                prefixes=(
                    "-o", "-p", "-I", "--output-format=", "--input-format=",
                    "--indent=",
                ),
            ),
        ),
    ),
    Operation.HEXDUMP: PolicyDescriptor(
        command="hexdump",
        description="Display file contents in hexadecimal.",
        rules=(
            _allow(
                "-b", "-c", "-C", "--canonical", "-d", "-o", "-x", "-v",
                prefixes=("-n", "-s", "-e", "--length=", "--skip="),
            ),
        ),
    ),
    Operation.XXD: PolicyDescriptor(
        command="xxd",
        description="Make a hex dump to stdout. Reverse mode is refused.",
        rules=(
            _allow(
                "-a", "-b", "-C", "-E", "-e", "-i", "-p", "-ps", "-u", "-d",
                prefixes=("-c", "-g", "-l", "-o", "-s", "-n"),
            ),
            MaxOperands(
                1,
                "safe_xxd",
                value_flags=frozenset({"-c", "-g", "-l", "-o", "-s", "-n"}),
            ),
        ),
    ),
    Operation.OD: PolicyDescriptor(
        command="od",
        description="Dump files in octal and other formats.",
        rules=(
            _allow(
                "-a", "-b", "-c", "-d", "-f", "-i", "-l", "-o", "-s", "-x",
                "-v", "--output-duplicates",
                prefixes=(
                    "-A", "-j", "-N", "-t", "-w", "--address-radix=",
                    "--skip-bytes=", "--read-bytes=", "--format=", "--width",
                ),
            ),
        ),
    ),
    Operation.TREE: PolicyDescriptor(
        command="tree",
        description="List directory contents as a tree.",
        rules=(
            _allow(
                "-a", "-d", "-f", "-i", "-l", "-x", "-s", "-h", "--si",
                "-D", "-F", "-p", "-u", "-g", "-C", "-n", "-J", "-X",
                "--noreport", "--dirsfirst", "--prune",
                # tree walks short-option clusters letter by letter, so a
                # value option only takes its value as the next token
                "-L", "-P", "-I", "--filelimit", "--charset",
                prefixes=("--filelimit=", "--charset="),
            ),
        ),
    ),
    Operation.SW_VERS: PolicyDescriptor(
        command="sw_vers",
        description="Print macOS version information.",
        rules=(NoArguments("safe_sw_vers"),),
    ),
}

CATALOGUE: Mapping[Operation, PolicyDescriptor] = MappingProxyType(_CATALOGUE)


def lookup(name: str) -> tuple[Operation, PolicyDescriptor]:
    """Resolve a wire name to its operation and descriptor.

    Raises:
        UnknownOperationError: If `name` is not in the catalogue
    """
    try:
        operation = Operation(name)
    except ValueError:
        raise UnknownOperationError(name) from None
    return operation, CATALOGUE[operation]


def operation_names() -> list[str]:
    """Catalogue names in announcement order."""
    return [operation.value for operation in Operation]
