"""Build support command: generates source files holding file contents or
a version string, and inserts notice headers into source files."""

from __future__ import annotations

import argparse
import contextlib
import json
import os
import stat
import subprocess
import sys
from typing import Iterator, Optional, Sequence, TextIO

from .xlog import Logger

VERSION = "v0.5.11"

USAGE = """xb <command>

xb is a build support tool.

  xb help         -- prints this message
  xb version-file -- generates go file with version information
  xb cat          -- generates go file that includes the given text files
  xb copyright    -- adds copyright statements to relevant files
  xb version      -- prints version information for xb
"""

CAT_USAGE = """xb cat [options] <id>:<path>...

This xb command puts the contents of the files given as relative paths to
the GOPATH variable as string constants into a go file.

   -h  prints this message and exits
   -p  package name (default main)
   -o  file name of output

"""

COPYRIGHT_USAGE = """xb copyright [options] <path>....

The xb copyright command adds a copyright remark to all go files below path.

  -h  prints this message and exits
"""

VERSION_FILE_USAGE = """xb version-file [options] <id>:<path>...

The command creates go file with a version constant. The version string
contains the contents of the VERSION environment variable or the output
of git describe.

   -h  prints this message and exits
   -p  package name (default main)
   -o  file name of output

"""

COPYRIGHT_TEXT = """
The terms of use for this file are given
in the LICENSE file of the project.
"""

_log = Logger(None, "xb: ", 0)


def go_comment(text: str) -> str:
    """Turn the non-empty lines of text into // comments and add a blank line."""
    lines = (line.strip() for line in text.splitlines())
    return "".join(f"// {line}\n" for line in lines if line) + "\n"


GO_COPYRIGHT = go_comment(COPYRIGHT_TEXT)


def verify_path(path: str) -> None:
    """Raise if path does not exist or is not a regular file."""
    st = os.stat(path)
    if not stat.S_ISREG(st.st_mode):
        raise ValueError(f"{path} is not a regular file")


class GoPath:
    """Resolves <id>:<path> arguments against a list of root directories."""

    def __init__(self, roots: Optional[Sequence[str]] = None) -> None:
        if roots is None:
            roots = os.environ.get("GOPATH", "").split(":")
        self.roots = list(roots)
        self._counter = 0

    def find(self, arg: str) -> tuple[str, str]:
        """Return the identifier and the resolved path for arg.

        Without an identifier one of the form gocatN is generated. A path
        of "-" stands for standard input.
        """
        ident, sep, path = arg.partition(":")
        if not sep:
            self._counter += 1
            ident, path = f"gocat{self._counter}", arg
        if path == "-":
            return ident, path
        path = path.replace("~", os.environ.get("HOME", ""), 1)
        if os.path.isabs(path):
            candidates = [os.path.normpath(path)]
        else:
            candidates = [
                os.path.normpath(os.path.join(root, "src", path))
                for root in self.roots
            ]
            candidates.append(os.path.normpath(os.path.join(".", path)))
        for candidate in candidates:
            try:
                verify_path(candidate)
            except FileNotFoundError:
                continue
            return ident, candidate
        raise FileNotFoundError(f"file {path} not found")


def read_content(path: str) -> str:
    """Return the text of the file at path; "-" reads standard input."""
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8", errors="surrogateescape") as f:
        return f.read()


def render_constants_file(package: str, constants: dict[str, str]) -> str:
    """Render a source file declaring each constant as a raw string."""
    body = "".join(
        f"const {name} = `{constants[name]}`\n" for name in sorted(constants)
    )
    return f"package {package}\n\n{body}"


def render_version_file(version: str) -> str:
    """Render a source file declaring the version constant."""
    return f'package main\n\nconst version = "{version}"\n'


def add_copyright(path: str) -> None:
    """Replace the leading notice comment of a file by GO_COPYRIGHT.

    An existing header is recognised by "Copyright" in the first line and
    extends up to and including the first blank line.
    """
    _log.printf("adding copyright to %s", path)
    with open(path, encoding="utf-8", errors="surrogateescape", newline="") as src:
        text = src.read()
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    new_path = path + ".new"
    with open(
        new_path, "w", encoding="utf-8", errors="surrogateescape", newline=""
    ) as dst:
        dst.write(GO_COPYRIGHT)
        deleting = False
        for number, line in enumerate(lines, start=1):
            line = line.removesuffix("\r")
            if number == 1 and "Copyright" in line:
                deleting = True
                continue
            if deleting:
                if not line.strip():
                    deleting = False
                continue
            dst.write(line + "\n")
    os.replace(new_path, path)


def walk_copyrights(root: str) -> list[str]:
    """Add notice headers to all .go files below root; return their paths."""

    def _raise(err: OSError) -> None:
        raise err

    done = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            if name.endswith(".go"):
                path = os.path.join(dirpath, name)
                add_copyright(path)
                done.append(path)
    return done


class _ArgParser(argparse.ArgumentParser):
    def __init__(self, prog: str, usage_text: str) -> None:
        super().__init__(prog=prog, add_help=False)
        self._usage_text = usage_text

    def error(self, message: str) -> None:  # type: ignore[override]
        sys.stderr.write(f"{self.prog}: {message}\n")
        sys.stderr.write(self._usage_text)
        raise SystemExit(1)


def _generator_parser(prog: str, usage_text: str) -> _ArgParser:
    parser = _ArgParser(prog, usage_text)
    parser.add_argument("-h", dest="help", action="store_true")
    parser.add_argument("-p", dest="package", default="main")
    parser.add_argument("-o", dest="output", default="")
    parser.add_argument("args", nargs="*")
    return parser


@contextlib.contextmanager
def _open_output(path: str) -> Iterator[TextIO]:
    if not path:
        yield sys.stdout
        return
    try:
        f = open(path, "w", encoding="utf-8", errors="surrogateescape")
    except OSError as err:
        _log.fatal(err)
    with f:
        yield f


def cat(argv: Sequence[str] = ()) -> int:
    """Run the cat command: write file contents as string constants."""
    _log.prefix = "xb cat: "
    opts = _generator_parser("xb cat", CAT_USAGE).parse_args(list(argv))
    if opts.help:
        sys.stdout.write(CAT_USAGE)
        return 0
    if not opts.package:
        _log.fatal("option -p must not be empty")
    with _open_output(opts.output) as out:
        gopath = GoPath()
        constants: dict[str, str] = {}
        for arg in opts.args:
            try:
                ident, path = gopath.find(arg)
                constants[ident] = read_content(path)
            except (OSError, ValueError) as err:
                _log.print(err)
        out.write(render_constants_file(opts.package, constants))
    return 0


def version_file(argv: Sequence[str] = ()) -> int:
    """Run the version-file command: write a file with a version constant."""
    _log.prefix = "xb version-file: "
    parser = _generator_parser("xb version-file", VERSION_FILE_USAGE)
    opts = parser.parse_args(list(argv))
    if opts.help:
        sys.stdout.write(VERSION_FILE_USAGE)
        return 0
    if not opts.package:
        _log.fatal("option -p must not be empty")
    with _open_output(opts.output) as out:
        version = os.environ.get("VERSION", "")
        if not version:
            try:
                result = subprocess.run(
                    ["git", "describe"], capture_output=True, check=True
                )
            except (OSError, subprocess.CalledProcessError) as err:
                _log.fatalf("error %s while executing git describe", err)
            version = result.stdout.decode("utf-8", errors="replace")
        out.write(render_version_file(version.strip()))
    return 0


def copyright(argv: Sequence[str] = ()) -> int:
    """Run the copyright command on the directories given in argv."""
    _log.prefix = "xb copyright: "
    parser = _ArgParser("xb copyright", COPYRIGHT_USAGE)
    parser.add_argument("-h", dest="help", action="store_true")
    parser.add_argument("args", nargs="*")
    opts = parser.parse_args(list(argv))
    if opts.help:
        sys.stdout.write(COPYRIGHT_USAGE)
        return 0
    for path in opts.args:
        try:
            st = os.stat(path)
        except OSError as err:
            _log.print(err)
            continue
        if not stat.S_ISDIR(st.st_mode):
            _log.printf("%s is not a directory", path)
            continue
        try:
            walk_copyrights(path)
        except OSError as err:
            _log.fatalf("%s error %s", path, err)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Dispatch to the xb subcommands; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    _log.prefix = "xb: "
    if not args:
        _log.fatal("to show help, use xb help")
    command, rest = args[0], args[1:]
    if command in ("help", "-h"):
        sys.stdout.write(USAGE)
        return 0
    if command == "version":
        sys.stdout.write(f"xb {VERSION}\n")
        return 0
    commands = {"cat": cat, "version-file": version_file, "copyright": copyright}
    run = commands.get(command)
    if run is None:
        _log.fatalf(
            "command %s not supported", json.dumps(command, ensure_ascii=False)
        )
    return run(rest)


if __name__ == "__main__":
    sys.exit(main())