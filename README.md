# xztools

Pure-Python building blocks for the xz container format, together with a
few small utilities: rolling hashes, GNU-style flag parsing, a logger
whose message categories can be switched off, and the `xb` build helper.

The package has no runtime dependencies and needs Python 3.10 or later.

## Modules

| Module                | Contents                                                                                         |
|-----------------------|--------------------------------------------------------------------------------------------------|
| `xztools.bits`        | `put_uint32_le`, `put_uint64_le`, `uint32_le`, `put_uvarint`, `read_uvarint`, `UvarintOverflowError` |
| `xztools.checksums`   | `CRC32` (IEEE), `CRC64` (ECMA) with little-endian digests, and `crc64(data)`                      |
| `xztools.format`      | `Check`, `Header`, `Footer`, `Record`, `valid_header`, `write_index`, `read_index_body`, `read_record`, `FormatError` |
| `xztools.rollinghash` | `CyclicPoly`, `RabinKarp`, the `Roller` protocol and `hashes(roller, data)`                       |
| `xztools.groupreader` | `GroupReader`, which formats a byte stream into groups of five characters                        |
| `xztools.term`        | `is_terminal(fd)` for a file descriptor or an object with `fileno()`                             |
| `xztools.xlog`        | `Logger`, `LogFlag`, `LoggerPanic` and module-level functions using a standard logger            |
| `xztools.flagvalues`  | Flag value classes (`BoolValue`, `IntValue`, `StringValue`, `PresetValue`), `parse_bool`, `parse_int`, usage lines |
| `xztools.gflag`       | `FlagSet`, `Flag`, `HasArg`, `ErrorHandling`, `FlagError`                                        |
| `xztools.xb`          | The `xb` command                                                                                 |

## Installation

```
pip install xztools
```

To run the tests:

```
pip install "xztools[test]"
pytest
```

## Examples

### Uvarints

```python
import io
from xztools.bits import put_uvarint, read_uvarint

encoded = put_uvarint(0x100000000)
value, consumed = read_uvarint(io.BytesIO(encoded))
```

`read_uvarint` raises `EOFError` if the data ends early and
`UvarintOverflowError` if the value does not fit into 64 unsigned bits.

### Checksums

```python
from xztools.checksums import CRC32, CRC64

crc = CRC32()
crc.update(b"The quick brown fox jumps over the lazy dog.\n")
print(crc.value(), crc.digest().hex())   # digest is 4 little-endian bytes

h = CRC64()
h.update(b"hello")
print(h.digest().hex())                  # digest is 8 little-endian bytes
```

### Stream header, footer and index

```python
import io
from xztools.format import Check, Footer, Header, Record, read_index_body, valid_header, write_index

data = Header(Check.CRC32).to_bytes()        # 12 bytes
assert valid_header(data)
assert Header.from_bytes(data).flags == Check.CRC32

footer = Footer(index_size=64, flags=Check.CRC32)
assert Footer.from_bytes(footer.to_bytes()) == footer

buf = io.BytesIO()
records = [Record(1234, 1), Record(2345, 2)]
written = write_index(buf, records)          # includes the 0x00 indicator
buf.seek(1)                                  # skip the indicator
read_back, consumed = read_index_body(buf, len(records))
```

Invalid structures raise `FormatError`.

### Rolling hashes

```python
from xztools.rollinghash import CyclicPoly, RabinKarp, hashes

values = hashes(CyclicPoly(4), b"abcde")     # one hash per 4-byte window
values = hashes(RabinKarp(4), b"abcde")
```

### Flag parsing

```python
from xztools.gflag import ErrorHandling, FlagSet

fs = FlagSet("demo", ErrorHandling.CONTINUE_ON_ERROR)
verbose = fs.counter("verbose", "v", 0, "more output")
level = fs.preset(0, 9, 6, "compression preset")
fs.parse(["-vvv", "-9", "input.txt"])
print(verbose.value, level.value, fs.args())  # 3 9 ['input.txt']
```

On a parse error the message and the usage are written to the set's
output; then `FlagError` is raised, the program exits with status 2, or
`RuntimeError` is raised, according to the set's `ErrorHandling`.

### Logging

```python
import sys
from xztools.xlog import LogFlag, Logger

log = Logger(sys.stderr, "demo: ", LogFlag.NODEBUG)
log.warnf("%s not found", "file.txt")
log.debug("suppressed")
```

`fatal*` methods exit with status 1 and `panic*` methods raise
`LoggerPanic`, even when their output is suppressed by `NOFATAL` or
`NOPANIC`.

## The `xb` command

```
xb help
xb version
xb version-file -o version.go
xb cat -p main -o licenses.go LICENSE:path/to/LICENSE
xb copyright path/to/sources
```

- `xb help` prints the list of commands; `xb version` prints `xb v0.5.11`.
- `xb version-file` writes a Go source file declaring a `version`
  constant in package `main`. The value is taken from the `VERSION`
  environment variable, or from the output of `git describe` when that is
  unset. Without `-o` the file goes to standard output.
- `xb cat` writes a Go source file (package set by `-p`, default `main`)
  holding the contents of the named files as string constants, sorted by
  name. Each argument is `id:path`, or just a path, in which case the
  constant is named `gocat1`, `gocat2`, and so on. Relative paths are
  looked up below `src` in every entry of `GOPATH` and then in the current
  directory; a `~` is replaced by `HOME`; `-` reads standard input.
- `xb copyright` walks the given directories and puts a notice comment at
  the top of every `.go` file. If the first line of a file contains
  "Copyright", that line and the lines after it up to the first blank line
  are replaced.

Each subcommand accepts `-h` for help.

## What this package does not do

It does not compress or decompress data. There is no LZMA or LZMA2
codec, no block header or filter handling, no reader or writer for
complete `.xz` streams, and no compression command. The package provides
the container-level pieces listed above only.