# shelltools

Small command-line utilities for everyday work in the shell. Install the
package and each tool is available as its own command.

```
pip install .
```

Python 3.11 or later is required. The only third-party dependency is
`tomli-w`, used to write TOML files.

## Commands

### `ctc`: characters to code points and back

```
ctc hello          # one line per character: "h: 104", ...
ctc "104,105"      # prints the characters for those code points: "h i "
ctc -1 hello       # terse output (code points only), handy in pipes
```

An argument made only of digits, spaces and commas is read as a list of
code points; anything else is split into characters. With `-1` as the first
argument, code-point lists are printed prefixed by the argument itself and
characters are printed as bare numbers.

### `gs`: compact git status

Runs `git status` in the current directory and prints the branch name
followed by coloured markers: `ü` clean tree, `+` untracked files, `→`
staged changes, `↑` ahead, `↓` behind, `↓↑` diverged and `*` unstaged
changes. No newline is printed, so it fits in a shell prompt.

### `lsr`: recursive listing

```
lsr            # lists every path under the current directory
lsr src docs   # lists every path under each argument
```

Directories are printed with a trailing `/`, and each entry with the path
of the directories above it.

### `filstu`: collect files

```
filstu         # walks ./src
filstu docs    # walks docs
```

Prints a bracketed list of every file found beneath the directory.

### `dirsize`: total size of files

```
dirsize build dist
```

Adds up the sizes of all files under the given paths and prints the total.
The unit changes only once the total passes ten of the next unit: bytes
(`b`), then `Kib`, `Mib` and `Gib` with two decimals. Files whose size
cannot be read are skipped.

### `fpwd` and `fpwd-daemon`: prettified working directory

`fpwd` prints `$PWD` after applying a list of text replacements, then turns
every literal `\e` in the result into an escape character so colours can be
added.

The replacements are read from the file named by `FPWDRS_CONFIG`, or
`~/.config/fpwd.lsp`. Without a readable file, your home directory is
replaced by `~`. The file is a list of edits written as s-expressions; each
edit replaces `from` with `to`, at most `replace_n` times (999 when left
out):

```
(((from . "/home/me") (to . "~"))
 ((from . "/projects") (to . "\\e[34mP\\e[0m") (replace_n . 1)))
```

Inside a string, `\\` stands for one backslash, so write `\\e` to get the
`\e` that becomes an escape character.

`fpwd-daemon` serves the same formatting over a Unix socket named by
`FPWDRS_SOCKET_NAME`: each connection sends a path, closes its writing
side, and receives the formatted path back.

### `tmpl`: project templates

```
tmpl rust myproject extra args
```

Runs `<name>.sh` from the template directory (`TMPLRS_DIR`, or
`~/Templates/tmpl-rs/`) with `bash`, passing the remaining arguments.

### `linefilter`: filter lines from standard input

```
some-command | linefilter ^error
some-command | linefilter and[ +disk -tmp ]
```

Each pattern is a mode character followed by the text to match:

| mode      | keeps lines that             |
|-----------|------------------------------|
| `=`       | equal the pattern            |
| `^` / `s` | start with it                |
| `$` / `z` | end with it                  |
| `+` / `h` | include it                   |
| `-` / `e` | do not include it            |
| `.` / `r` | match it as a regex          |
| `?` / `g` | match it as a glob           |

Prefix a mode with `i` to invert it. Group filters with `and[ ... ]`,
`or[ ... ]` and `not[ ... ]` (one filter inside `not[`), each bracket as its
own argument. Run with no arguments to see the help text.

### `calview`: month calendar with events

Prints the current month with today highlighted and the days that have
events marked, followed by today's events. Month and weekday names and the
events come from a TOML file: `CAL_RS_USERFILE`, or `~/.config/cal-rs.toml`.

```toml
months = ["January", "February", "March", "April", "May", "June", "July",
          "August", "September", "October", "November", "December"]
weekdays = ["sun", "mon", "tue", "wed", "thu", "fri", "sat"]

[[events]]
[events.Single]
description = "Dentist"
year = 2024
month = "Jun"
day = 25

[[events]]
[events.Yearly]
description = "Birthday"
months = ["Mar"]
day = 14

[[events]]
[events.YearlyByWeekday]
description = "Gym"
months = ["Jan", "Feb"]
days = ["Mon", "Thu"]
```

Months are written `Jan` to `Dec` and weekdays `Sun` to `Sat`. A
`YearlyByWeekday` event matches a day of the month when that day modulo 7
equals the weekday's number (`Sun` is 0).

### `rehan` and `rehan-prepare`: file templates

```
rehan-prepare notes.md          # creates notes.rehan.md
rehan notes.rehan.md title:Hello 42
```

A template starts with directive lines ended by a `#done` line; the rest is
the body, where `{name}` is replaced by a variable and `{{` / `}}` stand for
literal braces. Directives:

- `#filename <expr>` sets the output file name from a format expression
- `#input <name> [transforms]` takes the input called `name`, or else the
  next positional one
- `#format <name> <expr>` defines a variable from a format expression
- `#set <name> <from> <transforms>` copies a variable through transforms
- `#comment ...` and `#! ...` are ignored

Inputs come from the command line either as `name:value` or positionally.
Transforms are written in brackets, for example
`[UpperCaseFirst][IsGreaterThan(10)]`: `UpperCaseFirst`, `AllUpperCase`,
`AllLowerCase`, `IsInt`, `IsNumber`, `IsSmallerThan(n)`, `IsGreaterThan(n)`
and `IsNumberInRange(a, b)`. A failed check stops with an error. The result
is written to a new file named by `#filename`; an existing file is never
overwritten.

`rehan-prepare` turns ordinary files into templates by doubling their braces
and adding a `#done` line; it too refuses to overwrite an existing file.

### `shtest`: shell command tests

```
shtest checks.test
shtest              # runs every *.test file in the current directory
```

Each test is written as

```
`name` `command` code in`input` out`stdout` err`stderr`
```

where everything except the command is optional; the exit code defaults to
0 and the streams to empty. Every test is run with `/bin/sh` and reported as
passed, or with the first check that failed (exit code, stdout, stderr) and
what was expected and got.

### `rot`: tiny graph language

```
rot graph.rot dot       # Graphviz source
rot graph.rot rot       # nodes and links with their properties
rot graph.rot svg       # renders through the Graphviz `dot` program
```

The last argument is the output format; the ones before it are input files,
all added to the same graph. Nodes are names, `[a, b]` is a group of nodes,
`->` links them and `{key: "value"}` attaches properties to the item before
it. `#` starts a comment. Any format other than `rot` and `dot` is passed to
`dot -T<format>`, which must be installed.

### `runner`: run the right commands for the current directory

```
runner              # run the first matching scope
runner -v           # only print which scope would run
runner -c my.cfg    # use another configuration file
runner -h           # help
```

Reads `~/.config/runner.cfg` (or the file given with `-c`). The file holds
scopes:

```
[rust]
has=Cargo.toml
exec=cargo build
env=RUST_LOG debug

[make]
has=Makefile:makefile
findAny=main.c:src/main.c
exec=make
```

`has` values are alternatives separated by `:`, and each `has` line must
have at least one existing path. If `findAny` is set, one of its paths must
exist; the first one found is given to the commands as `$found`. The first
scope that passes runs its `exec` commands one by one with `/bin/sh`, with
the `env` variables set. Values of `exec` and `findAny` are split on `:`.

### `todos`: folders of to-do entries

```
todos -f work -a work "write report" "#urgent"
todos -d work "write report"
todos -df work
```

| option              | does                                              |
|---------------------|---------------------------------------------------|
| `-f FOLDER`         | create (or empty) a folder                        |
| `-a FOLDER VALUE [#META]` | add an entry, with metadata if the next word starts with `#` |
| `-d FOLDER VALUE`   | delete the first entry with that value            |
| `-df FOLDER`        | delete an empty folder                            |
| `-Df FOLDER`        | delete a folder and its entries                   |
| `-l FOLDER`         | accepted; the listing is printed at the end anyway |
| `--file PATH`       | save, then switch to another file for the rest of the command line |
| `--scan FILES...`   | print the to-do comments found in files           |

Entries are stored in `~/.todos.toml` (or `TODOS_RS`). After all commands
run, the data is saved and every folder is printed as Markdown. A user
error (missing folder or value, non-empty folder) saves what was done so
far, prints a warning and exits with status 2.

`--scan` uses a TOML table of file extension to regular expression, read
from `TODOS_RS_SCANCONF` or `~/.config/.todos_scanner.toml`.

## Limitations

- `todos --scan` only prints the matches it finds; it does not add them as
  entries. There are no commands to edit an existing entry or its metadata.
- `ctc` reads only its arguments, not standard input.
- `gs` reads the text output of `git status` in English; it does not inspect
  the repository itself.

## Library use

The pieces behind the commands are importable too, for example
`shelltools.linefilter.parse`, `shelltools.graph.Graph`,
`shelltools.rotparse.parse` with `shelltools.rotbuild.build` and
`shelltools.rotexport.to_dot`, `shelltools.tree.read_dir` with
`shelltools.tree.render_tree`, or `shelltools.template_parse.parse_doc`
followed by `RawDocument.format`.

## Running the tests

```
pip install .[test]
pytest
```