# clopt

A small command-line option parser. You describe each option once as an
`OptionBlock` (short name, long name, argument requirement, help text and a
callback). The parser walks `argv`, calls each option's callback as it finds
the option, and returns the index of the first non-option argument. The same
list of blocks also produces the help text, so nothing is written twice.

## Describing options

```python
from clopt.options import ArgRequirement, OptionBlock

def set_verbose(ctx):
    ctx.user["verbose"] = True
    return 0

def set_logfile(ctx):
    ctx.user["logfile"] = ctx.opt_arg or "/var/log/default.log"
    return 0

blocks = [
    OptionBlock(set_verbose, short_opt="v", long_opt="verbose",
                help_text="Be verbose"),
    OptionBlock(set_logfile, has_arg=ArgRequirement.OPTIONAL_ARG,
                short_opt="l", long_opt="logfile",
                help_text="Enable logging.\nPARAM names the logfile"),
]
```

An `OptionBlock` needs a callable, and at least one of `short_opt` (a single
character) or `long_opt` (a non-empty string); otherwise it raises
`TypeError` or `ValueError`. The optional `id` lets several blocks share one
callback and tell themselves apart.

A callback receives an `OptionContext` holding `argv`, the current
`argv_index`, the option argument `opt_arg` (`None` when none was given), the
whole block list `blocks`, the block that matched `current_block` and your
`user` object; `argc` and `program_name` are available as properties. The
callback returns `0` or `None` on success, a positive number to mark the
parse as failed while parsing goes on, or a negative number to stop parsing
at once.

Argument requirements (`ArgRequirement`):

- `NO_ARG` – a plain flag: `-v`, `--verbose`; short flags may be grouped, `-abc`.
- `REQUIRED_ARG` – `-i 5`, `-i5`, `--integer 5`.
- `OPTIONAL_ARG` – the argument is introduced by `=`: `-l=FILE`, `-l= FILE`,
  `-l =FILE`, `-l = FILE`, `--logfile=FILE`, `--logfile= FILE`,
  `--logfile =FILE`, `--logfile = FILE`. Without `=` the callback is called
  with `opt_arg` set to `None`.

A word that starts with `-` followed by a digit counts as a negative number,
not as an option, and ends the option list. A lone `-` or `--` is an error,
not an end-of-options marker.

## Parsing

```python
from clopt.parser import parse_options, parse_options_at

settings = {}
index = parse_options(["prog", "-v", "--logfile=out.log", "input.txt"],
                      blocks, settings)
# index == 3, settings == {"verbose": True, "logfile": "out.log"}
```

`parse_options` starts at index 1, for the classic order of options followed
by operands. `parse_options_at(offset, ...)` starts at any index, so options
and operands can be mixed by calling it again after each operand. Both return
`len(argv)` when no operand follows.

Unknown options and missing arguments are written to `stderr` (default
`sys.stderr`; in bold red when the stream is a terminal). Unknown options are
all reported before parsing gives up; missing arguments and negative callback
results stop it at once. In every failing case `OptionParseError` (a
`ValueError`) is raised. A negative `offset` raises `ValueError`.

## Help text

```python
from clopt.options import format_option, format_option_list, print_option_list

print_option_list(blocks)          # writes to stdout, or to a given stream
text = format_option_list(blocks)
format_option(blocks[1])           # "-l [=PARAM], --logfile [=PARAM]"
```

Each entry of the list appears as `  -l [=PARAM], --logfile [=PARAM]`
followed by its help text on tab-indented lines and a blank line.

## Demo

The package installs a small demo program, `clopt-demo`, that accepts
options and operands in any order:

```
clopt-demo -a -c --logfile=run.log -i 42 file1 file2
clopt-demo --help
```

It lists each operand, then reports the logfile (`-l`/`--logfile`, with a
default when no file is named), the flags `-a`, `-b`, `-c` and the integer
given with `-i`/`--integer`. From Python, `clopt.demo.run_mixed(argv)` and
`clopt.demo.run_classic(argv)` (options first, then operands) run the same
program and return its exit code.