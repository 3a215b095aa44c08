# shell42

A small interactive command shell for POSIX systems. It reads command lines,
runs builtins or external programs, and supports:

- command sequences separated by `;`
- conditional chains with `&&` and `||`
- pipelines with `|`
- redirections `>`, `>>` and `<` (`<<` reads from a file, like `<`)
- the builtins `cd`, `env`, `setenv`, `unsetenv`, `echo`, `exit`,
  `alias` and `history`
- history expansion with `!N`
- aliases that are expanded (and the expanded line printed) before a line is run

A command word selects the first builtin whose name it begins, in the order
`exit`, `env`, `unsetenv`, `alias`, `setenv`, `cd`, `history`, `echo`; so `e`
alone runs `exit`. Other words are looked up in the directories of `PATH`.

## Installation

```
pip install .
```

## Usage

Start the interactive shell:

```
shell42
```

When standard input is a terminal, a coloured prompt shows the last component
of the current directory (`~` in your home directory) and turns red after a
failing command; at the end of input it prints `exit` and exits with status 0.
Commands can also be piped in:

```
echo "ls -l | wc -l" | shell42
```

With piped input the shell exits with the status of the last command. Started
with any command-line argument, `shell42` exits at once with status 84.

### Examples

```
-> ~: setenv GREETING hello
-> ~: env
-> ~: echo -n no newline
-> ~: echo $?
-> ~: cd /tmp && ls > listing.txt
-> ~: false || echo recovered
-> ~: alias ll ls -l
-> ~: history
-> ~: !3
```

`unsetenv '*'` removes every variable; `cd -` returns to the previous
directory and `cd ~` or `cd` alone goes to `HOME`. `exit N` exits with status
N, which must be a run of decimal digits.

History is kept in `/tmp/.42sh_history.txt`; `history -c` clears it and
`history -h` prints it without line numbers.

## Using it from Python

The shell can be driven programmatically through `shell42.shell.Shell`:

```python
import io
from shell42.shell import Shell

out = io.StringIO()
shell = Shell({"PATH": "/bin:/usr/bin"}, io.StringIO(""), out, io.StringIO())
shell.run_line("echo hello; setenv NAME value")
print(out.getvalue())
```

`Shell.run_line` runs one line and returns the last status; `Shell.loop`
reads lines from the shell's input until end of input or `exit`. An `exit`
builtin raises `shell42.builtins.ShellExit`, which `loop` turns into its
return value.

Helpers in `shell42.textutils`, `shell42.environment` (`Environment`,
`setenv_command`, `unsetenv_command`), `shell42.aliases` (`AliasTable`),
`shell42.history` (`History`), `shell42.redirect` (`parse_redirections`,
`Redirections`) and `shell42.executor` (`run_command`, `run_pipeline`) can be
used on their own. `shell42.variables.VariableStore` keeps `NAME=value`
assignments and resolves `$name` references.

## What it does not do

- No quoting: quote characters are not grouped into words; `echo` drops them.
- No variable expansion other than `$?` in `echo`; `NAME=value` lines are not
  stored by the interactive shell (`VariableStore` is only available from
  Python).
- No here-documents, globbing, background jobs, job control or scripting
  (if, loops, functions).
- No Ctrl-C handling at the prompt.

## Running the tests

```
pip install .[test]
pytest
```