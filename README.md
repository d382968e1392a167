# minishell

The front half of a small POSIX-style shell, as a Python library. It checks a
command line, cuts it into tokens, expands variables and builds a syntax tree
ready to be run. The library has no dependencies beyond the standard library.

## What it covers

- **Syntax checking** (`minishell.lexer`). `check_syntax(text)` returns True
  for an acceptable line and raises `ShellSyntaxError` otherwise. Unbalanced
  parentheses, unclosed quotes, bad `${...}` substitutions, and misplaced
  operators such as `| |`, `&& ||` or a trailing `>` are all rejected.
  `check_parentheses_balance` and `check_parenthesis_group` run the
  parenthesis checks on their own.
- **Tokenizing** (`minishell.tokenizer`, `minishell.tokens`). `tokenize(text)`
  returns a list of `Token` objects. Each token has a `TokenType`: a word, `|`,
  `<`, `>`, `>>`, `<<`, `&&`, `||`, `(` or `)`. Each token also records how
  it was quoted (`quote_type`: 0 for unquoted, 1 for single quotes, 2 for
  double quotes) and whether it must be joined to the token that follows it.
  `classify(value, quote_type)` gives the type of a single piece of text.
- **Expansion** (`minishell.variables`, `minishell.words`).
  `expand_variables(tokens, env, exit_status, heredoc)` replaces `$NAME` and
  `$?` in words that are not single-quoted. It leaves the delimiter after
  `<<` alone. Outside heredoc mode it also splits unquoted words on blanks
  and replaces a standalone `~` or a leading `~/` with `HOME` from `env`.
  Finally it joins adjacent pieces of one word. The steps are also available
  on their own as `split_words`, `expand_tilde` and `join_tokens`.
  `match(pattern, name)` matches `*` patterns, where `*` never crosses `/`.
- **Syntax trees** (`minishell.syntax_tree`). `build_tree(tokens)` groups
  simple commands with their arguments and redirections. It then orders the
  operators by precedence: `|` binds tighter than `&&` and `||`, and
  parentheses group. The result is a tree of `CommandNode` (with `args`,
  `redirections` and `cmd`) and `OperatorNode` (with `type`, `left` and
  `right`). `iter_redirections(tree)` yields every `Redirection` from left
  to right.
- **Here-documents** (`minishell.heredoc`). `prepare_heredocs` reads the body
  of every `<<` in a tree from an iterable of lines. Lines are expanded
  unless the delimiter was quoted. Each prepared body is stored as a readable
  file descriptor in the redirection's `fd`. `collect_heredoc` and
  `open_heredoc` handle a single body.
- **Parsing in one step** (`minishell.parser`). `parse(text, env,
  exit_status)` tokenizes, expands and builds the tree, and returns None when
  nothing results. `parse_command_line` adds the syntax check first. It
  returns None for a blank line, and raises `ShellSyntaxError` with status 2
  when no tree can be built. `is_blank(text)` tells whether a line holds only
  whitespace.

## Usage

```python
from minishell.lexer import ShellSyntaxError, check_syntax
from minishell.parser import parse, parse_command_line

env = {"HOME": "/home/user", "NAME": "world"}

try:
    check_syntax("echo hello | | cat")
except ShellSyntaxError as err:
    print("syntax error:", err.message, err.status)

tree = parse("echo $NAME > out.txt && cat out.txt", env, 0)
tree = parse_command_line("(ls || echo none) | wc -l", env, 0)
```

The individual stages:

```python
from minishell.tokenizer import tokenize
from minishell.words import match
from minishell.syntax_tree import build_tree, iter_redirections

tokens = tokenize("ls *.py | wc -l")
print([token.value for token in tokens])

print(match("*.py", "setup.py"))   # True
print(match("*.py", "README.md"))  # False

tree = build_tree(tokenize("sort < in.txt > out.txt"))
for redirection in iter_redirections(tree):
    print(redirection.type, redirection.filename)
```

Here-documents are filled from an iterable of input lines:

```python
import os

from minishell.heredoc import HeredocInterrupted, prepare_heredocs

tree = parse("cat << EOF", env, 0)
try:
    for redirection in prepare_heredocs(tree, iter(["hello $NAME", "EOF"]), env, 0):
        print(os.read(redirection.fd, 100))  # b'hello world\n'
        os.close(redirection.fd)
except HeredocInterrupted as exc:
    print("here-document cancelled", exc.status)
```

The caller owns the prepared descriptors and closes them once they are done.

## Exit statuses

Syntax errors found by `check_syntax` carry status 258. A line that passes
the check but yields no tree carries status 2. An interrupted
here-document carries status 130.

## What it does not do

This package stops at the syntax tree. It does not run commands, start
processes, build pipelines, apply redirections to the standard streams, or
provide built-in commands such as `cd` or `export`. It has no interactive
prompt and installs no command. `match` checks a single name against a
pattern; expanding `*` against the files in a directory is left to the
caller.