"""Action shorthand for payload templates.

Payload templates are Jinja2, but actions may also be written as
pipe-style commands:

    {{rand_string 8}}              -> {{rand_string(8)}}
    {{rand_address}}               -> {{rand_address()}}
    {{.wallet}}                    -> {{wallet}}
    {{rand_int 4 12 | rand_string}} -> {{rand_string(rand_int(4, 12))}}

A command is a namespace function followed by literal operands or
`.variable` references. Each pipeline stage receives the previous value
as its last argument. Actions that do not fit this grammar are left
untouched and parsed as ordinary Jinja2 expressions.
"""

import re
from typing import Container, Optional

ACTION_PATTERN = re.compile(r"\{\{(-?)(.*?)(-?)\}\}", re.DOTALL)

TOKEN_PATTERN = re.compile(
    r"""
    \s*(?:
        (?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
      | (?P<number>-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)
      | (?P<field>\.[A-Za-z_]\w*)
      | (?P<ident>[A-Za-z_]\w*)
      | (?P<pipe>\|)
    )
    """,
    re.VERBOSE,
)

BOOLEAN_LITERALS = {"true", "false"}


def _tokenize(body: str) -> Optional[list[tuple[str, str]]]:
    tokens: list[tuple[str, str]] = []
    pos = 0
    body = body.rstrip()
    while pos < len(body):
        match = TOKEN_PATTERN.match(body, pos)
        if match is None:
            return None
        kind = match.lastgroup
        tokens.append((kind, match.group(kind)))
        pos = match.end()
    return tokens


def _split_commands(tokens: list[tuple[str, str]]) -> Optional[list[list[tuple[str, str]]]]:
    commands: list[list[tuple[str, str]]] = [[]]
    for kind, text in tokens:
        if kind == "pipe":
            commands.append([])
        else:
            commands[-1].append((kind, text))
    if any(not command for command in commands):
        return None
    return commands


def _operand(kind: str, text: str) -> Optional[str]:
    if kind in ("string", "number"):
        return text
    if kind == "field":
        return text[1:]
    if kind == "ident" and text in BOOLEAN_LITERALS:
        return text
    return None


def translate_action(body: str, functions: Container[str]) -> Optional[str]:
    """Translate one action body to a Jinja2 expression.

    Returns:
        The expression, or None if the body is not command shorthand
    """
    tokens = _tokenize(body)
    if not tokens:
        return None
    commands = _split_commands(tokens)
    if commands is None:
        return None

    expr: Optional[str] = None
    for index, command in enumerate(commands):
        (head_kind, head), operands = command[0], command[1:]

        if head_kind == "field" and index == 0 and not operands:
            expr = head[1:]
            continue
        if head_kind != "ident" or head not in functions:
            return None

        args = []
        for kind, text in operands:
            arg = _operand(kind, text)
            if arg is None:
                return None
            args.append(arg)
        if expr is not None:
            args.append(expr)
        expr = f"{head}({', '.join(args)})"

    return expr


def expand_shorthand(source: str, functions: Container[str]) -> str:
    """Rewrite every shorthand action in a template string."""

    def _replace(match: re.Match) -> str:
        left, body, right = match.groups()
        expr = translate_action(body, functions)
        if expr is None:
            return match.group(0)
        return f"{{{{{left} {expr} {right}}}}}"

    return ACTION_PATTERN.sub(_replace, source)
