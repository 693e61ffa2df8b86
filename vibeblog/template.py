"""Minimal placeholder and repeated-block templates.

Supported tags:

``{{name}}``
    Replaced by ``data[name]``. Names missing from ``data`` pass through
    literally.
``{{#name}}...{{/name}}``
    Repeated once per element of ``data[name]`` when it is a list or tuple,
    with ``{{.}}`` bound to the element. Anything else renders as nothing.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

TAG_RE = re.compile(r"\{\{(?P<sigil>[#/]?)(?P<name>\.|\w+)\}\}")
DOT = "."


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Var:
    name: str
    raw: str


@dataclass(frozen=True)
class Section:
    name: str
    children: tuple


Node = Union[Text, Var, Section]


@dataclass(frozen=True)
class Token:
    kind: str  # "text", "var", "open" or "close"
    name: str
    raw: str


def tokenize(template: str) -> list[Token]:
    tokens: list[Token] = []
    pos = 0
    for match in TAG_RE.finditer(template):
        if match.start() > pos:
            tokens.append(Token("text", "", template[pos : match.start()]))
        sigil = match.group("sigil")
        name = match.group("name")
        raw = match.group(0)
        if sigil and name == DOT:
            tokens.append(Token("text", "", raw))
        elif sigil == "#":
            tokens.append(Token("open", name, raw))
        elif sigil == "/":
            tokens.append(Token("close", name, raw))
        else:
            tokens.append(Token("var", name, raw))
        pos = match.end()
    if pos < len(template):
        tokens.append(Token("text", "", template[pos:]))
    return tokens


def _parse(tokens: list[Token], index: int, open_names: tuple) -> tuple[list[Node], int, bool]:
    """Parse until the close tag of ``open_names[-1]``.

    Returns ``(nodes, next_index, closed)``. When an enclosing section's close
    tag shows up first, or the tokens run out, ``closed`` is False and the
    caller demotes its opening tag to literal text.
    """
    nodes: list[Node] = []
    current = open_names[-1] if open_names else None
    while index < len(tokens):
        token = tokens[index]
        if token.kind == "text":
            nodes.append(Text(token.raw))
        elif token.kind == "var":
            nodes.append(Var(token.name, token.raw))
        elif token.kind == "close":
            if token.name == current:
                return nodes, index + 1, True
            if token.name in open_names:
                return nodes, index, False
            nodes.append(Text(token.raw))
        else:
            children, after, closed = _parse(tokens, index + 1, open_names + (token.name,))
            if closed:
                nodes.append(Section(token.name, tuple(children)))
            else:
                nodes.append(Text(token.raw))
                nodes.extend(children)
            index = after
            continue
        index += 1
    return nodes, index, False


def parse(template: str) -> list[Node]:
    nodes, _, _ = _parse(tokenize(template), 0, ())
    return nodes


def to_text(value: Any) -> str:
    if value is None or value is False:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    return str(value)


def _evaluate(nodes, data: Mapping[str, Any], item: Optional[list], out: list[str]) -> None:
    # ``item`` is a one-element list holding the current block element, or None
    # outside of any block.
    for node in nodes:
        if isinstance(node, Text):
            out.append(node.value)
        elif isinstance(node, Var):
            if node.name == DOT:
                out.append(to_text(item[0]) if item is not None else node.raw)
            elif node.name in data:
                out.append(to_text(data[node.name]))
            else:
                out.append(node.raw)
        else:
            value = data.get(node.name)
            if not isinstance(value, (list, tuple)):
                continue
            for element in value:
                _evaluate(node.children, data, [element], out)


def render(template: str, data: Mapping[str, Any]) -> str:
    out: list[str] = []
    _evaluate(parse(template), data, None, out)
    return "".join(out)
