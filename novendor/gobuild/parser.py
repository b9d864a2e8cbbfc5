"""Go source header parsing — package clause, imports and constraint lines.

Only the part of a file that precedes the first top-level declaration other
than ``import`` is examined; function bodies are never tokenized.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


class GoSyntaxError(ValueError):
    """Raised when a file header cannot be parsed."""


@dataclass
class GoFileHeader:
    """Parsed header of one Go source file."""

    package: str
    imports: list[str] = field(default_factory=list)
    go_build: str | None = None  # expression after //go:build
    plus_build: list[str] = field(default_factory=list)  # options after each // +build


# ── Constraint lines ──


def _constraint_lines(src: str) -> tuple[str | None, list[str]]:
    go_build: str | None = None
    plus_candidates: list[tuple[int, str]] = []
    last_blank = 0
    in_block_comment = False

    for lineno, raw in enumerate(src.splitlines()):
        line = raw.strip()
        if in_block_comment:
            end = line.find("*/")
            if end < 0:
                continue
            in_block_comment = False
            line = line[end + 2 :].strip()
            if not line:
                continue
        elif not line:
            last_blank = lineno
            continue
        while line.startswith("/*"):
            end = line.find("*/", 2)
            if end < 0:
                in_block_comment = True
                line = ""
                break
            line = line[end + 2 :].strip()
        if not line:
            continue
        if not line.startswith("//"):
            break
        body = line[2:].strip()
        if line.startswith("//go:build") and (len(line) == 10 or line[10] in " \t"):
            if go_build is not None:
                raise GoSyntaxError("multiple //go:build comments")
            go_build = line[10:].strip()
            continue
        fields = body.split()
        if fields and fields[0] == "+build":
            plus_candidates.append((lineno, " ".join(fields[1:])))

    # +build lines only count when a blank line separates them from what follows.
    plus_build = [text for lineno, text in plus_candidates if lineno < last_blank]
    return go_build, plus_build


# ── Tokenizer ──

_ESCAPE_RE = re.compile(r"\\(x[0-9a-fA-F]{2}|u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|[0-7]{3}|.)", re.DOTALL)

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


def _unquote(body: str) -> str:
    """Decode the escapes of an interpreted string literal body.

    ``\\x`` and octal escapes are bytes, ``\\u`` and ``\\U`` are code points;
    the result is the UTF-8 decoding of the assembled bytes.
    """
    if "\\" not in body:
        return body
    out = bytearray()
    pos = 0
    for m in _ESCAPE_RE.finditer(body):
        out += body[pos : m.start()].encode("utf-8")
        esc = m.group(1)
        pos = m.end()
        if esc in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[esc].encode("utf-8")
            continue
        if len(esc) == 1:
            raise GoSyntaxError(f"unknown escape sequence \\{esc}")
        try:
            if esc[0] == "x":
                out.append(int(esc[1:], 16))
            elif esc[0] in "uU":
                out += chr(int(esc[1:], 16)).encode("utf-8")
            else:
                out.append(int(esc, 8))
        except (ValueError, UnicodeEncodeError) as e:
            raise GoSyntaxError(f"invalid escape sequence \\{esc}") from e
    out += body[pos:].encode("utf-8")
    return out.decode("utf-8", errors="replace")


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class _Lexer:
    def __init__(self, src: str) -> None:
        self._src = src
        self._pos = 0

    def _skip_space_and_comments(self) -> None:
        src = self._src
        while self._pos < len(src):
            ch = src[self._pos]
            if ch in " \t\r\n\ufeff":
                self._pos += 1
            elif src.startswith("//", self._pos):
                end = src.find("\n", self._pos)
                self._pos = len(src) if end < 0 else end
            elif src.startswith("/*", self._pos):
                end = src.find("*/", self._pos + 2)
                if end < 0:
                    raise GoSyntaxError("comment not terminated")
                self._pos = end + 2
            else:
                return

    def next(self) -> tuple[str, str] | None:
        """Return the next (kind, value) token, kind is 'ident', 'string' or 'punct'."""
        self._skip_space_and_comments()
        src = self._src
        if self._pos >= len(src):
            return None
        start = self._pos
        ch = src[start]
        if _is_ident_char(ch):
            while self._pos < len(src) and _is_ident_char(src[self._pos]):
                self._pos += 1
            return "ident", src[start : self._pos]
        if ch == "`":
            end = src.find("`", start + 1)
            if end < 0:
                raise GoSyntaxError("raw string literal not terminated")
            self._pos = end + 1
            return "string", src[start + 1 : end]
        if ch == '"':
            pos = start + 1
            while pos < len(src) and src[pos] != '"':
                if src[pos] == "\n":
                    raise GoSyntaxError("newline in string")
                pos += 2 if src[pos] == "\\" else 1
            if pos >= len(src):
                raise GoSyntaxError("string literal not terminated")
            self._pos = pos + 1
            return "string", _unquote(src[start + 1 : pos])
        self._pos += 1
        return "punct", ch


# ── Header ──


def parse_header(src: str) -> GoFileHeader:
    """Parse the package clause, import declarations and build constraint lines."""
    go_build, plus_build = _constraint_lines(src)
    lex = _Lexer(src)

    tok = lex.next()
    if tok != ("ident", "package"):
        raise GoSyntaxError("expected 'package' clause")
    tok = lex.next()
    if tok is None or tok[0] != "ident":
        raise GoSyntaxError("expected package name")
    header = GoFileHeader(package=tok[1], go_build=go_build, plus_build=plus_build)

    tok = lex.next()
    while tok is not None:
        if tok == ("punct", ";"):
            tok = lex.next()
            continue
        if tok != ("ident", "import"):
            break
        tok = lex.next()
        if tok == ("punct", "("):
            tok = lex.next()
            while tok != ("punct", ")"):
                if tok is None:
                    raise GoSyntaxError("unterminated import block")
                if tok == ("punct", ";"):
                    tok = lex.next()
                    continue
                tok = _import_spec(lex, tok, header)
            tok = lex.next()
        else:
            tok = _import_spec(lex, tok, header)
    return header


def _import_spec(lex: _Lexer, tok: tuple[str, str] | None, header: GoFileHeader) -> tuple[str, str] | None:
    # Optional name: identifier, '_' or '.'
    if tok is not None and (tok[0] == "ident" or tok == ("punct", ".")):
        tok = lex.next()
    if tok is None or tok[0] != "string":
        raise GoSyntaxError("expected import path")
    if not tok[1]:
        raise GoSyntaxError("empty import path")
    header.imports.append(tok[1])
    return lex.next()
