"""Build constraint evaluation.

Supports both constraint syntaxes found at the top of Go files:

    //go:build linux && (amd64 || arm64) && !cgo
    // +build linux,amd64 darwin

and the implicit constraints carried by file names such as
``file_linux_amd64.go`` or ``file_windows_test.go``.
"""

from __future__ import annotations

import re

from novendor.gobuild.context import KNOWN_ARCH, KNOWN_OS, UNIX_OS, BuildContext

_TOKEN_RE = re.compile(r"\s*(\(|\)|!|&&|\|\||[A-Za-z0-9_.]+)")
_TAG_RE = re.compile(r"^[A-Za-z0-9_.]+$")

_GOOS_ALIASES = {
    "linux": "android",
    "solaris": "illumos",
    "darwin": "ios",
}


class ConstraintSyntaxError(ValueError):
    """Raised for a malformed //go:build or // +build line."""


def match_tag(tag: str, ctx: BuildContext) -> bool:
    """Report whether a single build tag is satisfied by *ctx*."""
    if tag in (ctx.goos, ctx.goarch, ctx.compiler):
        return True
    if tag == "cgo" and ctx.cgo_enabled:
        return True
    if tag == "unix" and ctx.goos in UNIX_OS:
        return True
    if _GOOS_ALIASES.get(tag) == ctx.goos:
        return True
    return tag in ctx.build_tags or tag in ctx.release_tags


# ── //go:build ──


class _ExprParser:
    """Recursive-descent parser for //go:build expressions.

    Grammar:
        or   := and ('||' and)*
        and  := not ('&&' not)*
        not  := '!' not | atom
        atom := tag | '(' or ')'
    """

    def __init__(self, text: str, ctx: BuildContext) -> None:
        self._tokens = self._tokenize(text)
        self._pos = 0
        self._ctx = ctx

    @staticmethod
    def _tokenize(text: str) -> list[str]:
        tokens = []
        pos = 0
        text = text.rstrip()
        while pos < len(text):
            m = _TOKEN_RE.match(text, pos)
            if not m:
                raise ConstraintSyntaxError(f"unexpected character in build expression: {text[pos:]!r}")
            tokens.append(m.group(1))
            pos = m.end()
        if not tokens:
            raise ConstraintSyntaxError("empty build expression")
        return tokens

    def _peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _next(self) -> str:
        tok = self._peek()
        if tok is None:
            raise ConstraintSyntaxError("unexpected end of build expression")
        self._pos += 1
        return tok

    def parse(self) -> bool:
        value = self._or()
        if self._peek() is not None:
            raise ConstraintSyntaxError(f"unexpected token {self._peek()!r}")
        return value

    # Every operand is evaluated so syntax errors surface regardless of short-circuiting.
    def _or(self) -> bool:
        value = self._and()
        while self._peek() == "||":
            self._next()
            rhs = self._and()
            value = value or rhs
        return value

    def _and(self) -> bool:
        value = self._not()
        while self._peek() == "&&":
            self._next()
            rhs = self._not()
            value = value and rhs
        return value

    def _not(self) -> bool:
        if self._peek() == "!":
            self._next()
            return not self._not()
        return self._atom()

    def _atom(self) -> bool:
        tok = self._next()
        if tok == "(":
            value = self._or()
            if self._next() != ")":
                raise ConstraintSyntaxError("missing ')' in build expression")
            return value
        if not _TAG_RE.match(tok):
            raise ConstraintSyntaxError(f"unexpected token {tok!r}")
        return match_tag(tok, self._ctx)


def eval_go_build(expr: str, ctx: BuildContext) -> bool:
    """Evaluate the expression that follows ``//go:build``."""
    return _ExprParser(expr, ctx).parse()


# ── // +build ──


def eval_plus_build(line: str, ctx: BuildContext) -> bool:
    """Evaluate the options that follow ``// +build``.

    Space separated options are OR-ed, comma separated terms are AND-ed.
    """
    options = line.split()
    if not options:
        raise ConstraintSyntaxError("empty +build line")
    for option in options:
        if _option_matches(option, ctx):
            return True
    return False


def _option_matches(option: str, ctx: BuildContext) -> bool:
    result = True
    for term in option.split(","):
        negated = term.startswith("!")
        tag = term[1:] if negated else term
        if not tag or tag.startswith("!") or not _TAG_RE.match(tag):
            raise ConstraintSyntaxError(f"invalid +build term {term!r}")
        if match_tag(tag, ctx) == negated:
            result = False
    return result


def should_build(go_build: str | None, plus_build: list[str], ctx: BuildContext) -> bool:
    """Combine the constraint lines found in a file header.

    A ``//go:build`` line takes precedence over any ``// +build`` lines.
    Raises ConstraintSyntaxError when a line is malformed.
    """
    if go_build is not None:
        return eval_go_build(go_build, ctx)
    return all(eval_plus_build(line, ctx) for line in plus_build)


# ── File names ──


def good_os_arch_file(name: str, ctx: BuildContext) -> bool:
    """Report whether a ``_GOOS``/``_GOARCH`` file name suffix matches *ctx*."""
    stem = name.split(".", 1)[0]
    idx = stem.find("_")
    if idx < 0:
        return True
    parts = stem[idx:].split("_")
    if parts and parts[-1] == "test":
        parts = parts[:-1]
    n = len(parts)
    if n >= 2 and parts[-2] in KNOWN_OS and parts[-1] in KNOWN_ARCH:
        return match_tag(parts[-2], ctx) and match_tag(parts[-1], ctx)
    if n >= 1 and (parts[-1] in KNOWN_OS or parts[-1] in KNOWN_ARCH):
        return match_tag(parts[-1], ctx)
    return True
