"""Shell-style variable expansion of ``$VAR`` and ``${VAR...}`` forms."""

from __future__ import annotations

import re
from typing import Mapping, Optional

_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class SubstitutionError(ValueError):
    """Raised when a template cannot be expanded."""


def interpolate(template: str, env: Mapping[str, str]) -> str:
    """Expand variable references in *template* using values from *env*.

    Supported forms: ``$VAR``, ``${VAR}``, ``${VAR:-default}``, ``${VAR-default}``,
    ``${VAR:?message}``, ``${VAR?message}``, ``${VAR:offset}`` and
    ``${VAR:offset:length}``. ``$$`` produces a literal ``$``; a ``$`` that starts
    no reference is kept as is. Unset variables expand to an empty string.
    """
    out: list[str] = []
    i = 0
    n = len(template)
    while i < n:
        if template[i] != "$":
            j = template.find("$", i)
            if j == -1:
                j = n
            out.append(template[i:j])
            i = j
            continue
        nxt = template[i + 1] if i + 1 < n else ""
        if nxt == "$":
            out.append("$")
            i += 2
            continue
        if nxt == "{":
            end = _closing_brace(template, i + 2)
            out.append(_expand_braced(template[i + 2 : end], env))
            i = end + 1
            continue
        match = _IDENT.match(template, i + 1)
        if match:
            out.append(_lookup(env, match.group()) or "")
            i = match.end()
            continue
        out.append("$")
        i += 1
    return "".join(out)


def _lookup(env: Mapping[str, str], name: str) -> Optional[str]:
    return env.get(name)


def _closing_brace(template: str, start: int) -> int:
    depth = 1
    k = start
    while k < len(template):
        if template.startswith("${", k):
            depth += 1
            k += 2
            continue
        if template[k] == "}":
            depth -= 1
            if depth == 0:
                return k
        k += 1
    raise SubstitutionError(f"missing closing brace in expansion: {template[start - 2:]!r}")


def _expand_braced(body: str, env: Mapping[str, str]) -> str:
    match = _IDENT.match(body)
    if not match:
        raise SubstitutionError(f"invalid expansion: ${{{body}}}")
    name = match.group()
    rest = body[match.end():]
    value = _lookup(env, name)
    is_set = value is not None

    if rest == "":
        return value or ""
    if rest.startswith(":-"):
        return value if is_set and value else interpolate(rest[2:], env)
    if rest.startswith(":?"):
        if is_set and value:
            return value
        raise _missing(name, rest[2:], env)
    if rest.startswith("-"):
        return value if is_set else interpolate(rest[1:], env)
    if rest.startswith("?"):
        if is_set:
            return value or ""
        raise _missing(name, rest[1:], env)
    if rest.startswith(":"):
        return _substring(body, value or "", rest[1:])
    raise SubstitutionError(f"unsupported expansion: ${{{body}}}")


def _missing(name: str, word: str, env: Mapping[str, str]) -> SubstitutionError:
    message = interpolate(word, env) or "not set"
    return SubstitutionError(f"${name}: {message}")


def _substring(body: str, text: str, spec: str) -> str:
    parts = spec.split(":")
    if len(parts) > 2:
        raise SubstitutionError(f"invalid substring expansion: ${{{body}}}")
    try:
        offset = int(parts[0].strip())
        length = int(parts[1].strip()) if len(parts) == 2 else None
    except ValueError:
        raise SubstitutionError(f"invalid substring expansion: ${{{body}}}") from None
    if offset < 0:
        offset = max(len(text) + offset, 0)
    result = text[offset:]
    if length is not None:
        result = result[:length]
    return result