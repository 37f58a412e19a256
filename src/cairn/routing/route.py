"""Route — a single connected URL template.

Templates are literal paths with ``:name`` elements and an optional
greedy tail::

    /articles/view/:id          elements only
    /:controller/:action/*      passed arguments, split on "/"
    /pages/**                   one trailing passed argument

A Route knows how to parse a path into parameters and how to write a
path back out of parameters. The RouteCollection decides which routes
to ask.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any, Protocol, TypeAlias
from urllib.parse import quote, unquote, urlencode

from cairn.errors import ConfigurationError
from cairn.http.request import Request
from cairn.routing.params import CONVERTERS, DEFAULT_ELEMENT_PATTERN, element_pattern

ELEMENT_RE = re.compile(r":([a-z0-9-_]+(?<![-_]))", re.IGNORECASE)
_EXTENSION_RE = re.compile(r"\.([0-9a-z.]*)$", re.IGNORECASE)
_SLASHES_RE = re.compile(r"/{2,}")

# Options that configure the route rather than constrain an element
RESERVED_OPTIONS = frozenset({"pass", "persist", "_ext", "_name", "_host"})

# Axes of the derived name, in order, with the glue written after each
NAME_AXES: tuple[tuple[str, str], ...] = (
    ("prefix", ":"),
    ("plugin", "."),
    ("controller", ":"),
    ("action", ""),
)

# Compared case-insensitively when matching defaults
ROUTING_AXES = frozenset(axis for axis, _ in NAME_AXES)

_DEFAULT_PORTS = {"http": 80, "https": 443}

Params: TypeAlias = dict[str, Any]


class RouteProtocol(Protocol):
    """What a RouteCollection needs from a route."""

    template: str
    defaults: dict[Any, Any]
    options: dict[str, Any]
    extensions: tuple[str, ...]

    @property
    def name(self) -> str: ...

    @property
    def static_path(self) -> str: ...

    def parse(self, url: str, method: str = "") -> Params | None: ...

    def parse_request(self, request: Request) -> Params | None: ...

    def match(self, params: Mapping[Any, Any], context: Mapping[str, Any] | None = None) -> str | None: ...


def as_list(value: Any) -> list[Any]:
    """Normalize a scalar-or-iterable option to a list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    return [value]


def _normalize(key: Any, value: Any) -> str:
    if value is True:
        return "1"
    if value is False or value is None:
        return ""
    text = str(value)
    return text.lower() if key in ROUTING_AXES else text


class Route:
    """A connected URL template with defaults and options.

    Args:
        template: Path template, e.g. ``"/articles/view/:id"``.
        defaults: Fixed parameters (``controller``, ``action``, ...).
            ``_method`` restricts the HTTP methods the route answers.
            Integer keys are default passed arguments.
        options: Element constraints by element name (a regex or a
            converter name from ``cairn.routing.params``) plus
            ``pass``, ``persist``, ``_ext``, ``_name`` and ``_host``.
    """

    __slots__ = (
        "_element_defaults",
        "_extensions",
        "_host_regex",
        "_name",
        "_regex",
        "_segments",
        "_static_path",
        "_tail",
        "defaults",
        "keys",
        "options",
        "template",
    )

    def __init__(
        self,
        template: str,
        defaults: Mapping[Any, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        if not template.startswith("/"):
            msg = f"Route template {template!r} must start with '/'."
            raise ConfigurationError(msg)
        if "{" in template:
            msg = (
                f"Route template {template!r} uses {{param}} syntax. "
                "Elements are written as :param, e.g. '/users/:id'."
            )
            raise ConfigurationError(msg)

        self.template = template
        self.defaults: dict[Any, Any] = dict(defaults or {})
        self.options: dict[str, Any] = dict(options or {})
        self._extensions = tuple(dict.fromkeys(e.lower() for e in as_list(self.options.get("_ext"))))
        self._name: str | None = None
        self._host_regex: re.Pattern[str] | None = None
        if self.options.get("_host"):
            host = re.escape(str(self.options["_host"])).replace(r"\*", ".*")
            self._host_regex = re.compile(f"^{host}$", re.IGNORECASE)
        self._compile()
        self._static_path = self._find_static_path()

    def __repr__(self) -> str:
        return f"Route({self.template!r}, {self.defaults!r})"

    # -- Compilation --

    def _compile(self) -> None:
        body = self.template
        tail = ""
        if body.endswith("/**"):
            body, tail = body[:-3], "**"
        elif body.endswith("/*"):
            body, tail = body[:-2], "*"

        regex: list[str] = []
        segments: list[tuple[str, str]] = []
        keys: list[str] = []
        element_defaults: dict[str, Any] = {}
        pos = 0
        for index, found in enumerate(ELEMENT_RE.finditer(body)):
            name = found.group(1)
            literal = body[pos : found.start()]
            pos = found.end()
            group = f"_e{index}"

            if name in self.options and name not in RESERVED_OPTIONS:
                pattern = element_pattern(str(self.options[name]))
                optional = "?" if name != "plugin" and name in self.defaults else ""
                if literal.endswith("/"):
                    regex.append(re.escape(literal[:-1]))
                    regex.append(f"(?:/(?P<{group}>{pattern}){optional}){optional}")
                else:
                    regex.append(re.escape(literal))
                    regex.append(f"(?:(?P<{group}>{pattern}){optional}){optional}")
            else:
                regex.append(re.escape(literal))
                regex.append(f"(?P<{group}>{DEFAULT_ELEMENT_PATTERN})")

            segments.append(("literal", literal))
            segments.append(("element", name))
            keys.append(name)
            # Defaults that are also elements only make the element optional
            if name in self.defaults:
                element_defaults[name] = self.defaults.pop(name)

        regex.append(re.escape(body[pos:]))
        segments.append(("literal", body[pos:]))
        if tail == "**":
            regex.append(r"(?:/(?P<_trailing_>.*))?")
        elif tail == "*":
            regex.append(r"(?:/(?P<_args_>.*))?")

        try:
            self._regex = re.compile("^" + "".join(regex) + "[/]*$")
        except re.error as exc:
            msg = f"Route template {self.template!r} has an invalid element pattern: {exc}"
            raise ConfigurationError(msg) from exc
        self._segments = tuple(segments)
        self._tail = tail
        self.keys = tuple(keys)
        self._element_defaults = element_defaults

    def _find_static_path(self) -> str:
        element = self.template.find(":")
        if element != -1:
            return self.template[:element]
        star = self.template.find("*")
        if star != -1:
            return self.template[:star].rstrip("/") or "/"
        return self.template

    # -- Metadata --

    @property
    def static_path(self) -> str:
        """Literal template text before the first element or greedy tail."""
        return self._static_path

    @property
    def name(self) -> str:
        """Derived lookup name, e.g. ``"admin:posts:index"``.

        Built from prefix, plugin, controller and action: ``_<axis>`` when
        the axis is a template element, the default value otherwise.
        Axes with neither are skipped.
        """
        if self._name is not None:
            return self._name
        name = ""
        for axis, glue in NAME_AXES:
            if axis in self.keys:
                value = f"_{axis}"
            elif self.defaults.get(axis) is not None:
                value = self.defaults[axis]
            else:
                continue
            if value is True or value is False:
                value = "1" if value else "0"
            name += f"{value}{glue}"
        self._name = name.lower()
        return self._name

    @property
    def explicit_name(self) -> str | None:
        return self.options.get("_name")

    @property
    def extensions(self) -> tuple[str, ...]:
        return self._extensions

    @extensions.setter
    def extensions(self, extensions: Iterable[str]) -> None:
        self._extensions = tuple(dict.fromkeys(e.lower() for e in as_list(extensions)))

    @property
    def methods(self) -> tuple[str, ...]:
        """HTTP methods from the ``_method`` default (empty means any)."""
        return tuple(m.upper() for m in as_list(self.defaults.get("_method")))

    def host_matches(self, host: str) -> bool:
        """True when the route has no ``_host`` option or *host* fits it."""
        if self._host_regex is None:
            return True
        return self._host_regex.match(host) is not None

    # -- Parsing --

    def parse_request(self, request: Request) -> Params | None:
        """Parse a Request, checking the ``_host`` option first."""
        if not self.host_matches(request.host):
            return None
        return self.parse(request.path, request.method)

    def parse(self, url: str, method: str = "") -> Params | None:
        """Parse a decoded path into route parameters.

        Returns ``None`` when the path or method doesn't fit. An empty
        *method* counts as ``GET``.
        """
        path, ext = self._parse_extension(url)
        found = self._regex.match(unquote(path))
        if found is None:
            return None

        methods = self.methods
        if methods and (method or "GET").upper() not in methods:
            return None

        params: Params = {}
        passed: list[Any] = []
        for key, value in self.defaults.items():
            if isinstance(key, int):
                passed.append(value)
            else:
                params[key] = value

        for index, name in enumerate(self.keys):
            value = found.group(f"_e{index}")
            if value is None:
                value = self._element_defaults.get(name)
            if value is not None:
                params[name] = value

        if found.groupdict().get("_args_"):
            passed.extend(arg for arg in found.group("_args_").split("/") if arg)
        if found.groupdict().get("_trailing_"):
            passed.append(found.group("_trailing_"))

        for name in reversed(as_list(self.options.get("pass"))):
            if name in params:
                passed.insert(0, params[name])

        if passed:
            params["pass"] = passed
        if ext:
            params["_ext"] = ext
        if self.explicit_name:
            params["_name"] = self.explicit_name
        return params

    def _parse_extension(self, url: str) -> tuple[str, str | None]:
        if not self._extensions:
            return url, None
        found = _EXTENSION_RE.search(url)
        if found is None or not found.group(1):
            return url, None
        ext = found.group(1).lower()
        if ext in self._extensions:
            return url[: -(len(ext) + 1)], ext
        return url, None

    # -- Generation --

    def match(
        self,
        params: Mapping[Any, Any],
        context: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Write a URL from *params*, or return ``None`` if they don't fit.

        *context* carries the current request's ``_base``, ``_scheme``,
        ``_host``, ``_port`` and ``params`` (used by ``persist``).
        """
        url: dict[Any, Any] = dict(params)
        context = dict(context or {})
        request_params = context.pop("params", None) or {}

        for key in as_list(self.options.get("persist")):
            if key not in url and key in request_params:
                url[key] = request_params[key]

        host_options: dict[str, Any] = {}
        for key in ("_scheme", "_host", "_port", "_base", "_full"):
            if key in url:
                host_options[key] = url.pop(key)

        if self._host_regex is not None:
            pinned = str(self.options["_host"])
            if not host_options.get("_host") and "*" not in pinned:
                host_options["_host"] = pinned
            if not host_options.get("_host"):
                host_options["_host"] = context.get("_host") or ""
            if not self.host_matches(host_options["_host"]):
                return None

        absolute = host_options.pop("_full", False) or any(
            host_options.get(key) for key in ("_scheme", "_host", "_port")
        )
        if absolute:
            for key in ("_scheme", "_host", "_port"):
                if not host_options.get(key) and context.get(key):
                    host_options[key] = context[key]
            scheme = host_options.get("_scheme") or "http"
            if host_options.get("_port") == _DEFAULT_PORTS.get(scheme):
                host_options.pop("_port")
        if "_base" not in host_options and context.get("_base"):
            host_options["_base"] = context["_base"]

        query: dict[str, Any] = dict(url.pop("?", None) or {})
        fragment = url.pop("#", None)

        ext = url.pop("_ext", None)
        if ext and str(ext).lower() not in self._extensions:
            return None

        requested = url.pop("_method", None)
        methods = self.methods
        if methods:
            wanted = {str(m).upper() for m in as_list(requested or "GET")}
            if not wanted.intersection(methods):
                return None

        defaults = {k: v for k, v in self.defaults.items() if k != "_method"}
        for key, value in defaults.items():
            if key not in url:
                if value is None:
                    continue
                return None
            if _normalize(key, url[key]) != _normalize(key, value):
                return None

        for index, name in enumerate(as_list(self.options.get("pass"))):
            if index in url and name not in url:
                url[name] = url.pop(index)

        for key in self.keys:
            if url.get(key) in (None, "") and key not in self._element_defaults:
                return None

        passed: list[tuple[int, Any]] = []
        for key in list(url):
            if key in self.keys or key in defaults:
                continue
            value = url.pop(key)
            if isinstance(key, int):
                passed.append((key, value))
            elif value is not None and value is not False and value != "":
                query[key] = value

        if passed and not self._tail:
            return None

        for key in self.keys:
            spec = self.options.get(key)
            if spec is None or key in RESERVED_OPTIONS or url.get(key) in (None, ""):
                continue
            if re.fullmatch(element_pattern(str(spec)), str(url[key])) is None:
                return None

        return self._write_url(
            url,
            [value for _, value in sorted(passed, key=lambda item: item[0])],
            query,
            host_options,
            ext,
            fragment,
        )

    def _write_url(
        self,
        url: Mapping[Any, Any],
        passed: list[Any],
        query: Mapping[str, Any],
        host_options: Mapping[str, Any],
        ext: str | None,
        fragment: Any,
    ) -> str:
        parts: list[str] = []
        drop_slash = False
        for kind, text in self._segments:
            if kind == "literal":
                if drop_slash and text.startswith("/"):
                    text = text[1:]
                drop_slash = False
                parts.append(text)
                continue
            value = url.get(text)
            if value in (None, ""):
                drop_slash = True
                continue
            spec = self.options.get(text)
            safe = "/" if spec is not None and element_pattern(str(spec)) == CONVERTERS["path"] else ""
            parts.append(quote(str(value), safe=safe))

        if self._tail == "*":
            parts.append("/" + "/".join(quote(str(arg), safe="") for arg in passed))
        elif self._tail == "**":
            parts.append("/" + "/".join(quote(str(arg), safe="/") for arg in passed))

        out = "".join(parts)
        if host_options.get("_base"):
            out = f"{host_options['_base']}{out}"
        out = _SLASHES_RE.sub("/", out)

        if ext or query:
            out = out.rstrip("/") or "/"
        if ext:
            out += f".{ext}"

        if host_options.get("_host"):
            host = str(host_options["_host"])
            if host_options.get("_port"):
                host += f":{host_options['_port']}"
            scheme = host_options.get("_scheme") or "http"
            out = f"{scheme}://{host}{out}"

        if query:
            out += "?" + urlencode(query, doseq=True)
        if fragment:
            out += "#" + quote(str(fragment), safe="")
        return out
