"""SCIP symbol dataclasses and the symbol string parser."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


LOCAL_PREFIX = "local "
PLACEHOLDER = "."


class Suffix(Enum):
    """Descriptor kinds, numbered as in the SCIP protobuf schema."""
    UNSPECIFIED = 0
    NAMESPACE = 1
    TYPE = 2
    TERM = 3
    METHOD = 4
    TYPE_PARAMETER = 5
    PARAMETER = 6
    META = 7
    LOCAL = 8
    MACRO = 9


# Suffix characters for descriptors written as `name<char>`
SIMPLE_SUFFIXES = {
    "/": Suffix.NAMESPACE,
    "#": Suffix.TYPE,
    ".": Suffix.TERM,
    ":": Suffix.META,
    "!": Suffix.MACRO,
}

# Kinds that never become a level in the dependency tree
NON_STRUCTURAL_SUFFIXES = frozenset({
    Suffix.NAMESPACE,
    Suffix.META,
    Suffix.LOCAL,
    Suffix.MACRO,
})


@dataclass(frozen=True)
class Descriptor:
    """One component of a global symbol (e.g. a namespace, type or method)."""
    name: str
    suffix: Suffix
    disambiguator: str = ""         # Only set for overloaded methods


@dataclass(frozen=True)
class Package:
    """Package coordinates of a global symbol. None means absent."""
    manager: Optional[str] = None   # "npm" | "maven" | "pip" | ...
    name: Optional[str] = None
    version: Optional[str] = None


@dataclass(frozen=True)
class ParsedSymbol:
    """A global symbol decomposed into scheme, package and descriptors."""
    scheme: str
    package: Package
    descriptors: tuple[Descriptor, ...]

    @property
    def namespace_path(self) -> str:
        """Namespace descriptor names joined with '/'."""
        return "/".join(d.name for d in self.descriptors if d.suffix == Suffix.NAMESPACE)

    @property
    def structural_descriptors(self) -> tuple[Descriptor, ...]:
        """Descriptors that describe containment (types, terms, methods, parameters)."""
        return tuple(d for d in self.descriptors if d.suffix not in NON_STRUCTURAL_SUFFIXES)


@dataclass(frozen=True)
class LocalSymbol:
    """A document-local symbol such as `local 12`."""
    id: str


@dataclass(frozen=True)
class ParseFailure:
    """Returned instead of raising when a symbol string is malformed."""
    message: str
    symbol: str

    def __str__(self) -> str:
        return f"{self.message} (symbol: {self.symbol!r})"


SymbolParseResult = Union[ParsedSymbol, LocalSymbol, ParseFailure]


class _SymbolSyntaxError(Exception):
    """Internal signal; never escapes parse_symbol."""


def is_identifier_character(ch: str) -> bool:
    return ch.isalnum() or ch in "_+-$"


def is_local_symbol(raw: str) -> bool:
    return raw.startswith(LOCAL_PREFIX)


def parse_symbol(raw: str) -> SymbolParseResult:
    """Parse a SCIP symbol string.

    Never raises. Malformed input yields a ParseFailure carrying a message
    and the offending string so callers can skip it.

    Examples:
        local 4                               -> LocalSymbol("4")
        npm lodash 4.17.21 lodash/uniqBy().   -> ParsedSymbol(...)
    """
    if not isinstance(raw, str):
        return ParseFailure("symbol must be a string", repr(raw))

    if is_local_symbol(raw):
        local_id = raw[len(LOCAL_PREFIX):]
        if not local_id:
            return ParseFailure("empty local symbol", raw)
        return LocalSymbol(id=local_id)

    try:
        return _SymbolParser(raw).parse()
    except _SymbolSyntaxError as e:
        return ParseFailure(str(e), raw)


class _SymbolParser:
    """Single-use cursor over one global symbol string."""

    def __init__(self, raw: str):
        self.raw = raw
        self.index = 0

    def parse(self) -> ParsedSymbol:
        scheme = self._accept_space_escaped("scheme")
        if scheme is None:
            raise self._error("scheme must not be the placeholder")
        manager = self._accept_space_escaped("package manager")
        package_name = self._accept_space_escaped("package name")
        version = self._accept_space_escaped("package version")

        descriptors = []
        while self.index < len(self.raw):
            descriptors.append(self._accept_descriptor())

        if not descriptors:
            raise self._error("global symbol has no descriptors")

        return ParsedSymbol(
            scheme=scheme,
            package=Package(manager=manager, name=package_name, version=version),
            descriptors=tuple(descriptors),
        )

    def _error(self, message: str) -> _SymbolSyntaxError:
        return _SymbolSyntaxError(f"{message} at offset {self.index}")

    def _peek(self) -> str:
        if self.index < len(self.raw):
            return self.raw[self.index]
        return ""

    def _accept_space_escaped(self, what: str) -> Optional[str]:
        """Read a space-terminated field; a doubled space is a literal space."""
        chars = []
        while True:
            if self.index >= len(self.raw):
                raise self._error(f"unexpected end of input reading {what}")
            ch = self.raw[self.index]
            if ch == " ":
                if self.raw.startswith("  ", self.index):
                    chars.append(" ")
                    self.index += 2
                    continue
                self.index += 1
                break
            chars.append(ch)
            self.index += 1

        value = "".join(chars)
        if not value:
            raise self._error(f"empty {what}")
        if value == PLACEHOLDER:
            return None
        return value

    def _accept_character(self, expected: str, what: str) -> None:
        if self._peek() != expected:
            found = self._peek() or "end of input"
            raise self._error(f"expected {expected!r} for {what}, found {found!r}")
        self.index += 1

    def _accept_descriptor(self) -> Descriptor:
        ch = self._peek()

        if ch == "(":
            self.index += 1
            name = self._accept_identifier("parameter name")
            self._accept_character(")", "closing parameter name")
            return Descriptor(name=name, suffix=Suffix.PARAMETER)

        if ch == "[":
            self.index += 1
            name = self._accept_identifier("type parameter name")
            self._accept_character("]", "closing type parameter name")
            return Descriptor(name=name, suffix=Suffix.TYPE_PARAMETER)

        name = self._accept_identifier("descriptor name")
        suffix = self._peek()
        if not suffix:
            raise self._error(f"missing suffix after descriptor {name!r}")
        self.index += 1

        if suffix == "(":
            disambiguator = ""
            if self._peek() != ")":
                disambiguator = self._accept_simple_identifier("method disambiguator")
            self._accept_character(")", "closing method disambiguator")
            self._accept_character(".", "method suffix")
            return Descriptor(name=name, suffix=Suffix.METHOD, disambiguator=disambiguator)

        if suffix in SIMPLE_SUFFIXES:
            return Descriptor(name=name, suffix=SIMPLE_SUFFIXES[suffix])

        self.index -= 1
        raise self._error(f"unknown descriptor suffix {suffix!r}")

    def _accept_identifier(self, what: str) -> str:
        if self._peek() == "`":
            return self._accept_escaped_identifier(what)
        return self._accept_simple_identifier(what)

    def _accept_simple_identifier(self, what: str) -> str:
        start = self.index
        while self.index < len(self.raw) and is_identifier_character(self.raw[self.index]):
            self.index += 1
        if self.index == start:
            raise self._error(f"empty {what}")
        return self.raw[start:self.index]

    def _accept_escaped_identifier(self, what: str) -> str:
        start = self.index
        self.index += 1  # opening backtick
        chars = []
        while self.index < len(self.raw):
            ch = self.raw[self.index]
            if ch == "\\":
                escaped = self.raw[self.index + 1:self.index + 2]
                if escaped not in ("`", "\\"):
                    raise self._error(f"invalid escape in {what}")
                chars.append(escaped)
                self.index += 2
                continue
            if ch == "`":
                # Doubled backtick is a literal backtick
                if self.raw.startswith("``", self.index):
                    chars.append("`")
                    self.index += 2
                    continue
                self.index += 1
                if not chars:
                    raise self._error(f"empty {what}")
                return "".join(chars)
            chars.append(ch)
            self.index += 1

        self.index = start
        raise self._error(f"unterminated backtick in {what}")


def format_identifier(name: str) -> str:
    """Quote a name with backticks when it is not a simple identifier."""
    if name and all(is_identifier_character(ch) for ch in name):
        return name
    escaped = name.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


def format_descriptor(descriptor: Descriptor) -> str:
    name = format_identifier(descriptor.name)
    suffix = descriptor.suffix
    if suffix == Suffix.PARAMETER:
        return f"({name})"
    if suffix == Suffix.TYPE_PARAMETER:
        return f"[{name}]"
    if suffix == Suffix.METHOD:
        return f"{name}({descriptor.disambiguator})."
    for char, kind in SIMPLE_SUFFIXES.items():
        if kind == suffix:
            return f"{name}{char}"
    raise ValueError(f"Cannot format descriptor with suffix {suffix.name}")


def _format_field(value: Optional[str]) -> str:
    if value is None:
        return PLACEHOLDER
    return value.replace(" ", "  ")


def format_symbol(symbol: Union[ParsedSymbol, LocalSymbol]) -> str:
    """Render a parsed symbol back to its SCIP string form."""
    if isinstance(symbol, LocalSymbol):
        return f"{LOCAL_PREFIX}{symbol.id}"

    package = symbol.package
    fields = [symbol.scheme, package.manager, package.name, package.version]
    head = " ".join(_format_field(f) for f in fields)
    return head + " " + "".join(format_descriptor(d) for d in symbol.descriptors)
