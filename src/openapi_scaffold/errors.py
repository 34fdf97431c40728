"""Error types raised by the scaffold generator.

Every error is terminal for the current run: callers must not write any
output once one of these has been raised.
"""


class GeneratorError(Exception):
    """Base class for all generator failures."""


class ParseError(GeneratorError):
    """Input text could not be decoded into a Document."""

    def __init__(self, diagnostic: str):
        self.diagnostic = diagnostic
        super().__init__(f"Failed to parse OpenAPI spec: {diagnostic}")


class UnsupportedVersionError(ParseError):
    """The document declares an OpenAPI version other than 3.x."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"unsupported OpenAPI version: {version}")


class UnresolvedReferenceError(GeneratorError):
    """A $ref points at a schema missing from components.schemas."""

    def __init__(self, reference: str, name: str):
        self.reference = reference
        self.name = name
        super().__init__(f"Unresolved reference {reference!r}: no component schema named {name!r}")


class UnsupportedConstructError(GeneratorError):
    """A composition schema (allOf/oneOf/anyOf/not) reached lowering."""

    def __init__(self, construct: str, context: str = ""):
        self.construct = construct
        self.context = context
        where = f" in {context}" if context else ""
        super().__init__(f"Unsupported schema construct {construct!r}{where}")


class IdentifierCollisionError(GeneratorError):
    """Two distinct raw names sanitize to the same identifier."""

    def __init__(self, identifier: str, first: str, second: str, namespace: str):
        self.identifier = identifier
        self.first = first
        self.second = second
        self.namespace = namespace
        super().__init__(
            f"Identifier collision in {namespace}: {first!r} and {second!r} both map to {identifier!r}"
        )
