"""Errors raised while converting WSDL documents into packages."""


class ConversionError(Exception):
    """Base class for every error that aborts a conversion."""
    pass


class MalformedImportError(ConversionError):
    """An import element lacks its mandatory location attribute."""

    def __init__(self, element: str, attribute: str):
        self.element = element
        self.attribute = attribute
        super().__init__(
            f"Required attribute '{attribute}' not encountered in the '{element}' element"
        )


class UnresolvedImportError(ConversionError):
    """An imported document could not be fetched or parsed."""

    def __init__(self, location: str, reason: str = 'could not be retrieved'):
        self.location = location
        super().__init__(f"The imported document '{location}' {reason}.")


class DefinitionParseError(ConversionError):
    """A fetched definition looks like markup but is not well-formed."""

    def __init__(self, location: str, reason: str):
        self.location = location
        super().__init__(f"The document '{location}' could not be parsed: {reason}")


class MissingAttributeError(ConversionError):
    """A package descriptor element lacks a mandatory attribute."""

    def __init__(self, attribute: str, element: str):
        self.attribute = attribute
        self.element = element
        super().__init__(
            f"Required attribute '{attribute}' not encountered in the '{element}' element"
        )


class SourceNotFoundError(ConversionError):
    """A folder or include directive points at a missing source."""

    def __init__(self, path: str, kind: str = 'file'):
        self.path = path
        self.kind = kind
        super().__init__(f"The source {kind} '{path}' does not exist.")


class TemplateNotFoundError(ConversionError):
    """No transform template exists for the requested package type."""
    pass


class TransformError(ConversionError):
    """The transform engine failed or produced no descriptor."""
    pass


class PathEscapeError(ConversionError):
    """A descriptor or archive path resolves outside the directory it must stay in."""

    def __init__(self, path: str, root: str):
        self.path = path
        self.root = root
        super().__init__(f"The path '{path}' resolves outside '{root}'.")
