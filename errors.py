class FigmaResourceError(Exception):
    """Base class for every error raised while serving a Figma resource."""


class InvalidFigmaTokenError(FigmaResourceError):
    def __init__(self):
        super().__init__("FIGMA_ACCESS_TOKEN environment variable is required")


class InvalidAddressError(FigmaResourceError):
    def __init__(self, uri: str, reason: str = "does not match figma:///file/<key>[/<category>[/<id>]]"):
        self.uri = uri
        super().__init__(f"Invalid Figma resource URI {uri!r}: {reason}")


class ResourceNotFoundError(FigmaResourceError):
    pass


class ResourceAccessDeniedError(FigmaResourceError):
    pass


class UnsupportedCategoryError(FigmaResourceError):
    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unsupported resource type: {category}")


class TransportError(FigmaResourceError):
    def __init__(self, status_code, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Figma API error: {reason}")
