class StubsmithError(Exception):
    """Base class for every error stubsmith raises on purpose."""

    pass
