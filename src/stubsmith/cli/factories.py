from pathlib import Path

from stubsmith.app import StubsmithApp
from stubsmith.inspection import RuntimeInspector, StaticInspector
from stubsmith.generation import StubGenerator


def get_project_root() -> Path:
    return Path.cwd()


def make_app(static: bool = False) -> StubsmithApp:
    # Composition Root: Assemble the dependencies
    root = get_project_root()
    inspector = StaticInspector() if static else RuntimeInspector()
    return StubsmithApp(
        root_path=root,
        inspector=inspector,
        generator=StubGenerator(),
    )
