import pytest

from stubsmith.test_utils import WorkspaceFactory, importable


TOOLKIT_SOURCE = """
import pathlib
from json import dumps
from typing import Any, Dict


def load(path: pathlib.Path, mode: str = "r") -> Dict[str, Any]:
    \"\"\"Load a document.\"\"\"
    return {}


def add(a: int, b: int = 0) -> int:
    \"\"\"Add numbers.\"\"\"
    return a + b


total = add


def broken():
    pass


broken.__signature__ = 42


def _hidden():
    pass
"""


@pytest.fixture
def toolkit(workspace_factory: WorkspaceFactory):
    """
    A project holding an importable `toolkit` module, with the cwd moved
    into it. Further files can still be added through the factory.
    """
    root = workspace_factory.with_source("toolkit.py", TOOLKIT_SOURCE).build()
    with importable(root, "toolkit"):
        yield workspace_factory
