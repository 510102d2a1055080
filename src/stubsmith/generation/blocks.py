from textwrap import dedent
from typing import Dict, List, Optional, Sequence, Union

import libcst as cst

from stubsmith.spec import BodyBlocks, StubsmithError

BLOCK_NAMES = ("begin", "process", "end")


class BodyFragmentError(StubsmithError):
    """Raised when a body fragment cannot be split into blocks."""

    pass


def _takes_parameters(params: cst.Parameters) -> bool:
    return bool(
        params.params
        or params.posonly_params
        or params.kwonly_params
        or isinstance(params.star_arg, (cst.Param, cst.ParamStar))
        or params.star_kwarg is not None
    )


def _block_code(
    body: Union[cst.IndentedBlock, cst.SimpleStatementSuite], default_indent: str
) -> str:
    if isinstance(body, cst.SimpleStatementSuite):
        # def begin(): a = 1; b = 2
        statements: Sequence[cst.BaseStatement] = [
            cst.SimpleStatementLine(body=body.body)
        ]
        footer: Sequence[cst.EmptyLine] = ()
    else:
        # Comments after the last statement live in the block footer.
        statements, footer = body.body, body.footer

    code = cst.Module(
        body=list(statements), footer=list(footer), default_indent=default_indent
    ).code
    return _trim_blank_lines(code)


def _trim_blank_lines(code: str) -> str:
    lines = code.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def _named_block(node: cst.BaseStatement) -> Optional[str]:
    if isinstance(node, cst.FunctionDef) and node.name.value in BLOCK_NAMES:
        return node.name.value
    return None


def extract_blocks(fragment: str) -> BodyBlocks:
    """
    Splits a body fragment into its begin/process/end blocks.

    A fragment whose top level defines `begin`, `process` or `end` functions
    contributes their bodies to the matching blocks. Any other fragment is
    used as the `end` block in its entirety.
    """
    try:
        module = cst.parse_module(dedent(fragment))
    except cst.ParserSyntaxError as e:
        raise BodyFragmentError(f"Body fragment is not valid Python: {e}") from e

    if not module.body:
        return BodyBlocks()

    named: Dict[str, str] = {}
    loose: List[cst.BaseStatement] = []

    for node in module.body:
        block_name = _named_block(node)
        if block_name is None:
            loose.append(node)
            continue

        assert isinstance(node, cst.FunctionDef)
        if block_name in named:
            raise BodyFragmentError(f"Block '{block_name}' is defined more than once.")
        if node.asynchronous is not None or node.decorators:
            raise BodyFragmentError(
                f"Block '{block_name}' must be a plain 'def' without decorators."
            )
        if _takes_parameters(node.params):
            raise BodyFragmentError(f"Block '{block_name}' must not take parameters.")

        named[block_name] = _block_code(node.body, module.default_indent)

    if not named:
        return BodyBlocks(end=_trim_blank_lines(module.code) or None)

    if loose:
        raise BodyFragmentError(
            "Body fragment mixes begin/process/end blocks with other top-level statements."
        )

    return BodyBlocks(
        begin=named.get("begin") or None,
        process=named.get("process") or None,
        end=named.get("end") or None,
    )


def _render_block(code: str, indent_str: str) -> List[str]:
    module = cst.parse_module(code)
    statements = list(module.body)
    if module.header and statements:
        # Comments above the first statement belong to it.
        first = statements[0]
        statements[0] = first.with_changes(
            leading_lines=[*module.header, *first.leading_lines]
        )

    # Let libcst indent the statements so multi-line strings stay untouched.
    wrapper = cst.Module(
        body=[
            cst.If(
                test=cst.Name("True"),
                body=cst.IndentedBlock(body=statements, footer=module.footer),
            )
        ],
        default_indent=indent_str,
    )
    rendered = [
        line if line.strip() else "" for line in wrapper.code.split("\n")[1:]
    ]
    return _trim_blank_lines("\n".join(rendered)).split("\n")


def render_body(blocks: BodyBlocks, indent_str: str) -> List[str]:
    lines: List[str] = []
    for block_name in BLOCK_NAMES:
        code = getattr(blocks, block_name)
        if not code:
            continue
        if lines:
            lines.append("")
        lines.extend(_render_block(code, indent_str))
    return lines
