def _escape_docstring(content: str) -> str:
    content = content.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    # A bare trailing quote would merge with the closing delimiter.
    if content.endswith('"'):
        body = content[:-1]
        backslashes = len(body) - len(body.rstrip("\\"))
        if backslashes % 2 == 0:
            content = body + '\\"'
    return content


def format_docstring(content: str, indent_str: str) -> str:
    """Formats a docstring to be inserted into source code, following ruff/black style."""
    content = _escape_docstring(content.strip())
    lines = content.split("\n")

    if len(lines) == 1:
        return f'{indent_str}"""{content}"""'

    # Blank lines stay blank so no trailing whitespace is emitted.
    indented_body = "\n".join(
        f"{indent_str}{line}" if line.strip() else "" for line in lines
    )
    return f'{indent_str}"""\n{indented_body}\n{indent_str}"""'

