import os

from typing import Any

def GetCsvPath(filepath : str|None) -> str|None:
    """
    Default path for a CSV export of a translation source file
    """
    if not filepath:
        return None

    basename, dummy = os.path.splitext(os.path.basename(filepath)) # type: ignore[unused-ignore]
    path = os.path.join(os.path.dirname(filepath), f"{basename}.csv")
    return os.path.normpath(path)

def FormatMessages(messages : list[dict[str,Any]]) -> str:
    lines : list[str] = []
    for index, message in enumerate(messages, start=1):
        lines.append(f"Message {index}")
        if 'role' in message:
            lines.append(f"Role: {message['role']}")
        if 'content' in message:
            content = str(message['content']).replace('\\n', '\n')
            lines.extend(["--------------------", content])
        lines.append("")

    return '\n'.join(lines)

def FormatErrorMessages(errors : list[Exception|str]) -> str:
    """
    Extract error messages from a list of errors
    """
    return ", ".join([ getattr(error, 'message', None) or str(error) for error in errors ])
