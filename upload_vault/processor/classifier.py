from pathlib import PurePath

from upload_vault.processor.models import FileKind

EXTENSION_KINDS: dict[str, FileKind] = {
    ".csv": FileKind.STRUCTURED_DATA,
    ".xls": FileKind.STRUCTURED_DATA,
    ".xlsx": FileKind.STRUCTURED_DATA,
    ".mp3": FileKind.AUDIO,
    ".mp4": FileKind.VIDEO,
}


def classify(filename: str) -> FileKind:
    """Resolve a file kind from its extension, case-insensitively."""
    return EXTENSION_KINDS.get(PurePath(filename).suffix.lower(), FileKind.REJECTED)
