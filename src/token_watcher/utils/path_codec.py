"""Decode Claude Code project directory names back into paths."""


def decode_path(encoded: str) -> str:
    """Decode a Claude project directory name to a filesystem path.

    -home-wiz-AI-LLM → /home/wiz/AI/LLM

    Lossy: a hyphen inside an original path segment decodes as a separator.
    """
    if not encoded:
        return ""
    # Leading hyphen is the root, remaining hyphens are separators
    return encoded.replace("-", "/")


def extract_project_name(path: str) -> str:
    """Get the last path segment as the project display name.

    /home/wiz/AI/LLM → LLM
    """
    stripped = path.rstrip("/")
    return stripped.rsplit("/", 1)[-1] if stripped else path
