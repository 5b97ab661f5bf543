"""Line splitting and content checks for file blobs"""


def split_lines(text: str) -> list[str]:
    """Split text on '\\n' only, keeping terminators; the last line lacks one if text does."""
    if not text:
        return []
    parts = text.split("\n")
    lines = [p + "\n" for p in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def is_binary(text: str) -> bool:
    """Treat content containing a NUL character as binary (git's heuristic)."""
    return "\x00" in text


def byte_size(text: str) -> int:
    return len(text.encode("utf-8", errors="surrogatepass"))
