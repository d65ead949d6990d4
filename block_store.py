"""
Host document access: reading and writing the block that holds a time recorder

A block id is either ``path`` (the whole file is the block) or ``path:N`` (line
N of the file, counting from 1), relative to the store root.
"""

import logging
from pathlib import Path
from typing import List, Optional, Protocol, Tuple, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class BlockStore(Protocol):
    def get_block(self, block_id: str) -> Optional[str]: ...

    def update_block(self, block_id: str, content: str) -> None: ...

    def exists(self, block_id: str) -> bool: ...


class FileBlockStore:
    """Blocks stored in plain text files below a root directory"""

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else Path.cwd()

    def _resolve(self, block_id: str) -> Tuple[Path, Optional[int]]:
        path_text, sep, line_text = block_id.rpartition(":")
        if sep and line_text.isdigit() and path_text:
            return self.root / path_text, int(line_text)
        return self.root / block_id, None

    def _read_text(self, path: Path) -> str:
        # newline="" keeps CRLF endings as they are on disk
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()

    def _write_text(self, path: Path, text: str) -> None:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)

    def _read_lines(self, path: Path) -> List[str]:
        with path.open(encoding="utf-8", newline="") as f:
            return f.readlines()

    def get_block(self, block_id: str) -> Optional[str]:
        path, line_no = self._resolve(block_id)
        if not path.is_file():
            return None
        if line_no is None:
            return self._read_text(path)
        lines = self._read_lines(path)
        if not 1 <= line_no <= len(lines):
            return None
        return lines[line_no - 1].rstrip("\r\n")

    def update_block(self, block_id: str, content: str) -> None:
        path, line_no = self._resolve(block_id)
        if line_no is None:
            self._write_text(path, content)
            logger.debug("Wrote block %s", block_id)
            return
        lines = self._read_lines(path)
        if not 1 <= line_no <= len(lines):
            raise KeyError(f"No line {line_no} in {path}")
        old = lines[line_no - 1]
        ending = old[len(old.rstrip("\r\n")):]
        lines[line_no - 1] = content + ending
        self._write_text(path, "".join(lines))
        logger.debug("Wrote block %s", block_id)

    def exists(self, block_id: str) -> bool:
        return self.get_block(block_id) is not None

    def append_block(self, path_text: str, content: str) -> str:
        """Append a new line to a file (created if missing) and return its block id."""
        path = self.root / path_text
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = self._read_lines(path) if path.is_file() else []
        ending = "\r\n" if lines and lines[0].endswith("\r\n") else "\n"
        if lines and not lines[-1].endswith(("\n", "\r")):
            lines[-1] += ending
        lines.append(content + ending)
        self._write_text(path, "".join(lines))
        return f"{path_text}:{len(lines)}"
