from dataclasses import dataclass
from typing import Optional


@dataclass
class Project:
    """A project name, optionally backed by a notes file in the projects directory."""
    name: str
    note_path: Optional[str] = None  # Relative to the projects directory
