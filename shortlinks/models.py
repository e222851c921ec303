"""Data models for the link registry."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LinkEntry:
    """A single code -> target mapping."""
    
    code: str
    target: str
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"code": self.code, "target": self.target}
