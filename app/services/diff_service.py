"""
Top-level field diff between two resume content snapshots.

Only top-level keys are compared. A change anywhere inside a nested value
(e.g. one experience entry) marks the whole top-level field as modified.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ContentDiff:
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "added": list(self.added),
            "removed": list(self.removed),
            "modified": list(self.modified),
        }


def canonical_json(value: Any) -> str:
    """Serialize a value with sorted object keys so key order never counts as a change."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def diff_content(old: Optional[Dict[str, Any]], new: Optional[Dict[str, Any]]) -> ContentDiff:
    """
    Compare two content mappings by top-level key.
    
    Args:
        old: Older content (None is treated as empty)
        new: Newer content (None is treated as empty)
        
    Returns:
        ContentDiff with sorted added/removed/modified key names
    """
    old = old or {}
    new = new or {}
    
    old_keys = set(old)
    new_keys = set(new)
    
    modified = [
        key for key in old_keys & new_keys
        if canonical_json(old[key]) != canonical_json(new[key])
    ]
    
    return ContentDiff(
        added=sorted(new_keys - old_keys),
        removed=sorted(old_keys - new_keys),
        modified=sorted(modified),
    )
