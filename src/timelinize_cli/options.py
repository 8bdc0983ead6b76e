# -*- coding: utf-8 -*-
"""Assembly of search and import option maps from flag values."""

from __future__ import annotations
import json
import sys
from dataclasses import dataclass, field, fields, asdict
from typing import Optional, Dict, Any, List

# Item search is always scoped to this data source; there is no flag for it.
SEARCH_DATA_SOURCE = "firefox"
# Import uses the same source unless --data-source names another.
IMPORT_DATA_SOURCE = SEARCH_DATA_SOURCE


@dataclass
class ItemUniqueConstraints:
    data_source_name: bool = True
    original_location: bool = True
    filename: bool = True
    timestamp: bool = True
    coordinates: bool = False
    classification_name: bool = False
    data: bool = True

    def to_dict(self) -> Dict[str,bool]:
        return asdict(self)


UNIQUE_CONSTRAINT_FIELDS = [f.name for f in fields(ItemUniqueConstraints)]


@dataclass
class ProcessingOptions:
    integrity: bool = False
    overwrite_local_changes: bool = False
    item_unique_constraints: Dict[str,Any] = field(default_factory=lambda: ItemUniqueConstraints().to_dict())
    interactive: Optional[bool] = None
    estimate_total: bool = True

    def to_dict(self) -> Dict[str,Any]:
        return {
            "integrity": self.integrity,
            "overwrite_local_changes": self.overwrite_local_changes,
            "item_unique_constraints": dict(self.item_unique_constraints),
            "interactive": self.interactive,
            "estimate_total": self.estimate_total,
        }


# ── Search ───────────────────────────────────────────────────────────────────
def build_search_options(text: Optional[str]=None, semantic: Optional[str]=None) -> Optional[Dict[str,Any]]:
    """Returns the search-items query (without ``repo``), or None if there is nothing to search for."""
    if text:
        return {"data_source": [SEARCH_DATA_SOURCE], "data_text": [text]}
    if semantic:
        return {"data_source": [SEARCH_DATA_SOURCE], "semantic_text": semantic}
    return None


def build_entity_search_options(repo_id: str, name: Optional[str]=None, phone: Optional[str]=None,
                                email: Optional[str]=None) -> Dict[str,Any]:
    attributes: List[Any] = []
    if name:
        attributes.append({"name": "name", "value": name})
    # phone and email entries are list-wrapped, unlike name
    if phone:
        attributes.append([{"name": "phone_number", "value": phone}])
    if email:
        attributes.append([{"name": "email_address", "value": email}])
    return {"repo": repo_id, "attributes": attributes, "or_fields": True}


# ── Import ───────────────────────────────────────────────────────────────────
def collect_files(file: Optional[str]=None, files: Optional[str]=None) -> List[str]:
    """Merges ``--file`` and the comma separated ``--files`` into one ordered list."""
    out: List[str] = []
    if file and file.strip():
        out.append(file.strip())
    if files:
        out.extend(f.strip() for f in files.split(",") if f.strip())
    return out


def parse_constraints_json(raw: Optional[str]) -> Optional[Dict[str,Any]]:
    """Parses ``--constraints-json``; returns None (after a warning) if unusable."""
    if not raw:
        return None
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        print(f"Warning: ignoring invalid --constraints-json ({e}); using flag defaults.", file=sys.stderr)
        return None
    if not isinstance(parsed, dict):
        print(f"Warning: --constraints-json must be a JSON object, got {type(parsed).__name__}; using flag defaults.",
              file=sys.stderr)
        return None
    return parsed


def build_processing_options(integrity: bool=False, overwrite_local_changes: bool=False,
                             interactive: Optional[bool]=None, estimate_total: bool=True,
                             constraints: Optional[ItemUniqueConstraints]=None,
                             constraints_json: Optional[str]=None) -> ProcessingOptions:
    unique = (constraints or ItemUniqueConstraints()).to_dict()
    override = parse_constraints_json(constraints_json)
    if override is not None:
        unique = override
    return ProcessingOptions(
        integrity=integrity,
        overwrite_local_changes=overwrite_local_changes,
        item_unique_constraints=unique,
        interactive=interactive,
        estimate_total=estimate_total,
    )
