# core/utilities/index_loader.py
"""Read and write the JSON files consumed and produced by the index builder."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
from config import PathConfig, INDEX_TEMPLATE_PLACEHOLDER

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

def _load_json_list(path: Path, description: str) -> List[Any]:
    if not path.exists():
        raise FileNotFoundError(f"{description} not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{description} must contain a JSON list, got {type(data).__name__}")
    return data

def load_records(path: Optional[PathLike] = None) -> List[Dict[str, Any]]:
    """Load encoded filter records (defaults to data/search_index.json)."""
    index_path = Path(path) if path else PathConfig.get_search_index_file()
    records = _load_json_list(index_path, "Search index")
    logger.debug(f"Read {len(records)} records from {index_path}")
    return records

def load_documents(path: Optional[PathLike] = None) -> List[Dict[str, Any]]:
    """Load raw documents for the builder (defaults to data/posts.json)."""
    documents_path = Path(path) if path else PathConfig.get_documents_file()
    return _load_json_list(documents_path, "Documents file")

def save_records(records: Sequence[Dict[str, Any]], path: Optional[PathLike] = None) -> Path:
    """Write records as a compact JSON list; returns the written path."""
    index_path = Path(path) if path else PathConfig.get_search_index_file()
    index_path.parent.mkdir(parents=True, exist_ok=True)
    with open(index_path, "w", encoding="utf-8") as f:
        # ensure_ascii=False keeps one char per 15 bits instead of \uXXXX escapes
        json.dump(list(records), f, ensure_ascii=False, separators=(",", ":"))
    return index_path

def render_template(records: Sequence[Dict[str, Any]], template_path: PathLike,
                    output_path: PathLike) -> Path:
    """
    Embed the index into a template (eg. a static search page) by replacing
    UNIQUE_SEARCH_INDEX_PLACEHOLDER with the JSON record list.
    """
    template_path = Path(template_path)
    if not template_path.exists():
        raise FileNotFoundError(f"Template not found: {template_path}")

    template = template_path.read_text(encoding="utf-8")
    if INDEX_TEMPLATE_PLACEHOLDER not in template:
        raise ValueError(f"Template {template_path} has no {INDEX_TEMPLATE_PLACEHOLDER} placeholder")

    payload = json.dumps(list(records), ensure_ascii=False, separators=(",", ":"))
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(template.replace(INDEX_TEMPLATE_PLACEHOLDER, payload), encoding="utf-8")
    return output_path
