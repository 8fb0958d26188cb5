from dataclasses import dataclass
from typing import List, Tuple

from .loader import load_rules
from ..assessment.errors import UnknownModule

@dataclass(frozen=True)
class Module:
    id: str
    title: str

def normalize_topic_name(name: str) -> str:
    return name.strip().lower()

def default_modules() -> List[str]:
    return list(load_rules()["default"])

def duration_label() -> str:
    return load_rules()["duration_label"]

def module_ids_for(topic_name: str) -> Tuple[List[str], bool]:
    """Return the configured module ids for a topic and whether the default list was used."""
    rules = load_rules()["rules"]
    ids = rules.get(normalize_topic_name(topic_name))
    if ids is None:
        return default_modules(), True
    return list(ids), False

def resolve_module(module_id: str) -> Module:
    spec = load_rules()["modules"].get(module_id)
    if spec is None:
        raise UnknownModule(module_id)
    return Module(id=module_id, title=spec["title"])
