import os, yaml
from functools import lru_cache
from typing import Dict, Any, List
import logging

from ..assessment.errors import CatalogError

logger = logging.getLogger(__name__)

PACKAGE_DIR = os.path.join(os.path.dirname(__file__), "..")
TOPICS_DIR = os.path.join(PACKAGE_DIR, "topics")
RULES_DIR = os.path.join(PACKAGE_DIR, "rules")

QUESTION_KINDS = ("open", "closed", "scaling", "behavioral", "reflective", "future")

def _read_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise CatalogError(f"{os.path.basename(path)}: expected a mapping at top level")
    return data

def _validate_topic(data: Dict[str, Any], fn: str) -> None:
    for key in ("id", "name", "questions"):
        if key not in data:
            raise CatalogError(f"{fn}: missing '{key}'")
    questions: List[Dict[str, Any]] = data["questions"] or []
    if not questions:
        raise CatalogError(f"{fn}: topic {data['id']!r} has no questions")
    seen = set()
    for q in questions:
        qid = str(q.get("id", ""))
        if not qid or qid in seen:
            raise CatalogError(f"{fn}: duplicate or missing question id {qid!r}")
        seen.add(qid)
        if q.get("kind") not in QUESTION_KINDS:
            raise CatalogError(f"{fn}: question {qid!r} has unknown kind {q.get('kind')!r}")

@lru_cache(maxsize=1)
def load_topics(topics_dir: str = TOPICS_DIR) -> Dict[str, Any]:
    """Read every topic file into {topic_id: raw mapping}, in catalog order."""
    out: Dict[str, Any] = {}
    for fn in sorted(os.listdir(topics_dir)):
        if fn.endswith(".yaml") or fn.endswith(".yml"):
            data = _read_yaml(os.path.join(topics_dir, fn))
            _validate_topic(data, fn)
            if data["id"] in out:
                raise CatalogError(f"{fn}: topic id {data['id']!r} defined twice")
            out[data["id"]] = data
    ordered = dict(sorted(out.items(), key=lambda kv: (kv[1].get("order", 1000), kv[0])))
    logger.debug("loaded %d topics from %s", len(ordered), topics_dir)
    return ordered

@lru_cache(maxsize=1)
def load_rules(rules_dir: str = RULES_DIR) -> Dict[str, Any]:
    """Merge modules.yaml and recommendations.yaml into one mapping."""
    modules = _read_yaml(os.path.join(rules_dir, "modules.yaml")).get("modules") or {}
    recs = _read_yaml(os.path.join(rules_dir, "recommendations.yaml"))
    if not recs.get("default"):
        raise CatalogError("recommendations.yaml: missing default module list")
    return {
        "modules": modules,
        "rules": recs.get("rules") or {},
        "default": list(recs["default"]),
        "duration_label": recs.get("duration_label", "15-30 min"),
    }
