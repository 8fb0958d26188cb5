from dataclasses import dataclass
from typing import List, Tuple
import logging

from ..catalog.questions import Topic
from ..catalog.rules import duration_label, module_ids_for, normalize_topic_name, resolve_module

logger = logging.getLogger(__name__)

GENERIC_BENEFITS = ("Improves coping skills", "Builds resilience")

@dataclass(frozen=True)
class Recommendation:
    module_id: str
    title: str
    description: str
    priority: int
    estimated_duration: str
    benefits: Tuple[str, ...]

def recommend(topic: Topic) -> List[Recommendation]:
    """Ordered module recommendations for a topic; priority is the 1-based rule position."""
    issue = normalize_topic_name(topic.name)
    module_ids, used_default = module_ids_for(topic.name)
    if used_default:
        logger.info("no recommendation rule for %r, using default modules", issue)

    out: List[Recommendation] = []
    for index, module_id in enumerate(module_ids, start=1):
        module = resolve_module(module_id)
        out.append(Recommendation(
            module_id=module.id,
            title=module.title,
            description=f"Evidence-based {module.title.lower()} for {issue}",
            priority=index,
            estimated_duration=duration_label(),
            benefits=(f"Reduces {issue}",) + GENERIC_BENEFITS,
        ))
    return out
