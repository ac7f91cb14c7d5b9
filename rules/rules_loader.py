import logging
import os
import yaml
from typing import List
from models.service_worker import FeatureRule

logger = logging.getLogger(__name__)

RULES_DIR = os.path.dirname(os.path.abspath(__file__))


def load_feature_rules(rules_file: str = os.path.join(RULES_DIR, "service_worker.yaml")) -> List[FeatureRule]:
    """
    Loads service worker feature rules from a YAML file.
    """
    rules: List[FeatureRule] = []
    with open(rules_file, "r") as f:
        rules_data = yaml.safe_load(f)
    if not rules_data:
        return rules

    for rule_data in rules_data:
        # Basic validation
        if not isinstance(rule_data, dict) or not all(k in rule_data for k in ["name", "patterns"]):
            logger.warning(f"Skipping invalid rule in {rules_file}: {rule_data}")
            continue

        rules.append(
            FeatureRule(
                name=rule_data["name"],
                patterns=list(rule_data["patterns"] or []),
                description=rule_data.get("description", ""),
            )
        )
    logger.debug(f"Loaded {len(rules)} service worker feature rules from {rules_file}")
    return rules
