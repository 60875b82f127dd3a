"""Rule-table loading for ctxreplace.contextual."""
from .loader import coerce_rules, load_rules, rules_from_data

__all__ = ['coerce_rules', 'load_rules', 'rules_from_data']
