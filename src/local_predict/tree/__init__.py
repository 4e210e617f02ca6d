"""
Decision tree package.

- catalog.py: field catalog and name translation
- predicate.py: typed predicates and their evaluation
- node.py: tree nodes, parsing and the prediction walk
"""

from .catalog import FieldCatalog, InputRecord, build_catalog, translate_by_field_id, translate_by_name
from .node import TreeNode, parse_node, predict
from .predicate import NumberOperand, Predicate, TextOperand, evaluate, parse_predicate

__all__ = [
    "FieldCatalog",
    "InputRecord",
    "build_catalog",
    "translate_by_field_id",
    "translate_by_name",
    "TreeNode",
    "parse_node",
    "predict",
    "NumberOperand",
    "Predicate",
    "TextOperand",
    "evaluate",
    "parse_predicate",
]
