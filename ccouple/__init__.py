"""Map file-to-file coupling through global symbol references in C/C++ code."""

from .analyzer import analyze, restrict_to_own_file
from .graph import Edge, build_graph
from .models import FunctionUse, SourceLocation, Use, load_records, save_records

__all__ = [
    "analyze",
    "restrict_to_own_file",
    "build_graph",
    "Edge",
    "FunctionUse",
    "SourceLocation",
    "Use",
    "load_records",
    "save_records",
]
