# docseq/models/enum.py
from enum import Enum

class ValueType(str, Enum):
    NUMBER = "number"   # plain counters stay integers
    STRING = "string"

class AllocationState(str, Enum):
    UNALLOCATED = "unallocated"
    ALLOCATING = "allocating"
    ALLOCATED = "allocated"
    SKIPPED = "skipped"   # not new, or field already set
