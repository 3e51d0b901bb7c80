"""page-tree - Build navigable page trees from flat repository listings"""

__version__ = "0.1.0"
