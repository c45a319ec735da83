from .loader import load_catalog, parse_catalog

__all__ = ["load_catalog", "parse_catalog"]
