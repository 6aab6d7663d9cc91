from .summary import load_summary, parse_summary

__all__ = ["load_summary", "parse_summary"]
