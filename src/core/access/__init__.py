"""Allow-list access control."""

from src.core.access.gate import AccessGate, parse_authorized_ids

__all__ = ["AccessGate", "parse_authorized_ids"]
