"""Monitoring exports."""

from xcandle_sim.monitoring.audit import AuditLog

__all__ = ["AuditLog"]
