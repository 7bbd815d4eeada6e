"""Application/UI layer package."""

from .facade import RowView, TrackerFacade, format_salary

__all__ = ["RowView", "TrackerFacade", "format_salary"]
