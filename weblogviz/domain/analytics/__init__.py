from .dtos import DailyTop, PathCount, Report

__all__ = ["DailyTop", "PathCount", "Report"]
