from .holiday_cache import HolidayCache

__all__ = ['HolidayCache']
