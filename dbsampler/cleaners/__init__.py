from dbsampler.cleaners import builtin  # noqa: F401 - registers built-in cleaners
from dbsampler.cleaners.base import FieldCleaner, FunctionCleaner
from dbsampler.cleaners.registry import CleanerRegistry, cleaner_registry, field_cleaner
from dbsampler.cleaners.row_cleaner import CleanerDirective, RowCleaner, parse_directive

__all__ = [
    "CleanerDirective",
    "CleanerRegistry",
    "FieldCleaner",
    "FunctionCleaner",
    "RowCleaner",
    "cleaner_registry",
    "field_cleaner",
    "parse_directive",
]
