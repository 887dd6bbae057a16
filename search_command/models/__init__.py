"""
Models Package

Pydantic models for package search and card binding.
"""
from search_command.models.packages import (
    CardPackage,
    PackageRecord,
    PromptBinding,
    SearchQuery,
)

__all__ = ["CardPackage", "PackageRecord", "PromptBinding", "SearchQuery"]
