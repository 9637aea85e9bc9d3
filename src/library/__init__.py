"""Library organizer: categories, groups and pages for generated components.

Example usage:
    >>> from src.library import LibraryOrganizer
    >>> library = LibraryOrganizer(name="App Library").organize(definitions, components)
    >>> library.to_dict()["coverPage"]["stats"]
"""

from .lib import (
    CATEGORY_DESCRIPTIONS,
    CATEGORY_ICONS,
    CATEGORY_PRIORITY,
    Category,
    CategoryMetadata,
    Complexity,
    ComponentGroup,
    ComponentMetadata,
    CoverPage,
    LibraryOrganizer,
    LibraryStructure,
    Page,
    PageSection,
    QuickLink,
    SubGroup,
    assess_complexity,
    categorize,
    category_icon,
    category_priority,
    determine_group,
    generate_examples,
    generate_tags,
)

__all__ = [
    # Organizer
    "LibraryOrganizer",
    # Structure
    "LibraryStructure",
    "Category",
    "CategoryMetadata",
    "ComponentGroup",
    "SubGroup",
    "ComponentMetadata",
    "Page",
    "PageSection",
    "CoverPage",
    "QuickLink",
    "Complexity",
    # Heuristics
    "assess_complexity",
    "categorize",
    "determine_group",
    "category_priority",
    "category_icon",
    "generate_tags",
    "generate_examples",
    # Tables
    "CATEGORY_PRIORITY",
    "CATEGORY_ICONS",
    "CATEGORY_DESCRIPTIONS",
]
