"""Library organizer.

Sorts generated components into a navigable library: categories driven by
widget type, name-based groups, variant-based sub-groups, per-component
metadata, and a page structure with a cover page.
"""

from __future__ import annotations

import re
from typing import Iterable, Literal, Sequence

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from src.components import ComponentAssembler
from src.config import EnvVar, get_environment
from src.core import get_logger
from src.ir import ComponentDefinition, to_host_dict
from src.mid import ReusableWidgetDefinition
from src.schema import LibraryCategory, WidgetType, get_widget_category

logger = get_logger("designgen.library")

_LIBRARY_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
}

Complexity = Literal["Simple", "Medium", "Complex"]

LIBRARY_DESCRIPTION = "Components generated from Flutter widgets"
DEFAULT_PRIORITY = 99
DEFAULT_ICON = "📦"
MAX_EXAMPLES = 3
FREQUENT_USAGE = 10

CATEGORY_PRIORITY: dict[str, int] = {
    LibraryCategory.BUTTONS.value: 1,
    LibraryCategory.TYPOGRAPHY.value: 2,
    LibraryCategory.SURFACES.value: 3,
    LibraryCategory.LAYOUT.value: 4,
    LibraryCategory.NAVIGATION.value: 5,
    LibraryCategory.MEDIA.value: 6,
    LibraryCategory.COMPONENTS.value: 7,
}

CATEGORY_ICONS: dict[str, str] = {
    LibraryCategory.BUTTONS.value: "🔘",
    LibraryCategory.TYPOGRAPHY.value: "📝",
    LibraryCategory.SURFACES.value: "📄",
    LibraryCategory.LAYOUT.value: "📐",
    LibraryCategory.NAVIGATION.value: "🧭",
    LibraryCategory.MEDIA.value: "🖼️",
    LibraryCategory.COMPONENTS.value: "🧩",
}

CATEGORY_DESCRIPTIONS: dict[str, str] = {
    LibraryCategory.BUTTONS.value: "Interactive button components for user actions",
    LibraryCategory.TYPOGRAPHY.value: "Text components for content display",
    LibraryCategory.SURFACES.value: "Container components that provide visual surfaces",
    LibraryCategory.LAYOUT.value: "Components for organizing and structuring content",
    LibraryCategory.MEDIA.value: "Components for displaying images and media content",
    LibraryCategory.NAVIGATION.value: "Components for app navigation and structure",
    LibraryCategory.COMPONENTS.value: "General purpose components",
}


# =============================================================================
# Library Models
# =============================================================================


class ComponentMetadata(BaseModel):
    """Documentation of one component in the library."""

    name: str
    component_id: str
    category: str
    tags: list[str] = Field(default_factory=list)
    usage_count: int = 0
    complexity: Complexity = "Simple"
    examples: list[str] = Field(default_factory=list)
    documentation: str = ""

    model_config = _LIBRARY_CONFIG


class SubGroup(BaseModel):
    name: str
    components: list[str] = Field(default_factory=list)

    model_config = _LIBRARY_CONFIG


class ComponentGroup(BaseModel):
    name: str
    description: str
    components: list[str] = Field(default_factory=list)
    sub_groups: list[SubGroup] = Field(default_factory=list)

    model_config = _LIBRARY_CONFIG


class CategoryMetadata(BaseModel):
    component_count: int
    average_usage: int
    complexity: Complexity

    model_config = _LIBRARY_CONFIG


class Category(BaseModel):
    """A top-level library section."""

    name: str
    description: str
    icon: str
    priority: int
    components: list[str] = Field(default_factory=list)
    groups: list[ComponentGroup] = Field(default_factory=list)
    metadata: CategoryMetadata

    model_config = _LIBRARY_CONFIG


class PageSection(BaseModel):
    name: str
    description: str
    components: list[str] = Field(default_factory=list)

    model_config = _LIBRARY_CONFIG


class Page(BaseModel):
    name: str
    description: str
    sections: list[PageSection] = Field(default_factory=list)

    model_config = _LIBRARY_CONFIG


class QuickLink(BaseModel):
    name: str
    description: str
    component_count: int

    model_config = _LIBRARY_CONFIG


class CoverPage(BaseModel):
    title: str
    description: str
    stats: dict[str, int | str] = Field(default_factory=dict)
    quick_links: list[QuickLink] = Field(default_factory=list)

    model_config = _LIBRARY_CONFIG


class LibraryStructure(BaseModel):
    """The organized component library.

    Attributes:
        name: Library name.
        description: Library description.
        version: Library version string.
        categories: Categories sorted by priority.
        components: Per-component metadata keyed by component id.
        pages: Page structure for the host document.
        cover_page: Library cover with stats and quick links.
    """

    name: str
    description: str = LIBRARY_DESCRIPTION
    version: str
    categories: list[Category] = Field(default_factory=list)
    components: dict[str, ComponentMetadata] = Field(default_factory=dict)
    pages: list[Page] = Field(default_factory=list)
    cover_page: CoverPage | None = None

    model_config = _LIBRARY_CONFIG

    @property
    def total_components(self) -> int:
        return len(self.components)

    def category(self, name: str) -> Category | None:
        return next((c for c in self.categories if c.name == name), None)

    def to_dict(self) -> dict:
        return to_host_dict(self)


# =============================================================================
# Heuristics
# =============================================================================


def assess_complexity(definition: ReusableWidgetDefinition) -> Complexity:
    """Score structure and styling; <=3 is Simple, <=8 Medium, above Complex."""
    styling = definition.styling
    score = len(definition.children)
    score += len(definition.properties.to_interchange())
    score += 2 * len(definition.variants)
    score += len(styling.colors)
    if styling.borders is not None:
        score += 2
    score += len(styling.shadows)
    if score <= 3:
        return "Simple"
    if score <= 8:
        return "Medium"
    return "Complex"


def categorize(definition: ReusableWidgetDefinition) -> str:
    """Library category of a definition.

    Containers are split by purpose: decorated or colored containers are
    Surfaces, padded or laid-out ones are Layout, anything else Components.
    """
    if definition.type != WidgetType.CONTAINER:
        return get_widget_category(definition.type).value
    props = definition.properties
    styling = definition.styling
    if props.decoration is not None or styling.borders is not None or styling.colors:
        return LibraryCategory.SURFACES.value
    if props.padding is not None or props.margin is not None or definition.layout is not None:
        return LibraryCategory.LAYOUT.value
    return LibraryCategory.COMPONENTS.value


def determine_group(name: str) -> str:
    """Group a component by keywords in its name."""
    lowered = name.lower()
    if "button" in lowered:
        if "primary" in lowered:
            return "Primary Buttons"
        if "secondary" in lowered:
            return "Secondary Buttons"
        if "icon" in lowered:
            return "Icon Buttons"
        return "Buttons"
    if "text" in lowered or "label" in lowered:
        if "heading" in lowered or "title" in lowered:
            return "Headings"
        if "body" in lowered or "paragraph" in lowered:
            return "Body Text"
        return "Text"
    if "card" in lowered:
        if "elevated" in lowered:
            return "Elevated Cards"
        if "outlined" in lowered:
            return "Outlined Cards"
        return "Cards"
    words = [w for w in re.split(r"[\s/]+", name) if w]
    return words[0] if words else LibraryCategory.COMPONENTS.value


def category_priority(name: str) -> int:
    return CATEGORY_PRIORITY.get(name, DEFAULT_PRIORITY)


def category_icon(name: str) -> str:
    return CATEGORY_ICONS.get(name, DEFAULT_ICON)


def _group_order(name: str) -> tuple[int, str]:
    if "Primary" in name:
        return (0, name)
    if "Secondary" in name:
        return (1, name)
    return (2, name)


def generate_tags(definition: ReusableWidgetDefinition) -> list[str]:
    tags = [str(definition.type).lower()]
    if definition.properties.disabled is not None:
        tags.append("interactive")
    if definition.styling.colors:
        tags.append("colored")
    if definition.children:
        tags.append("container")
    if definition.layout is not None:
        tags.append("layout")
    if definition.usage_count > FREQUENT_USAGE:
        tags.append("frequently-used")
    if definition.variants:
        tags.append("variants")
    return tags


def generate_examples(definition: ReusableWidgetDefinition) -> list[str]:
    examples = [f"Basic usage: <{definition.name} />"]
    for variant in definition.variants:
        props = " ".join(f'{key}="{value}"' for key, value in variant.properties.items())
        examples.append(f"{variant.name}: <{definition.name} {props} />")
    return examples[:MAX_EXAMPLES]


def _category_complexity(levels: Sequence[Complexity]) -> Complexity:
    complex_count = sum(1 for level in levels if level == "Complex")
    medium_count = sum(1 for level in levels if level == "Medium")
    if complex_count > len(levels) / 2:
        return "Complex"
    if medium_count + complex_count > len(levels) / 2:
        return "Medium"
    return "Simple"


# =============================================================================
# Organizer
# =============================================================================


class LibraryOrganizer:
    """Organizes components into a LibraryStructure.

    Example:
        >>> organizer = LibraryOrganizer()
        >>> library = organizer.organize(definitions, components)
        >>> [c.name for c in library.categories]
        ['Buttons', 'Typography']
    """

    def __init__(self, name: str | None = None, version: str | None = None):
        self.name = get_environment(EnvVar.LIBRARY_NAME, override=name)
        self.version = get_environment(EnvVar.LIBRARY_VERSION, override=version)

    def organize(
        self,
        definitions: Sequence[ReusableWidgetDefinition],
        components: Sequence[ComponentDefinition] | None = None,
    ) -> LibraryStructure:
        """Build the library for definitions and their components.

        ``components`` pairs with ``definitions`` by position; when omitted,
        components are built with a fresh ComponentAssembler.
        """
        if components is None:
            assembler = ComponentAssembler()
            components = [assembler.build_component(d) for d in definitions]
        if len(components) != len(definitions):
            raise ValueError("Each definition needs exactly one component")

        buckets: dict[str, list[tuple[ReusableWidgetDefinition, ComponentDefinition]]] = {}
        metadata: dict[str, ComponentMetadata] = {}
        for definition, component in zip(definitions, components):
            category = categorize(definition)
            buckets.setdefault(category, []).append((definition, component))
            metadata[component.id] = self.document(definition, component, category)

        categories = [self._category(name, pairs) for name, pairs in buckets.items()]
        categories.sort(key=lambda c: c.priority)

        library = LibraryStructure(
            name=self.name,
            version=self.version,
            categories=categories,
            components=metadata,
        )
        library.pages = self.build_pages(library)
        library.cover_page = self.build_cover_page(library)
        logger.info(
            "Organized %d components into %d categories",
            len(metadata),
            len(categories),
        )
        return library

    def _category(
        self, name: str, pairs: list[tuple[ReusableWidgetDefinition, ComponentDefinition]]
    ) -> Category:
        definitions = [d for d, _ in pairs]
        usage = sum(d.usage_count for d in definitions)
        return Category(
            name=name,
            description=CATEGORY_DESCRIPTIONS.get(name, f"{name} components"),
            icon=category_icon(name),
            priority=category_priority(name),
            components=[c.name for _, c in pairs],
            groups=self.build_groups(c for _, c in pairs),
            metadata=CategoryMetadata(
                component_count=len(pairs),
                average_usage=round(usage / len(pairs)) if pairs else 0,
                complexity=_category_complexity([assess_complexity(d) for d in definitions]),
            ),
        )

    @staticmethod
    def build_groups(components: Iterable[ComponentDefinition]) -> list[ComponentGroup]:
        """Group components by name and split each group by variant count."""
        grouped: dict[str, list[ComponentDefinition]] = {}
        for component in components:
            grouped.setdefault(determine_group(component.name), []).append(component)

        groups = []
        for name, members in grouped.items():
            with_variants = [c.name for c in members if len(c.variants) > 1]
            simple = [c.name for c in members if len(c.variants) <= 1]
            sub_groups = []
            if with_variants:
                sub_groups.append(SubGroup(name="With Variants", components=with_variants))
            if simple:
                sub_groups.append(SubGroup(name="Simple Components", components=simple))
            plural = "" if len(members) == 1 else "s"
            groups.append(
                ComponentGroup(
                    name=name,
                    description=f"{name} group containing {len(members)} component{plural}",
                    components=[c.name for c in members],
                    sub_groups=sub_groups,
                )
            )
        groups.sort(key=lambda g: _group_order(g.name))
        return groups

    @staticmethod
    def document(
        definition: ReusableWidgetDefinition, component: ComponentDefinition, category: str
    ) -> ComponentMetadata:
        complexity = assess_complexity(definition)
        parts = [
            f"{component.name} component generated from {definition.type} widget.",
            f"Used {definition.usage_count} times in the codebase.",
        ]
        if len(component.variants) > 1:
            parts.append(f"Available in {len(component.variants)} variants.")
        if component.properties:
            parts.append(f"Configurable with {len(component.properties)} properties.")
        parts.append(f"Complexity: {complexity}.")
        return ComponentMetadata(
            name=component.name,
            component_id=component.id,
            category=category,
            tags=generate_tags(definition),
            usage_count=definition.usage_count,
            complexity=complexity,
            examples=generate_examples(definition),
            documentation=" ".join(parts),
        )

    # -------------------------------------------------------------------------
    # Pages
    # -------------------------------------------------------------------------

    @staticmethod
    def build_pages(library: LibraryStructure) -> list[Page]:
        pages = [
            Page(
                name="📚 Library Overview",
                description="Overview of all components in the library",
                sections=[
                    PageSection(
                        name="Getting Started",
                        description="How to use this component library",
                    )
                ],
            )
        ]
        for category in library.categories:
            pages.append(
                Page(
                    name=f"{category.icon} {category.name}",
                    description=category.description,
                    sections=[
                        PageSection(
                            name=group.name,
                            description=group.description,
                            components=list(group.components),
                        )
                        for group in category.groups
                    ],
                )
            )
        pages.append(
            Page(
                name="🔧 Utilities",
                description="Utility components and helpers",
                sections=[
                    PageSection(name="Icons", description="Icon components and placeholders")
                ],
            )
        )
        return pages

    @staticmethod
    def build_cover_page(library: LibraryStructure) -> CoverPage:
        return CoverPage(
            title=library.name,
            description=library.description,
            stats={
                "totalComponents": library.total_components,
                "totalCategories": len(library.categories),
                "version": library.version,
            },
            quick_links=[
                QuickLink(
                    name=c.name,
                    description=c.description,
                    component_count=c.metadata.component_count,
                )
                for c in library.categories
            ],
        )


__all__ = [
    "LibraryOrganizer",
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
    "assess_complexity",
    "categorize",
    "determine_group",
    "category_priority",
    "category_icon",
    "generate_tags",
    "generate_examples",
    "CATEGORY_PRIORITY",
    "CATEGORY_ICONS",
    "CATEGORY_DESCRIPTIONS",
]
