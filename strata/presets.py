"""
Indian forest-type presets.

Six fixed configurations based on India's forest classification system.
Each preset supplies default controls, a color palette and descriptive
characteristics. Selecting a preset replaces the active controls with
the preset's values; user edits are discarded, not merged.
"""

from strata.config import (
    ForestCharacteristics,
    ForestControls,
    ForestPalette,
    ForestPreset,
    SourceRef,
)

CLEARIAS = SourceRef(
    name="ClearIAS - Types of Forests in India",
    url="https://www.clearias.com/types-of-forests/",
)
ISFR = SourceRef(
    name="India State of Forest Report (ISFR)",
    url="https://fsi.nic.in/isfr-2021",
)

# Long-form preset text, markdown formatted for the info panel
WET_EVERGREEN_DETAIL = """\
Tropical Wet Evergreen forests are characterized by their extremely dense, multilayered canopy structure. These forests receive very high annual rainfall (200-300 cm), creating a humid, lush environment.

**Visual Characteristics:**
- Very tall trees (up to 60m) with dense, overlapping canopies
- High canopy cover (90%) creating deep shade below
- Rich, dark green foliage throughout all layers
- Moderate understory vegetation due to limited light penetration
- Thick leaf litter on the forest floor

**Ecological Features:**
- Highest biodiversity among Indian forests
- Trees remain green year-round (evergreen)
- High humidity and stable temperatures
- Complex vertical stratification with distinct layers
- Home to many endemic species"""

SEMI_EVERGREEN_DETAIL = """\
Tropical Semi-Evergreen forests represent a transition zone between evergreen and deciduous forests. They feature a mix of tree species, some retaining leaves year-round while others shed seasonally.

**Visual Characteristics:**
- Tall trees with moderately dense canopy (75% cover)
- Mix of dark green (evergreen) and seasonal foliage
- More light penetration than wet evergreen forests
- Moderate understory growth
- Varied canopy structure with some gaps

**Ecological Features:**
- Intermediate rainfall (150-250 cm/year)
- Combination of evergreen and deciduous species
- High biodiversity with transitional species
- Seasonal variation in canopy density
- Supports both tropical and subtropical species"""

MOIST_DECIDUOUS_DETAIL = """\
Tropical Moist Deciduous forests are the most extensive forest type in India. These forests experience seasonal changes, with trees shedding leaves during the dry season and regrowing them during monsoon.

**Visual Characteristics:**
- Medium to tall trees with moderate canopy density (65% cover)
- Seasonal leaf shedding creates varying canopy appearance
- More open structure allows greater light penetration
- Dense understory vegetation thrives with increased sunlight
- Lighter green tones compared to evergreen forests

**Ecological Features:**
- Moderate rainfall (100-200 cm/year) with distinct wet and dry seasons
- Trees shed leaves in dry season to conserve water
- High biodiversity with many commercially valuable species (teak, sal)
- Supports diverse wildlife including large mammals
- Most extensive forest type covering large areas of India"""

DRY_DECIDUOUS_DETAIL = """\
Tropical Dry Deciduous forests have an open, sparse canopy structure adapted to lower rainfall conditions. These forests experience significant seasonal variation.

**Visual Characteristics:**
- Open canopy with only 45% cover, allowing abundant sunlight
- Medium-height trees with sparse distribution
- Light green to yellowish foliage, especially in dry season
- Sparse understory with drought-resistant plants
- More visible ground with less leaf litter

**Ecological Features:**
- Lower rainfall (50-100 cm/year) with long dry seasons
- Trees shed leaves for extended periods to conserve water
- Adapted to semi-arid conditions
- Moderate biodiversity with drought-tolerant species
- Important for grazing and supports various wildlife"""

THORN_DETAIL = """\
Tropical Thorn Forests are characterized by extremely sparse vegetation adapted to arid and semi-arid conditions. These are the driest forest ecosystems in India.

**Visual Characteristics:**
- Very sparse canopy with only 25% cover
- Short, stunted trees with thorny branches
- Light brown to tan colored vegetation
- Minimal understory - mostly bare ground
- Wide spacing between trees with abundant sunlight

**Ecological Features:**
- Very low rainfall (less than 50 cm/year)
- Extreme drought adaptation with water-conserving features
- Thorny plants to deter herbivores
- Low to moderate biodiversity
- Adapted to high temperatures and water scarcity
- Important for desert ecosystems and grazing"""

MONTANE_DETAIL = """\
Montane Forests are found at higher elevations and show diverse characteristics that vary with altitude. These forests experience cooler temperatures and high moisture levels.

**Visual Characteristics:**
- Tall trees with moderate to dense canopy (70% cover)
- Mix of coniferous (pine, fir) and broadleaf species
- Dark green, often bluish-green coniferous foliage
- Moderate understory with mosses and ferns
- Distinct vertical stratification based on elevation

**Ecological Features:**
- High altitude locations (Himalayas, Nilgiris)
- Cooler temperatures and high moisture/humidity
- Diverse species composition varying with elevation
- High biodiversity with many endemic species
- Important for water catchment and climate regulation
- Supports unique alpine and subalpine ecosystems"""

FOREST_PRESETS: tuple[ForestPreset, ...] = (
    ForestPreset(
        id="tropical-wet-evergreen",
        name="Tropical Wet Evergreen",
        short_name="Wet Evergreen",
        description="Dense, multilayered canopy with high rainfall (200-300 cm/year)",
        detailed_description=WET_EVERGREEN_DETAIL,
        location="Western Ghats, Northeastern states, Andaman & Nicobar",
        canopy_cover=90,
        lai=7.5,
        light_penetration=60,
        sun_angle=75,
        canopy_gaps=3,
        tree_types=("tall", "very-tall", "dense"),
        palette=ForestPalette(
            trunk="#4A3728", canopy="#1A5F1A", understory="#2D5016", floor="#3D5F1F"
        ),
        characteristics=ForestCharacteristics(
            tree_height="very-tall",
            density="very-dense",
            understory="moderate",
            biodiversity="very-high",
        ),
        sources=(
            CLEARIAS,
            SourceRef(
                name="Ministry of Environment, Forest and Climate Change, India",
                url="https://moef.gov.in/",
            ),
        ),
        image_queries=(
            "dense tropical evergreen forest India Western Ghats",
            "tall rainforest trees multilayered canopy India",
        ),
    ),
    ForestPreset(
        id="tropical-semi-evergreen",
        name="Tropical Semi-Evergreen",
        short_name="Semi-Evergreen",
        description=(
            "Mix of evergreen and deciduous species, "
            "intermediate rainfall (150-250 cm/year)"
        ),
        detailed_description=SEMI_EVERGREEN_DETAIL,
        location="Western Ghats, Odisha, Andaman & Nicobar",
        canopy_cover=75,
        lai=6.0,
        light_penetration=65,
        sun_angle=70,
        canopy_gaps=5,
        tree_types=("tall", "medium", "mixed"),
        palette=ForestPalette(
            trunk="#5D4E37", canopy="#2D5016", understory="#3D5F1F", floor="#4A6741"
        ),
        characteristics=ForestCharacteristics(
            tree_height="tall",
            density="dense",
            understory="moderate",
            biodiversity="high",
        ),
        sources=(CLEARIAS, ISFR),
        image_queries=(
            "semi evergreen forest India mixed species",
            "tropical forest canopy gaps light penetration",
        ),
    ),
    ForestPreset(
        id="tropical-moist-deciduous",
        name="Tropical Moist Deciduous",
        short_name="Moist Deciduous",
        description=(
            "Most extensive forest type, moderate rainfall (100-200 cm/year), "
            "trees shed leaves in dry season"
        ),
        detailed_description=MOIST_DECIDUOUS_DETAIL,
        location="Eastern India, Himalayan foothills, Central India",
        canopy_cover=65,
        lai=5.0,
        light_penetration=70,
        sun_angle=65,
        canopy_gaps=8,
        tree_types=("medium", "tall", "sparse"),
        palette=ForestPalette(
            trunk="#6B4423", canopy="#3D5F1F", understory="#4A6741", floor="#556B2F"
        ),
        characteristics=ForestCharacteristics(
            tree_height="medium-tall",
            density="moderate",
            understory="dense",
            biodiversity="high",
        ),
        sources=(
            CLEARIAS,
            SourceRef(
                name="Jagran Josh - Types of Forests in India",
                url=(
                    "https://www.jagranjosh.com/general-knowledge/"
                    "types-of-forests-in-india-1440149324-1"
                ),
            ),
        ),
        image_queries=(
            "teak sal forest India deciduous monsoon",
            "moist deciduous forest understory dense vegetation",
        ),
    ),
    ForestPreset(
        id="tropical-dry-deciduous",
        name="Tropical Dry Deciduous",
        short_name="Dry Deciduous",
        description="Open canopy, lower rainfall (50-100 cm/year), seasonal leaf shedding",
        detailed_description=DRY_DECIDUOUS_DETAIL,
        location="Deccan Plateau, Gangetic plains",
        canopy_cover=45,
        lai=3.5,
        light_penetration=80,
        sun_angle=60,
        canopy_gaps=12,
        tree_types=("medium", "short", "sparse"),
        palette=ForestPalette(
            trunk="#8B6F47", canopy="#556B2F", understory="#6B8E23", floor="#8FBC8F"
        ),
        characteristics=ForestCharacteristics(
            tree_height="medium",
            density="sparse",
            understory="sparse",
            biodiversity="moderate",
        ),
        sources=(
            SourceRef(
                name="Wikipedia - Central Deccan Plateau Dry Deciduous Forests",
                url=(
                    "https://en.wikipedia.org/wiki/"
                    "Central_Deccan_Plateau_dry_deciduous_forests"
                ),
            ),
            CLEARIAS,
        ),
        image_queries=(
            "dry deciduous forest India open canopy sparse",
            "Deccan Plateau forest seasonal leaf shedding",
        ),
    ),
    ForestPreset(
        id="tropical-thorn",
        name="Tropical Thorn Forests",
        short_name="Thorn Forests",
        description="Sparse vegetation adapted to drought, rainfall less than 50 cm/year",
        detailed_description=THORN_DETAIL,
        location="Rajasthan, Gujarat, Haryana, Punjab",
        canopy_cover=25,
        lai=1.5,
        light_penetration=95,
        sun_angle=55,
        canopy_gaps=15,
        tree_types=("short", "sparse", "thorny"),
        palette=ForestPalette(
            trunk="#A0826D", canopy="#8B7355", understory="#9C8B7A", floor="#D2B48C"
        ),
        characteristics=ForestCharacteristics(
            tree_height="short",
            density="very-sparse",
            understory="very-sparse",
            biodiversity="low-moderate",
        ),
        sources=(CLEARIAS, ISFR),
        image_queries=(
            "thorn forest Rajasthan sparse vegetation desert",
            "arid forest India drought adapted trees",
        ),
    ),
    ForestPreset(
        id="montane",
        name="Montane Forests",
        short_name="Montane",
        description="Diverse vertical stratification, varied with altitude, high moisture",
        detailed_description=MONTANE_DETAIL,
        location="Himalayas, Nilgiris",
        canopy_cover=70,
        lai=5.5,
        light_penetration=65,
        sun_angle=50,
        canopy_gaps=6,
        tree_types=("tall", "coniferous", "mixed"),
        palette=ForestPalette(
            trunk="#5D4E37", canopy="#2F5233", understory="#3D5A3D", floor="#4A6741"
        ),
        characteristics=ForestCharacteristics(
            tree_height="tall",
            density="moderate-dense",
            understory="moderate",
            biodiversity="high",
        ),
        sources=(
            SourceRef(name="Wikipedia - Shola Forests", url="https://en.wikipedia.org/wiki/Shola"),
            ISFR,
        ),
        image_queries=(
            "montane forest Himalayas coniferous pine",
            "mountain forest Nilgiris elevation mosses ferns",
        ),
    ),
)

_PRESETS_BY_ID: dict[str, ForestPreset] = {p.id: p for p in FOREST_PRESETS}


def resolve_preset(preset_id: str | None) -> ForestPreset | None:
    """
    Look up a preset by identifier.

    Args:
        preset_id: Preset identifier, e.g. "tropical-thorn"

    Returns:
        The matching ForestPreset, or None when the id is unknown
    """
    if preset_id is None:
        return None
    return _PRESETS_BY_ID.get(preset_id)


def default_preset() -> ForestPreset:
    """The preset selected at startup (Tropical Wet Evergreen)."""
    return FOREST_PRESETS[0]


def preset_ids() -> list[str]:
    """Preset identifiers in table order."""
    return [p.id for p in FOREST_PRESETS]


def apply_preset(preset_id: str, current: ForestControls) -> ForestControls:
    """
    Controls to use after selecting a preset.

    A known preset overwrites all five control fields with its stored
    defaults. An unknown id leaves the current controls in place.
    """
    preset = resolve_preset(preset_id)
    if preset is None:
        return current
    return preset.controls()
