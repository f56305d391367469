"""
Reference data for the four forest strata.

Descriptive content shown alongside the model: where each layer sits,
its typical conditions, representative species and ecological role.
`top` and `height` give the layer's vertical band in the scene as a
percentage of canvas height.
"""

from dataclasses import dataclass

from strata.config import CANOPY, EMERGENT, FOREST_FLOOR, UNDERSTORY


@dataclass(frozen=True)
class LayerInfo:
    """Static description of one forest layer."""

    id: str
    name: str
    position: str
    conditions: str
    trees: tuple[str, ...]
    fauna: tuple[str, ...]
    role: str
    typical_light: str  # Typical share of full sunlight, for display
    biodiversity_share: str  # Share of forest species living here
    temperature: str
    humidity: str
    top: float  # Band start, % of canvas height
    height: float  # Band height, % of canvas height
    image_queries: tuple[str, ...] = ()

    @property
    def bottom(self) -> float:
        return self.top + self.height


FOREST_LAYERS: tuple[LayerInfo, ...] = (
    LayerInfo(
        id=EMERGENT,
        name="Emergent Layer",
        position="Tallest trees (up to 60m), above canopy",
        conditions="Intense sunlight, strong winds, dry air",
        trees=("Kapok", "Brazil nut"),
        fauna=("Eagles", "Macaws", "Butterflies", "Bats"),
        role=(
            "Seed dispersal, primary sunlight interceptors, "
            "first responders to wind/storm stress"
        ),
        typical_light="95-100%",
        biodiversity_share="10%",
        temperature="Warm",
        humidity="Low",
        top=0.0,
        height=15.0,
        image_queries=("kapok tree rainforest", "eagle in flight rainforest"),
    ),
    LayerInfo(
        id=CANOPY,
        name="Canopy",
        position="Continuous overlapping tree crowns (30-45m)",
        conditions="Blocks ~95% sunlight, defines availability below",
        trees=("Various broadleaf trees",),
        fauna=("Monkeys", "Toucans", "Insects", "Epiphytes"),
        role=(
            "Intercepts rainfall, regulates temp/evaporation, "
            "primary carbon absorption/photosynthesis site"
        ),
        typical_light="70-95%",
        biodiversity_share="50%",
        temperature="Moderate",
        humidity="Medium",
        top=15.0,
        height=30.0,
        image_queries=("dense rainforest canopy", "toucan rainforest"),
    ),
    LayerInfo(
        id=UNDERSTORY,
        name="Understory",
        position="10-20m",
        conditions="Dim light (~5-10%)",
        trees=("Shrubs", "Vines", "Saplings"),
        fauna=("Frogs", "Snakes", "Leopards", "Jaguars"),
        role="Transition zone, supports climbing species, secondary growth",
        typical_light="5-10%",
        biodiversity_share="30%",
        temperature="Cool",
        humidity="High",
        top=45.0,
        height=25.0,
        image_queries=("jungle undergrowth", "frog on leaf rainforest"),
    ),
    LayerInfo(
        id=FOREST_FLOOR,
        name="Forest Floor",
        position="Ground level (0-10m)",
        conditions="Almost dark (~2%), high humidity, thick leaf litter",
        trees=("Fungi", "Mosses", "Seedlings"),
        fauna=("Tapirs", "Anteaters", "Insects", "Worms"),
        role="Nutrient cycling, seed germination, detritivore hotspot",
        typical_light="1-2%",
        biodiversity_share="10%",
        temperature="Cool",
        humidity="Very High",
        top=70.0,
        height=30.0,
        image_queries=("forest floor litter", "anteater rainforest"),
    ),
)

_LAYERS_BY_ID = {layer.id: layer for layer in FOREST_LAYERS}


def get_layer(layer_id: str) -> LayerInfo | None:
    """Layer description by id, or None if unknown."""
    return _LAYERS_BY_ID.get(layer_id)
