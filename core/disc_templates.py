"""Starting shapes for the three disc families."""
from __future__ import annotations

from dataclasses import dataclass

from core.profile_model import DEFAULT_PROFILE_LAYOUT, PointIdGenerator, ProfilePoint, profile_from_layout


@dataclass(frozen=True)
class DiscTemplate:
    key: str
    title: str
    hints: tuple[str, ...]
    layout: tuple[tuple[float, float, bool], ...]


PUTTER_LAYOUT = (
    (0.0, -14.0, True), (35.0, -14.0, False), (70.0, -13.5, False),
    (92.0, -12.5, True), (100.0, -12.14, False), (105.19, -11.0, False),
    (105.97, -4.0, True), (106.36, -0.5, False), (102.72, 6.0, False),
    (100.25, 6.0, True), (98.0, 6.0, False), (97.0, 6.8, False),
    (96.0, 6.8, True), (96.0, 3.0, False), (96.0, -2.0, False),
    (96.0, -5.0, True), (65.0, -10.0, False), (30.0, -11.5, False),
)

DRIVER_LAYOUT = (
    (0.0, -10.0, True), (35.0, -10.0, False), (65.0, -9.5, False),
    (85.0, -8.5, True), (95.0, -8.0, False), (104.88, -4.0, False),
    (105.48, -1.0, True), (105.72, 0.2, False), (103.48, 4.0, False),
    (101.96, 4.0, True), (95.0, 4.0, False), (88.0, 4.6, False),
    (85.5, 4.6, True), (85.5, 2.0, False), (85.5, -1.5, False),
    (85.5, -3.5, True), (55.0, -6.5, False), (25.0, -8.0, False),
)

TEMPLATES: dict[str, DiscTemplate] = {
    "putter": DiscTemplate(
        key="putter",
        title="Putter (Putt & Approach)",
        hints=(
            "Deep dish, tall profile: the bulkiest of the three.",
            "Narrow blunt rim (~0.9-1.2 cm), rounded outer edge.",
            "High drag, low speed. Flies straight at low velocity and resists skipping.",
            "Built for accuracy and chain-grabbing.",
            "Often thrown at max weight (170-175 g) for stability and momentum.",
        ),
        layout=PUTTER_LAYOUT,
    ),
    "mid": DiscTemplate(
        key="mid",
        title="Mid-Range",
        hints=(
            "Shallower than a putter, with enough depth for good glide.",
            "Moderate rim (~1.2-1.5 cm), beveled but relatively dull.",
            "Versatile. Holds release angle and relies on glide for distance.",
            "The multi-tool when in doubt.",
            "Often max weight (up to 180 g) for stable, predictable flight.",
        ),
        layout=DEFAULT_PROFILE_LAYOUT,
    ),
    "driver": DiscTemplate(
        key="driver",
        title="Driver (Fairway & Distance)",
        hints=(
            "Very shallow, streamlined: slices through the air.",
            "Wide to aggressively wide rim (1.6-2.5+ cm), sharp bevel.",
            "Needs arm speed and spin to generate lift; slow throws dump hard.",
            "Built for distance (and locating deep brush).",
            "Weight often 150-175 g. Lighter for speed, heavier for wind.",
        ),
        layout=DRIVER_LAYOUT,
    ),
}

TEMPLATE_KEYS: tuple[str, ...] = tuple(TEMPLATES)


def template_profile(key: str, id_generator: PointIdGenerator | None = None) -> list[ProfilePoint]:
    """Fresh point list for template *key*; raises ``KeyError`` for unknown keys."""
    return profile_from_layout(TEMPLATES[key].layout, id_generator)
