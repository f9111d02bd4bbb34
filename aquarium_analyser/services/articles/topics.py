"""Static table of the algae topics the article pipeline can serve."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Topic(str, Enum):
    """Algae article topic, keyed by its route segment."""

    BLACK_BEARD_ALGAE = "black-beard-algae"
    HAIR_ALGAE = "hair-algae"
    GREEN_WATER_ALGAE = "green-water-algae"


@dataclass(frozen=True, slots=True)
class FallbackSection:
    """One canned section of the static fallback article."""

    heading: str
    paragraphs: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class TopicProfile:
    """Immutable per-topic metadata used for scraping and templating."""

    topic: Topic
    source_path: str
    display_name: str
    short_name: str
    file_slug: str
    headline: str
    description: str
    intro_clause: str
    fallback_sections: tuple[FallbackSection, ...]

    def source_url(self, origin: str) -> str:
        return f"{origin.rstrip('/')}{self.source_path}"


_PROFILES: dict[Topic, TopicProfile] = {
    Topic.BLACK_BEARD_ALGAE: TopicProfile(
        topic=Topic.BLACK_BEARD_ALGAE,
        source_path="/blogs/algae/black-beard-algae",
        display_name="Black Beard Algae",
        short_name="BBA",
        file_slug="bba",
        headline="How to Control Black Beard Algae (BBA) in Planted Aquariums",
        description=(
            "Learn effective methods to eliminate and prevent Black Beard Algae "
            "in your planted aquarium with this comprehensive guide."
        ),
        intro_clause=(
            "also known as brush algae, is one of the most stubborn and common "
            "problems in planted aquariums"
        ),
        fallback_sections=(
            FallbackSection(
                "What Is Black Beard Algae?",
                (
                    "Black Beard Algae is a red algae (Rhodophyta) that grows in dense, "
                    "dark tufts on hardscape, plant edges and equipment. It feels coarse "
                    "to the touch and clings tightly to whatever it grows on.",
                ),
            ),
            FallbackSection(
                "What Causes Black Beard Algae?",
                (
                    "Unstable or insufficient CO2 is the most common trigger. Poor flow, "
                    "infrequent maintenance and organic waste build-up give BBA the "
                    "conditions it needs to establish itself.",
                ),
            ),
            FallbackSection(
                "How to Remove Black Beard Algae",
                (
                    "Trim affected leaves and scrub hardscape during water changes. Spot "
                    "treat stubborn patches with liquid carbon or diluted hydrogen "
                    "peroxide with the filter switched off, then restore flow.",
                    "Siamese algae eaters and Amano shrimp will graze on softened BBA "
                    "once it starts to die back.",
                ),
            ),
            FallbackSection(
                "How to Prevent Black Beard Algae",
                (
                    "Keep CO2 injection stable throughout the photoperiod, maintain good "
                    "flow to every corner of the tank and keep up with weekly water "
                    "changes and filter maintenance.",
                ),
            ),
        ),
    ),
    Topic.HAIR_ALGAE: TopicProfile(
        topic=Topic.HAIR_ALGAE,
        source_path="/blogs/algae/hair-algae",
        display_name="Hair Algae",
        short_name="hair algae",
        file_slug="hair-algae",
        headline="How to Get Rid of Hair Algae in Planted Aquariums",
        description=(
            "Discover what causes Hair Algae in planted tanks and the proven steps "
            "to remove it and keep it from coming back."
        ),
        intro_clause=(
            "the long, filamentous green strands that tangle around plants and "
            "hardscape, is a frequent sign of imbalance in planted aquariums"
        ),
        fallback_sections=(
            FallbackSection(
                "What Is Hair Algae?",
                (
                    "Hair Algae is a catch-all name for filamentous green algae such as "
                    "Cladophora, Rhizoclonium and Spirogyra. It forms fine threads that "
                    "can quickly smother slow-growing plants.",
                ),
            ),
            FallbackSection(
                "What Causes Hair Algae?",
                (
                    "Excess light relative to CO2 and nutrients, nutrient deficiencies in "
                    "fast-growing plants and newly set up tanks that have not yet "
                    "stabilised all encourage Hair Algae.",
                ),
            ),
            FallbackSection(
                "How to Remove Hair Algae",
                (
                    "Pull out as much of the algae as possible by hand or with a "
                    "toothbrush, then follow up with large water changes. Amano shrimp "
                    "are effective at clearing the remaining strands.",
                ),
            ),
            FallbackSection(
                "How to Prevent Hair Algae",
                (
                    "Balance lighting intensity and duration with CO2 and fertilisation, "
                    "keep plant mass high and avoid sudden changes to your routine.",
                ),
            ),
        ),
    ),
    Topic.GREEN_WATER_ALGAE: TopicProfile(
        topic=Topic.GREEN_WATER_ALGAE,
        source_path="/blogs/algae/green-water",
        display_name="Green Water Algae",
        short_name="green water",
        file_slug="green-water",
        headline="How to Clear Green Water Algae in Your Aquarium",
        description=(
            "Understand why Green Water Algae blooms happen and how to clear cloudy "
            "green aquarium water for good."
        ),
        intro_clause=(
            "a bloom of free-floating single-celled algae that turns the whole tank "
            "cloudy and green, is one of the most frustrating problems for aquarists"
        ),
        fallback_sections=(
            FallbackSection(
                "What Is Green Water Algae?",
                (
                    "Green Water Algae is a bloom of suspended phytoplankton, usually "
                    "Euglena or Chlorella. The cells are small enough to pass straight "
                    "through mechanical filtration.",
                ),
            ),
            FallbackSection(
                "What Causes Green Water Algae?",
                (
                    "Ammonia spikes, disturbed substrate, overfeeding and strong light "
                    "in immature tanks are the usual triggers for a green water bloom.",
                ),
            ),
            FallbackSection(
                "How to Remove Green Water Algae",
                (
                    "A UV sterilizer clears most blooms within days. A multi-day "
                    "blackout combined with water changes, or fine filter floss, also "
                    "works when a UV unit is not available.",
                ),
            ),
            FallbackSection(
                "How to Prevent Green Water Algae",
                (
                    "Avoid overfeeding, keep ammonia at zero, limit disturbance of "
                    "nutrient-rich substrates and keep a healthy mass of growing plants.",
                ),
            ),
        ),
    ),
}


def get_topic_profile(topic: Topic | str) -> TopicProfile:
    """Return the profile for a topic enum or its route segment."""
    return _PROFILES[Topic(topic)]


def all_topic_profiles() -> list[TopicProfile]:
    return list(_PROFILES.values())
