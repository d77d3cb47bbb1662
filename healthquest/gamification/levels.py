"""
Default Level Catalogue

Five themed levels, each bundling physical and mindfulness challenges.
Only level 1 starts unlocked.
"""

from typing import List

from healthquest.models.level import (
    Level,
    LevelTheme,
    MindfulnessChallenge,
    MindfulnessType,
    PhysicalChallenge,
)
from healthquest.models.user import ActivityType


def create_default_levels() -> List[Level]:
    """Build a fresh catalogue (new challenge ids on every call)"""
    return [
        # ========== LEVEL 1: FOREST ==========
        Level(
            number=1,
            title="Forest Awakening",
            description="Begin your journey in the mystical Enchanted Forest",
            theme=LevelTheme.FOREST,
            required_experience=0,
            physical_challenges=[
                PhysicalChallenge(
                    title="Nature Walk",
                    description="Take 5,000 steps",
                    activity_type=ActivityType.WALKING,
                    target_value=5000,
                    unit="steps",
                ),
                PhysicalChallenge(
                    title="Forest Energy",
                    description="Burn 150 calories",
                    activity_type=ActivityType.CARDIO,
                    target_value=150,
                    unit="calories",
                ),
            ],
            mindfulness_challenges=[],
            rewards=["Forest Explorer Badge", "100 XP", "New Avatar Outfit"],
            is_unlocked=True,
        ),

        # ========== LEVEL 2: MOUNTAIN ==========
        Level(
            number=2,
            title="Mountain Climb",
            description="Ascend the challenging Mystic Mountains",
            theme=LevelTheme.MOUNTAIN,
            required_experience=500,
            physical_challenges=[
                PhysicalChallenge(
                    title="Mountain Hike",
                    description="Walk 8,000 steps",
                    activity_type=ActivityType.WALKING,
                    target_value=8000,
                    unit="steps",
                ),
                PhysicalChallenge(
                    title="Strength Training",
                    description="Complete strength exercises",
                    activity_type=ActivityType.STRENGTH,
                    target_value=30,
                    unit="minutes",
                ),
            ],
            mindfulness_challenges=[
                MindfulnessChallenge(
                    title="Peak Meditation",
                    description="Meditate on the mountain peak",
                    duration=10,
                    type=MindfulnessType.MEDITATION,
                ),
            ],
            rewards=["Mountain Conqueror Badge", "200 XP", "Mountain Theme Unlock"],
        ),

        # ========== LEVEL 3: OCEAN ==========
        Level(
            number=3,
            title="Ocean Depths",
            description="Dive into the mysterious Crystal Ocean",
            theme=LevelTheme.OCEAN,
            required_experience=1200,
            physical_challenges=[
                PhysicalChallenge(
                    title="Swimming Adventure",
                    description="Complete swimming workout",
                    activity_type=ActivityType.SWIMMING,
                    target_value=45,
                    unit="minutes",
                ),
                PhysicalChallenge(
                    title="Ocean Endurance",
                    description="Burn 300 calories",
                    activity_type=ActivityType.CARDIO,
                    target_value=300,
                    unit="calories",
                ),
            ],
            mindfulness_challenges=[
                MindfulnessChallenge(
                    title="Ocean Visualization",
                    description="Visualize peaceful ocean waves",
                    duration=15,
                    type=MindfulnessType.VISUALIZATION,
                ),
            ],
            rewards=["Ocean Explorer Badge", "300 XP", "Underwater Avatar"],
        ),

        # ========== LEVEL 4: DESERT ==========
        Level(
            number=4,
            title="Desert Journey",
            description="Cross the vast Golden Desert",
            theme=LevelTheme.DESERT,
            required_experience=2000,
            physical_challenges=[
                PhysicalChallenge(
                    title="Desert Marathon",
                    description="Walk 12,000 steps",
                    activity_type=ActivityType.WALKING,
                    target_value=12000,
                    unit="steps",
                ),
                PhysicalChallenge(
                    title="Yoga Practice",
                    description="Complete yoga session",
                    activity_type=ActivityType.YOGA,
                    target_value=60,
                    unit="minutes",
                ),
            ],
            mindfulness_challenges=[
                MindfulnessChallenge(
                    title="Desert Gratitude",
                    description="Practice gratitude meditation",
                    duration=20,
                    type=MindfulnessType.GRATITUDE,
                ),
            ],
            rewards=["Desert Wanderer Badge", "400 XP", "Desert Theme Unlock"],
        ),

        # ========== LEVEL 5: CITY ==========
        Level(
            number=5,
            title="Future City",
            description="Explore the technological marvels of the Future City",
            theme=LevelTheme.CITY,
            required_experience=3000,
            physical_challenges=[
                PhysicalChallenge(
                    title="City Cycling",
                    description="Complete cycling workout",
                    activity_type=ActivityType.CYCLING,
                    target_value=90,
                    unit="minutes",
                ),
                PhysicalChallenge(
                    title="Urban Energy",
                    description="Burn 500 calories",
                    activity_type=ActivityType.CARDIO,
                    target_value=500,
                    unit="calories",
                ),
            ],
            mindfulness_challenges=[
                MindfulnessChallenge(
                    title="Future Meditation",
                    description="Meditate on possibilities",
                    duration=25,
                    type=MindfulnessType.MEDITATION,
                ),
            ],
            rewards=["Future Explorer Badge", "500 XP", "Cyberpunk Avatar", "Master Achievement"],
        ),
    ]
